"""Unit tests for the benchmark and its charts."""

import json
import os

import matplotlib
matplotlib.use("Agg")

import pytest
from tiered_sudoku.benchmark import Benchmark, BenchmarkResult, Visualizer, default_solvers
from tiered_sudoku.core.board import SudokuBoard
from tiered_sudoku.core.difficulty import Difficulty
from tiered_sudoku.solvers import ExhaustiveSolver, DeductiveSolver


SOLUTION_1 = "123456789456789123789123456214365897365897214897214365531642978642978531978531642"

EASY = "0" * 9 + SOLUTION_1[9:]
NORMAL = "451902000000806005000700120062000347014000000000023006506347090000000674200009000"


@pytest.fixture
def puzzles():
    return {
        "easy": [SudokuBoard.from_string(EASY)],
        "normal": [SudokuBoard.from_string(NORMAL)],
    }


@pytest.fixture
def benchmark(puzzles):
    bench = Benchmark(puzzles=puzzles, time_limit_ms=10000)
    bench.run(show_progress=False)
    return bench


class TestBenchmark:

    def test_default_solvers(self):
        solvers = default_solvers(500)
        assert list(solvers) == ["Exhaustive", "Heuristic", "Deductive"]
        assert solvers["Heuristic"].max_solutions == 2
        assert solvers["Deductive"].difficulty is Difficulty.VERY_HARD
        assert all(s.time_limit_ms == 500 for s in solvers.values())

    def test_runs_every_solver_on_every_puzzle(self, benchmark):
        assert len(benchmark.results) == 2 * 3
        assert {r.algorithm for r in benchmark.results} == {"Exhaustive", "Heuristic", "Deductive"}
        assert all(r.solved for r in benchmark.results)

    def test_records_technique_counters(self, benchmark):
        deductive = [r for r in benchmark.results if r.algorithm == "Deductive"]
        easy = next(r for r in deductive if r.difficulty == "easy")
        assert easy.extra["basic_solves"] == 1
        assert easy.extra["implied_difficulty"] == "easy"
        assert easy.clues == 72

    def test_heuristic_reports_uniqueness(self, benchmark):
        heuristic = [r for r in benchmark.results if r.algorithm == "Heuristic"]
        assert all(r.solutions == 1 for r in heuristic)

    def test_summary(self, benchmark):
        summary = benchmark.get_summary()
        assert summary["total_puzzles"] == 2
        assert summary["difficulties"] == ["easy", "normal"]
        assert summary["results_by_algorithm"]["Deductive"]["total_tested"] == 2
        assert summary["results_by_difficulty"]["easy"]["Exhaustive"]["accuracy"] == 100

    def test_timeout_is_recorded(self, puzzles):
        bench = Benchmark(
            puzzles=puzzles,
            solvers={"Exhaustive": ExhaustiveSolver(time_limit_ms=0)},
        )
        results = bench.run(show_progress=False)

        assert len(results) == 2
        assert all(not r.solved for r in results)
        assert all(r.extra["error"] == "Timeout" for r in results)

    def test_unsolved_is_not_an_error(self):
        bench = Benchmark(
            puzzles={"hard": [SudokuBoard()]},
            solvers={"Deductive": DeductiveSolver(Difficulty.VERY_HARD)},
        )
        result = bench.run(show_progress=False)[0]
        assert not result.solved
        assert "error" not in result.extra

    def test_save_results(self, benchmark, tmp_path):
        benchmark.save_results(str(tmp_path))

        with open(tmp_path / "benchmark_results.json") as f:
            rows = json.load(f)
        assert len(rows) == 6
        assert "memory_mb" in rows[0]

        with open(tmp_path / "benchmark_summary.json") as f:
            assert json.load(f)["solvers_tested"] == ["Exhaustive", "Heuristic", "Deductive"]

        assert os.path.exists(tmp_path / "puzzles" / "easy" / "puzzle_easy_1.txt")

    def test_result_to_dict(self):
        result = BenchmarkResult(
            puzzle_id=0, difficulty="easy", algorithm="Heuristic", solved=True,
            solutions=1, time_seconds=0.5, memory_bytes=1024 * 1024, iterations=3,
            backtracks=0, nodes_explored=2, extra={"basic_solves": 4},
        )
        data = result.to_dict()
        assert data["memory_mb"] == 1.0
        assert data["basic_solves"] == 4


class TestVisualizer:

    def test_generate_all(self, benchmark, tmp_path):
        visualizer = Visualizer(benchmark.results, str(tmp_path))
        charts = visualizer.generate_all()

        names = [os.path.basename(c) for c in charts]
        assert names == [
            "time_comparison.png",
            "time_by_difficulty.png",
            "solve_rate.png",
            "memory_comparison.png",
            "technique_usage.png",
        ]
        for chart in charts:
            assert os.path.getsize(chart) > 0

    def test_difficulties_in_tier_order(self, benchmark, tmp_path):
        visualizer = Visualizer(list(reversed(benchmark.results)), str(tmp_path))
        assert visualizer.difficulties == ["easy", "normal"]

    def test_no_technique_chart_without_counters(self, benchmark, tmp_path):
        results = [r for r in benchmark.results if r.algorithm != "Deductive"]
        visualizer = Visualizer(results, str(tmp_path))
        assert visualizer.plot_technique_usage() is None

    def test_summary_table(self, benchmark, tmp_path):
        path = Visualizer(benchmark.results, str(tmp_path)).generate_summary_table()
        with open(path) as f:
            content = f.read()
        assert content.startswith("# Benchmark Summary")
        assert "| Deductive | 100.0% |" in content


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
