"""Benchmarking framework for comparing Sudoku solvers."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional
import json
import logging
import os

from tqdm import tqdm

from ..core.board import SudokuBoard
from ..core.difficulty import Difficulty
from ..exceptions import SolverTimeoutError, SudokuError
from ..generator import SudokuGenerator
from ..solvers import BaseSolver, ExhaustiveSolver, HeuristicSolver, DeductiveSolver
from ..solvers.base_solver import DEFAULT_TIME_LIMIT_MS

log = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    puzzle_id: int
    difficulty: str
    algorithm: str
    solved: bool
    solutions: int
    time_seconds: float
    memory_bytes: int
    iterations: int
    backtracks: int
    nodes_explored: int
    clues: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "difficulty": self.difficulty,
            "algorithm": self.algorithm,
            "solved": self.solved,
            "solutions": self.solutions,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "memory_mb": self.memory_bytes / (1024 * 1024),
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "clues": self.clues,
            **self.extra
        }


def default_solvers(time_limit_ms: int = DEFAULT_TIME_LIMIT_MS) -> Dict[str, BaseSolver]:
    """The three solvers, each configured the way it is normally used."""
    return {
        "Exhaustive": ExhaustiveSolver(time_limit_ms=time_limit_ms, max_solutions=1,
                                       track_memory=True),
        "Heuristic": HeuristicSolver(time_limit_ms=time_limit_ms, max_solutions=2,
                                     track_memory=True),
        "Deductive": DeductiveSolver(Difficulty.VERY_HARD, time_limit_ms=time_limit_ms,
                                     track_memory=True),
    }


class Benchmark:
    """
    Benchmark framework for comparing Sudoku solving algorithms.

    Runs every solver on generated (or supplied) puzzles of each tier and
    collects performance metrics and technique counters.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        solvers: Optional[Dict[str, BaseSolver]] = None,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        seed: Optional[int] = None,
        puzzles: Optional[Dict[str, List[SudokuBoard]]] = None,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            solvers: Dict of solver_name -> solver_instance (default: all three).
            time_limit_ms: Time budget per puzzle per solver.
            seed: Random seed for reproducibility.
            puzzles: Puzzles keyed by difficulty value. Skips generation.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.time_limit_ms = time_limit_ms
        self.seed = seed
        self.solvers = solvers if solvers is not None else default_solvers(time_limit_ms)
        self.puzzles: Dict[str, List[SudokuBoard]] = dict(puzzles) if puzzles else {}
        self.results: List[BenchmarkResult] = []

    def generate_puzzles(self) -> None:
        """Generate all puzzles for benchmarking."""
        generator = SudokuGenerator(seed=self.seed, time_limit_ms=self.time_limit_ms)

        log.info("Generating puzzles...")
        for difficulty in tqdm(self.difficulties, desc="Difficulties"):
            self.puzzles[difficulty.value] = generator.generate_batch(
                self.puzzles_per_difficulty,
                difficulty
            )

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Run the full benchmark suite.

        Returns:
            List of BenchmarkResult objects.
        """
        if not self.puzzles:
            self.generate_puzzles()

        self.results = []

        total_tests = (
            sum(len(puzzles) for puzzles in self.puzzles.values()) *
            len(self.solvers)
        )

        pbar = tqdm(total=total_tests, desc="Benchmarking", disable=not show_progress)

        for difficulty_name, puzzles in self.puzzles.items():
            for puzzle_id, puzzle in enumerate(puzzles):
                for solver_name, solver in self.solvers.items():
                    result = self._run_single(
                        puzzle, puzzle_id, difficulty_name, solver_name, solver
                    )
                    self.results.append(result)
                    pbar.update(1)

        pbar.close()
        return self.results

    def _run_single(
        self,
        puzzle: SudokuBoard,
        puzzle_id: int,
        difficulty: str,
        solver_name: str,
        solver: BaseSolver
    ) -> BenchmarkResult:
        """Run a single solver on a single puzzle."""
        try:
            _, stats = solver.solve(puzzle)
        except SolverTimeoutError:
            log.warning("%s timed out on %s puzzle %d", solver_name, difficulty, puzzle_id)
            error = "Timeout"
        except SudokuError as e:
            log.warning("%s failed on %s puzzle %d: %s", solver_name, difficulty, puzzle_id, e)
            error = str(e)
        else:
            return BenchmarkResult(
                puzzle_id=puzzle_id,
                difficulty=difficulty,
                algorithm=solver_name,
                solved=stats.solved,
                solutions=stats.solutions,
                time_seconds=stats.time_seconds,
                memory_bytes=stats.memory_bytes,
                iterations=stats.iterations,
                backtracks=stats.backtracks,
                nodes_explored=stats.nodes_explored,
                clues=puzzle.count_filled(),
                extra=dict(stats.extra)
            )

        stats = solver.stats
        return BenchmarkResult(
            puzzle_id=puzzle_id,
            difficulty=difficulty,
            algorithm=solver_name,
            solved=False,
            solutions=stats.solutions,
            time_seconds=stats.time_seconds,
            memory_bytes=stats.memory_bytes,
            iterations=stats.iterations,
            backtracks=stats.backtracks,
            nodes_explored=stats.nodes_explored,
            clues=puzzle.count_filled(),
            extra={"error": error}
        )

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results) // max(len(self.solvers), 1),
            "solvers_tested": list(self.solvers.keys()),
            "difficulties": list(self.puzzles.keys()),
            "results_by_algorithm": {},
            "results_by_difficulty": {}
        }

        # Group by algorithm
        for solver_name in self.solvers:
            solver_results = [r for r in self.results if r.algorithm == solver_name]
            if solver_results:
                solved = [r for r in solver_results if r.solved]
                times = [r.time_seconds for r in solver_results]
                memory = [r.memory_bytes for r in solver_results]

                summary["results_by_algorithm"][solver_name] = {
                    "accuracy": len(solved) / len(solver_results) * 100,
                    "avg_time_seconds": sum(times) / len(times),
                    "max_time_seconds": max(times),
                    "min_time_seconds": min(times),
                    "avg_memory_mb": sum(memory) / len(memory) / (1024 * 1024),
                    "total_solved": len(solved),
                    "total_tested": len(solver_results)
                }

        # Group by difficulty
        for difficulty in self.puzzles:
            diff_results = [r for r in self.results if r.difficulty == difficulty]
            if not diff_results:
                continue
            by_solver = {}
            for solver_name in self.solvers:
                solver_diff_results = [r for r in diff_results if r.algorithm == solver_name]
                if solver_diff_results:
                    solved = [r for r in solver_diff_results if r.solved]
                    times = [r.time_seconds for r in solver_diff_results]

                    by_solver[solver_name] = {
                        "accuracy": len(solved) / len(solver_diff_results) * 100,
                        "avg_time_seconds": sum(times) / len(times),
                        "solved": len(solved),
                        "tested": len(solver_diff_results)
                    }
            summary["results_by_difficulty"][difficulty] = by_solver

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        # Save raw results as JSON
        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        # Save summary
        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        # Save puzzles by difficulty
        puzzles_dir = os.path.join(output_dir, "puzzles")
        os.makedirs(puzzles_dir, exist_ok=True)

        for difficulty, puzzles in self.puzzles.items():
            diff_dir = os.path.join(puzzles_dir, difficulty)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty}")

        log.info("Results and puzzles saved to %s", output_dir)
