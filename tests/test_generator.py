"""Unit tests for puzzle generator."""

import os

import pytest
from tiered_sudoku.core.board import SudokuBoard
from tiered_sudoku.core.validator import has_unique_solution, validate_solution
from tiered_sudoku.exceptions import GenerationExhaustedError
from tiered_sudoku.generator import SudokuGenerator, Difficulty
from tiered_sudoku.generator.generator import INITIAL_CLUES
from tiered_sudoku.solvers import DeductiveSolver, HeuristicSolver


def assert_exact_tier(puzzle, difficulty):
    """The tier solves the puzzle and the tier below does not."""
    solver = DeductiveSolver(difficulty)
    solutions, _ = solver.solve(puzzle)
    assert len(solutions) == 1
    assert solver.implied_difficulty() is difficulty

    below = difficulty.below()
    if below is not None:
        assert DeductiveSolver(below).solve(puzzle)[0] == []


class TestSudokuGenerator:
    """Tests for SudokuGenerator class."""

    def test_generate_creates_valid_puzzle(self):
        """Test that generated puzzles are valid."""
        generator = SudokuGenerator(seed=42)
        puzzle = generator.generate(Difficulty.EASY)

        assert puzzle.is_valid()
        assert puzzle.count_empty() > 0
        assert puzzle.count_filled() > 0
        assert puzzle.puzzle_id == "easy-1"

    def test_solution_is_attached(self):
        generator = SudokuGenerator(seed=42)
        puzzle = generator.generate(Difficulty.EASY)

        assert puzzle.solution is not None
        assert puzzle.solution.is_solved()
        assert validate_solution(puzzle, puzzle.solution)

    def test_generated_puzzle_is_unique(self):
        generator = SudokuGenerator(seed=3)
        puzzle = generator.generate(Difficulty.EASY)

        solutions, _ = HeuristicSolver(max_solutions=2).solve(puzzle)
        assert len(solutions) == 1
        assert solutions[0] == puzzle.solution
        assert has_unique_solution(puzzle)

    def test_same_seed_same_puzzle(self):
        first = SudokuGenerator(seed=11).generate(Difficulty.EASY)
        second = SudokuGenerator(seed=11).generate(Difficulty.EASY)
        assert first.to_string() == second.to_string()

    def test_easy_tier(self):
        puzzle = SudokuGenerator(seed=5).generate(Difficulty.EASY)
        assert_exact_tier(puzzle, Difficulty.EASY)

    def test_normal_tier(self):
        puzzle = SudokuGenerator(seed=5, max_attempts=200).generate(Difficulty.NORMAL)
        assert_exact_tier(puzzle, Difficulty.NORMAL)

    def test_hard_tier(self):
        puzzle = SudokuGenerator(seed=5, max_attempts=500).generate(Difficulty.HARD)
        assert_exact_tier(puzzle, Difficulty.HARD)

    def test_harder_tiers_have_fewer_clues(self):
        """Easy puzzles stop reducing early, so they keep more clues."""
        generator = SudokuGenerator(seed=42, max_attempts=200)

        easy = generator.generate(Difficulty.EASY)
        normal = generator.generate(Difficulty.NORMAL)

        assert easy.count_filled() > normal.count_filled()

    def test_generate_with_solution(self):
        """Test generating puzzle with solution."""
        generator = SudokuGenerator(seed=42)
        puzzle, solution = generator.generate_with_solution(Difficulty.EASY)

        assert puzzle.is_valid()
        assert solution.is_solved()
        assert puzzle.solution is solution

        # Verify puzzle is subset of solution
        for i in range(puzzle.size):
            for j in range(puzzle.size):
                if not puzzle.is_empty(i, j):
                    assert puzzle.get(i, j) == solution.get(i, j)

    def test_generate_batch(self):
        """Test batch generation."""
        generator = SudokuGenerator(seed=42)
        puzzles = generator.generate_batch(3, Difficulty.EASY)

        assert len(puzzles) == 3
        assert [p.puzzle_id for p in puzzles] == ["easy-1", "easy-2", "easy-3"]
        for puzzle in puzzles:
            assert puzzle.is_valid()

    def test_random_filled_board(self):
        board = SudokuGenerator(seed=1).random_filled_board()
        assert board.is_solved()
        assert board.count_filled() == 81

    def test_random_clues(self):
        board = SudokuGenerator(seed=1)._random_clues()
        assert board.count_filled() == INITIAL_CLUES
        assert board.is_valid()
        values = [v for v in board.grid.flatten().tolist() if v]
        # Digits are cycled in ascending order: 1..9 then 1..8
        assert sorted(values) == sorted(list(range(1, 10)) + list(range(1, 9)))


class TestAttemptBudget:

    def test_exhausted(self, monkeypatch):
        monkeypatch.setattr(SudokuGenerator, "_accept", lambda self, puzzle, difficulty: False)
        generator = SudokuGenerator(seed=1, max_attempts=2)

        with pytest.raises(GenerationExhaustedError):
            generator.generate(Difficulty.EASY)
        assert generator.attempts == 2

    def test_accepts_after_rejections(self, monkeypatch):
        verdicts = iter([False, False, True])
        monkeypatch.setattr(SudokuGenerator, "_accept",
                            lambda self, puzzle, difficulty: next(verdicts))
        generator = SudokuGenerator(seed=1, max_attempts=3)

        puzzle = generator.generate(Difficulty.EASY)
        assert generator.attempts == 3
        assert puzzle.solution is not None

    def test_uncompletable_clues_use_up_the_budget(self):
        generator = SudokuGenerator(seed=1, time_limit_ms=0, max_attempts=3)

        with pytest.raises(GenerationExhaustedError):
            generator.generate(Difficulty.EASY)
        assert generator.attempts == 3

    def test_filled_board_respects_budget(self):
        generator = SudokuGenerator(seed=1, time_limit_ms=0, max_attempts=2)
        with pytest.raises(GenerationExhaustedError):
            generator.random_filled_board()

    def test_rejects_invalid_budget(self):
        with pytest.raises(ValueError):
            SudokuGenerator(max_attempts=0)

    def test_exhaustion_is_runtime_error(self, monkeypatch):
        monkeypatch.setattr(SudokuGenerator, "_accept", lambda self, puzzle, difficulty: False)
        with pytest.raises(RuntimeError):
            SudokuGenerator(seed=1, max_attempts=1).generate(Difficulty.EASY)


class TestSaveToFolder:

    def test_writes_one_file_per_puzzle(self, tmp_path):
        puzzles = SudokuGenerator(seed=42).generate_batch(2, Difficulty.EASY)
        folder = tmp_path / "easy"

        SudokuGenerator.save_to_folder(puzzles, str(folder), prefix="puzzle_easy")

        files = sorted(os.listdir(folder))
        assert files == ["puzzle_easy_1.txt", "puzzle_easy_2.txt"]
        content = (folder / "puzzle_easy_1.txt").read_text()
        assert content.startswith(puzzles[0].to_string())
        assert "Solution:" in content
        assert puzzles[0].solution.to_string() in content

    def test_puzzle_without_solution(self, tmp_path):
        SudokuGenerator.save_to_folder([SudokuBoard()], str(tmp_path))
        content = (tmp_path / "puzzle_1.txt").read_text()
        assert "Solution:" not in content


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
