"""Validation utilities for Sudoku puzzles."""

from __future__ import annotations
from typing import TYPE_CHECKING, Optional

from .difficulty import Difficulty

if TYPE_CHECKING:
    from .board import SudokuBoard


def is_valid_placement(board: SudokuBoard, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) is valid.

    Only the placed values are consulted, not the tracked candidates.

    Args:
        board: The Sudoku board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to board.size).

    Returns:
        True if the placement is valid.
    """
    if value < 1 or value > board.size:
        return False

    # Check row
    if value in board.get_row(row):
        return False

    # Check column
    if value in board.get_col(col):
        return False

    # Check box
    if value in board.get_box(row, col):
        return False

    return True


def is_valid_board(board: SudokuBoard) -> bool:
    """
    Check if the entire board state is valid (no conflicts).

    Args:
        board: The Sudoku board to validate.

    Returns:
        True if no constraints are violated.
    """
    return board.is_valid()


def count_solutions(board: SudokuBoard, limit: int = 2, time_limit_ms: int = 10000) -> int:
    """
    Count the number of solutions for a puzzle (up to limit).

    Uses the heuristic solver, which stops early once limit is reached.

    Args:
        board: The puzzle board.
        limit: Maximum solutions to count before stopping.
        time_limit_ms: Time budget; SolverTimeoutError propagates.

    Returns:
        Number of solutions found (up to limit).
    """
    from ..solvers.heuristic_solver import HeuristicSolver

    solutions, _ = HeuristicSolver(time_limit_ms=time_limit_ms, max_solutions=limit).solve(board)
    return len(solutions)


def has_unique_solution(board: SudokuBoard, time_limit_ms: int = 10000) -> bool:
    """
    Check if a puzzle has exactly one solution.

    Args:
        board: The puzzle board.

    Returns:
        True if the puzzle has exactly one solution.
    """
    return count_solutions(board, limit=2, time_limit_ms=time_limit_ms) == 1


def validate_solution(puzzle: SudokuBoard, solution: SudokuBoard) -> bool:
    """
    Validate that a solution correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed solution.

    Returns:
        True if solution is valid and matches puzzle clues.
    """
    if puzzle.size != solution.size:
        return False

    # Check that solution respects original clues
    for i in range(puzzle.size):
        for j in range(puzzle.size):
            if not puzzle.is_empty(i, j):
                if puzzle.get(i, j) != solution.get(i, j):
                    return False

    # Check that solution is complete and valid
    return solution.is_solved()


def classify_difficulty(board: SudokuBoard, time_limit_ms: int = 10000) -> Optional[Difficulty]:
    """
    Technique tier a puzzle needs, found by running the deductive solver with
    every technique enabled.

    Returns:
        The tier, or None if the techniques alone cannot solve the puzzle.
    """
    from ..solvers.deductive_solver import DeductiveSolver

    solver = DeductiveSolver(Difficulty.VERY_HARD, time_limit_ms=time_limit_ms)
    solver.solve(board)
    return solver.implied_difficulty()
