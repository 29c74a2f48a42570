"""Core module for Sudoku board representation and validation."""

from .board import SudokuBoard
from .proposal import CellProposal
from .difficulty import Difficulty
from .validator import (
    is_valid_placement,
    is_valid_board,
    count_solutions,
    has_unique_solution,
    validate_solution,
    classify_difficulty,
)

__all__ = [
    "SudokuBoard",
    "CellProposal",
    "Difficulty",
    "is_valid_placement",
    "is_valid_board",
    "count_solutions",
    "has_unique_solution",
    "validate_solution",
    "classify_difficulty",
]
