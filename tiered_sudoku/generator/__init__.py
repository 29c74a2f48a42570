"""Generator module for creating Sudoku puzzles."""

from .generator import SudokuGenerator
from ..core.difficulty import Difficulty

__all__ = ["SudokuGenerator", "Difficulty"]
