"""Sudoku generator and solvers graded by the techniques a human would need."""

from .core import SudokuBoard, Difficulty
from .exceptions import (
    SudokuError,
    InvalidInputError,
    ConstraintViolationError,
    SolvingError,
    SolverTimeoutError,
    GenerationExhaustedError,
)
from .solvers import ExhaustiveSolver, HeuristicSolver, DeductiveSolver
from .generator import SudokuGenerator

__version__ = "1.0.0"

__all__ = [
    "SudokuBoard",
    "Difficulty",
    "SudokuError",
    "InvalidInputError",
    "ConstraintViolationError",
    "SolvingError",
    "SolverTimeoutError",
    "GenerationExhaustedError",
    "ExhaustiveSolver",
    "HeuristicSolver",
    "DeductiveSolver",
    "SudokuGenerator",
]
