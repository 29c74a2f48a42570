"""Error types raised by boards, solvers and the generator."""

from __future__ import annotations


class SudokuError(Exception):
    """Base class for all errors raised by this package."""


class InvalidInputError(SudokuError, ValueError):
    """Out-of-range coordinate or value, or a malformed puzzle source."""


class ConstraintViolationError(SudokuError, ValueError):
    """A value was placed where the tracked possibilities do not allow it."""

    def __init__(self, row: int, col: int, value: int):
        super().__init__(f"Cell [{row}][{col}] can not have value ({value})")
        self.row = row
        self.col = col
        self.value = value


class SolvingError(SudokuError):
    """
    A technique tried to force a value that contradicts the attached solution.

    This points at an inconsistent branch or a propagation bug, never at a
    normal search outcome.
    """


class SolverTimeoutError(SudokuError, TimeoutError):
    """The wall-clock deadline of a solve attempt was exceeded."""


class GenerationExhaustedError(SudokuError, RuntimeError):
    """The generator used up its attempt budget without accepting a puzzle."""
