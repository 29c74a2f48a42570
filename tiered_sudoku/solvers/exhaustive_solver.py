"""Deterministic depth-first solver that walks the cells in row-major order."""

from __future__ import annotations

from .base_solver import BaseSolver
from ..core.board import SudokuBoard

N = SudokuBoard.SIZE
CELLS = N * N


class ExhaustiveSolver(BaseSolver):
    """
    Depth-First Search solver using recursive backtracking.

    Cells are visited from (0, 0) along each row, and each empty cell tries
    the digits still possible for it in ascending order. Every branch works
    on its own copy of the board. For a given puzzle the solutions are
    therefore always found in the same order, which makes this solver the
    reference for counting and enumerating solutions.
    """

    name = "Exhaustive DFS"

    def _solve(self) -> int:
        """Solve using DFS with backtracking."""
        return self._backtrack(self.board, 0)

    def _backtrack(self, board: SudokuBoard, index: int) -> int:
        """
        Recursive backtracking over cell index 0..80.

        Returns the number of solutions recorded so far.
        """
        self._check_deadline()
        self.stats.iterations += 1

        if len(self.solutions) >= self.max_solutions:
            return len(self.solutions)

        if index >= CELLS:
            self.solutions.append(board)
            return len(self.solutions)

        row, col = divmod(index, N)

        # Filled cells are never modified below, so no copy is needed.
        if board.grid[row, col] != 0:
            return self._backtrack(board, index + 1)

        self.stats.nodes_explored += 1
        for value in board.candidates(row, col):
            next_board = board.copy()
            next_board.set(row, col, value)

            if self._backtrack(next_board, index + 1) >= self.max_solutions:
                return len(self.solutions)

            self.stats.backtracks += 1

        return len(self.solutions)
