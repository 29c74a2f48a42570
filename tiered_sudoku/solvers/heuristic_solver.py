"""Backtracking solver ordered by the number of candidates left in each cell."""

from __future__ import annotations
import logging
from typing import List, Optional, Tuple

from .base_solver import BaseSolver, DEFAULT_TIME_LIMIT_MS
from .techniques import has_contradiction, propagate
from ..core.board import SudokuBoard
from ..core.proposal import CellProposal

log = logging.getLogger(__name__)

Placement = Tuple[int, int, int]


class HeuristicSolver(BaseSolver):
    """
    Sudoku solver using the Minimum Remaining Values heuristic.

    Features:
    - Optional deductive acceleration: basic elimination and box locked
      candidates shrink every branch before it is expanded.
    - Branching on the most constrained cell, digits in ascending order.
    - Duplicate solutions reached through different branches are recorded
      once.

    Solution order is not meant to be reproducible across versions; use
    :class:`ExhaustiveSolver` for that. With ``max_solutions=2`` this is the
    uniqueness check used by the generator.
    """

    name = "Heuristic MRV"

    def __init__(
        self,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        max_solutions: int = 1,
        use_deductive_acceleration: bool = True,
        track_memory: bool = False,
    ):
        """
        Args:
            time_limit_ms: Wall-clock budget of one solve call in milliseconds.
            max_solutions: Stop once this many distinct solutions are found.
            use_deductive_acceleration: Run basic elimination and box locked
                candidates before expanding each branch.
            track_memory: Record peak memory with tracemalloc.
        """
        super().__init__(time_limit_ms, max_solutions, track_memory)
        self.use_deductive_acceleration = use_deductive_acceleration

    def _solve(self) -> int:
        return self._search(self.board, None)

    def _search(self, parent: SudokuBoard, placement: Optional[Placement]) -> int:
        """
        Expand one branch.

        Args:
            parent: Board of the parent branch. Never modified.
            placement: (row, col, value) to place before expanding, or None
                for the root.

        Returns:
            Number of new solutions found below this branch.
        """
        self._check_deadline()
        self.stats.iterations += 1

        if len(self.solutions) >= self.max_solutions:
            return 0

        board = parent.copy()

        if placement is not None:
            row, col, value = placement
            if not board.is_possible(row, col, value):
                return 0
            board.set(row, col, value)

        if self.use_deductive_acceleration:
            propagate(board)
            if has_contradiction(board):
                self.stats.backtracks += 1
                return 0

        if board.is_complete():
            return self._record(board)

        proposals = self._proposals(board)
        if proposals is None:
            self.stats.backtracks += 1
            return 0

        # The digits of one cell cover every completion of this board, so
        # the most constrained cell is the only one that needs expanding.
        best = proposals[0]
        self.stats.nodes_explored += 1
        found = 0
        failures = 0
        for value in best.values:
            result = self._search(board, (best.row, best.col, value))
            found += result
            if len(self.solutions) >= self.max_solutions:
                return found
            if result == 0:
                failures += 1
                if failures == best.count:
                    self.stats.backtracks += 1
                    return 0
        return found

    def _record(self, board: SudokuBoard) -> int:
        for solution in self.solutions:
            if solution.is_same(board):
                return 0
        self.solutions.append(board)
        log.debug("Solution %d found", len(self.solutions))
        return 1

    @staticmethod
    def _proposals(board: SudokuBoard) -> Optional[List[CellProposal]]:
        """
        Proposals for every empty cell, most constrained first.

        Returns None if an empty cell has no candidate left.
        """
        proposals = []
        for row, col in board.get_empty_cells():
            values = tuple(board.candidates(row, col))
            if not values:
                return None
            proposals.append(CellProposal(len(values), row, col, values))
        proposals.sort()
        return proposals
