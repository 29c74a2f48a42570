"""Solver that imitates a human applying techniques of increasing difficulty."""

from __future__ import annotations
import logging
from typing import Optional

from .base_solver import BaseSolver, DEFAULT_TIME_LIMIT_MS
from .techniques import (
    solve_basic,
    solve_box_locked_candidates,
    solve_line_locked_candidates,
    solve_x_wing_and_skyscraper,
)
from ..core.difficulty import Difficulty

log = logging.getLogger(__name__)


class DeductiveSolver(BaseSolver):
    """
    Human-style solver used to grade puzzles.

    Every loop tries the cheapest technique first and only escalates when
    everything below it stalls:

    1. basic elimination (always enabled),
    2. locked candidates, box form then line form (HARD and above),
    3. X-Wing / Skyscraper (VERY_HARD).

    The loop ends solved once the grid is complete, or unsolved once no
    enabled technique makes progress. At EASY the solver also gives up after
    more than ``Difficulty.EASY.max_basic_solves`` basic passes. The counters
    record how often each tier was needed and feed
    :meth:`Difficulty.classify`.

    If the puzzle carries a ``solution``, every forced value is checked
    against it and a mismatch raises SolvingError.
    """

    name = "Deductive"

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.NORMAL,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        track_memory: bool = False,
    ):
        """
        Args:
            difficulty: Highest technique tier the solver may use.
            time_limit_ms: Wall-clock budget of one solve call in milliseconds.
            track_memory: Record peak memory with tracemalloc.
        """
        super().__init__(time_limit_ms, 1, track_memory)
        self.difficulty = difficulty
        self.basic_solves = 0
        self.locked_candidates_solves = 0
        self.advanced_solves = 0
        self.loops = 0

    def _reset(self) -> None:
        self.basic_solves = 0
        self.locked_candidates_solves = 0
        self.advanced_solves = 0
        self.loops = 0

    def _solve(self) -> int:
        board = self.board
        solution = board.solution
        basic_limit = self.difficulty.max_basic_solves
        allow_locked = self.difficulty >= Difficulty.HARD
        allow_advanced = self.difficulty >= Difficulty.VERY_HARD

        while True:
            self._check_deadline()
            self.loops += 1
            self.stats.iterations = self.loops
            log.debug("In loop: %d", self.loops)

            progress = solve_basic(board, solution) > 0
            if progress:
                self.basic_solves += 1

            if not progress and allow_locked:
                log.debug("Using locked candidates in boxes")
                if solve_box_locked_candidates(board) > 0:
                    progress = True
                    self.locked_candidates_solves += 1

            if not progress and allow_locked:
                log.debug("Using locked candidates in rows and columns")
                if solve_line_locked_candidates(board) > 0:
                    progress = True
                    self.locked_candidates_solves += 1

            if not progress and allow_advanced:
                log.debug("Using X-Wing and Skyscraper")
                if solve_x_wing_and_skyscraper(board) > 0:
                    progress = True
                    self.advanced_solves += 1

            if basic_limit is not None and self.basic_solves > basic_limit:
                log.debug("Gave up after %d basic passes", self.basic_solves)
                return 0

            if board.is_complete():
                self.solutions.append(board)
                log.debug("Solved in %d loops (%d, %d, %d)", self.loops,
                          self.basic_solves, self.locked_candidates_solves,
                          self.advanced_solves)
                return 1

            if not progress:
                log.debug("Stalled after %d loops with %d empty cells",
                          self.loops, board.count_empty())
                return 0

    def _finalize_stats(self) -> None:
        self.stats.extra.update({
            "difficulty": self.difficulty.value,
            "basic_solves": self.basic_solves,
            "locked_candidates_solves": self.locked_candidates_solves,
            "advanced_solves": self.advanced_solves,
        })
        implied = self.implied_difficulty()
        if implied is not None:
            self.stats.extra["implied_difficulty"] = implied.value

    def implied_difficulty(self) -> Optional[Difficulty]:
        """
        Tier implied by the technique counters of the last solve, or None if
        the puzzle was not solved.
        """
        if not self.solutions:
            return None
        return Difficulty.classify(
            self.basic_solves, self.locked_candidates_solves, self.advanced_solves
        )
