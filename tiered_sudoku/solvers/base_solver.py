"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple
import logging
import time
import tracemalloc

from ..core.board import SudokuBoard
from ..exceptions import SolverTimeoutError

log = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT_MS = 10000


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    solutions: int = 0
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Algorithm-specific metrics
    backtracks: int = 0
    nodes_explored: int = 0

    # Additional metadata
    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "solutions": self.solutions,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """
    Abstract base class for Sudoku solvers.

    A solver is configured once and then attached to a puzzle by
    :meth:`solve`. It works on its own copy of the puzzle (``board``) and
    keeps another untouched copy (``original``). Errors raised while solving,
    including timeouts, propagate to the caller; solutions found before the
    error stay available in ``solutions``.
    """

    name: str = "BaseSolver"

    def __init__(
        self,
        time_limit_ms: int = DEFAULT_TIME_LIMIT_MS,
        max_solutions: int = 1,
        track_memory: bool = False,
    ):
        """
        Args:
            time_limit_ms: Wall-clock budget of one solve call in milliseconds.
            max_solutions: Stop once this many solutions are recorded.
            track_memory: Record peak memory with tracemalloc (slow).
        """
        if max_solutions < 1:
            raise ValueError(f"max_solutions must be at least 1, got {max_solutions}")
        self.time_limit_ms = time_limit_ms
        self.max_solutions = max_solutions
        self.track_memory = track_memory

        self.board: Optional[SudokuBoard] = None
        self.original: Optional[SudokuBoard] = None
        self.solutions: List[SudokuBoard] = []
        self.stats = SolverStats(algorithm=self.name)
        self._time_start = 0.0
        self._deadline = 0.0

    def solve(self, board: SudokuBoard) -> Tuple[List[SudokuBoard], SolverStats]:
        """
        Solve a Sudoku puzzle with timing (and optional memory) tracking.

        Args:
            board: The puzzle to solve. It is not modified.

        Returns:
            Tuple of (solutions found, stats).

        Raises:
            SolverTimeoutError: The time limit was exceeded.
            SolvingError: A technique contradicted the attached solution.
        """
        self.board = board.copy()
        self.original = board.copy()
        self.solutions = []
        self.stats = SolverStats(algorithm=self.name)
        self._reset()

        if self.track_memory:
            tracemalloc.start()

        self._time_start = time.perf_counter()
        self._deadline = self._time_start + self.time_limit_ms / 1000.0
        log.debug("%s started on %s", self.name, self.board.puzzle_id)

        try:
            self._solve()
        finally:
            self.stats.time_seconds = time.perf_counter() - self._time_start
            self.stats.solutions = len(self.solutions)
            self.stats.solved = bool(self.solutions)
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak
            self._finalize_stats()

        log.debug("%s finished with %d solution(s) in %.4fs",
                  self.name, len(self.solutions), self.stats.time_seconds)
        return self.solutions, self.stats

    @abstractmethod
    def _solve(self) -> int:
        """
        Internal solve method to be implemented by subclasses.

        Works on ``self.board`` and records results in ``self.solutions``.

        Returns:
            The number of solutions found.
        """
        pass

    def _reset(self) -> None:
        """Reset per-run state before a solve. Subclasses extend this."""

    def _finalize_stats(self) -> None:
        """Copy solver-specific counters into the stats. Subclasses extend this."""

    def _check_deadline(self) -> None:
        if time.perf_counter() > self._deadline:
            raise SolverTimeoutError(
                f"{self.name} exceeded its time limit of {self.time_limit_ms} ms"
            )

    @property
    def first_solution(self) -> Optional[SudokuBoard]:
        return self.solutions[0] if self.solutions else None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(solutions={len(self.solutions)})"
