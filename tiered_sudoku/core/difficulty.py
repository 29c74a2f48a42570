"""Technique tiers used to grade puzzles."""

from __future__ import annotations
from enum import Enum
from typing import Optional


class Difficulty(Enum):
    """
    Difficulty levels for Sudoku puzzles, ordered by the techniques they need.

    - EASY: basic elimination only, finished within a few passes.
    - NORMAL: basic elimination only, but more passes.
    - HARD: needs locked candidates.
    - VERY_HARD: needs X-Wing or Skyscraper eliminations.
    """
    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"
    VERY_HARD = "very_hard"

    @property
    def level(self) -> int:
        """Numeric rank, 1 (easy) to 4 (very hard)."""
        return _LEVELS[self]

    @property
    def max_basic_solves(self) -> Optional[int]:
        """Most basic-elimination passes a puzzle of this tier may need."""
        return EASY_BASIC_SOLVES_LIMIT if self is Difficulty.EASY else None

    @property
    def label(self) -> str:
        return self.value.replace("_", " ")

    def below(self) -> Optional[Difficulty]:
        """The tier immediately below this one, or None for EASY."""
        ordered = list(Difficulty)
        index = ordered.index(self)
        return ordered[index - 1] if index > 0 else None

    @classmethod
    def classify(cls, basic_solves: int, locked_candidates: int,
                 advanced_solves: int) -> Difficulty:
        """Tier implied by the technique counters of a finished deductive solve."""
        if advanced_solves > 0:
            return cls.VERY_HARD
        if locked_candidates > 0:
            return cls.HARD
        if basic_solves > EASY_BASIC_SOLVES_LIMIT:
            return cls.NORMAL
        return cls.EASY

    def __lt__(self, other: Difficulty) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.level < other.level

    def __le__(self, other: Difficulty) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.level <= other.level

    def __gt__(self, other: Difficulty) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.level > other.level

    def __ge__(self, other: Difficulty) -> bool:
        if not isinstance(other, Difficulty):
            return NotImplemented
        return self.level >= other.level


EASY_BASIC_SOLVES_LIMIT = 5

_LEVELS = {
    Difficulty.EASY: 1,
    Difficulty.NORMAL: 2,
    Difficulty.HARD: 3,
    Difficulty.VERY_HARD: 4,
}
