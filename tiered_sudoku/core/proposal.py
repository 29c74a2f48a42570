"""Search proposals used by the possibility-ordered solver."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True, order=True)
class CellProposal:
    """
    An empty cell together with the digits it still allows.

    Proposals sort by number of candidates first, then by row and column, so
    the most constrained cell comes first.
    """
    count: int
    row: int
    col: int
    values: Tuple[int, ...] = field(compare=False)

    def is_possible(self, value: int) -> bool:
        return value in self.values

    def __str__(self) -> str:
        digits = ",".join(str(v) for v in self.values)
        return f"CellProposal [{self.row}][{self.col}] ({self.count}) [{digits}]"
