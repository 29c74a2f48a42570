"""
Elimination techniques shared by the heuristic and deductive solvers.

Every function works in place on a :class:`SudokuBoard` and returns the number
of changes it made (values placed or candidates removed), so callers can tell
whether a technique made progress.

Techniques, cheapest first:

- Basic elimination: a digit that fits in only one cell of a box, row or
  column goes there.
- Locked candidates (box form): a digit confined to one row or column of a
  box is removed from the rest of that row or column.
- Locked candidates (line form): a digit confined to one box within a row or
  column is removed from the rest of that box.
- X-Wing / Skyscraper: two rows (or columns) holding a digit in exactly two
  cells each, sharing at least one column (or row). Every consistent way of
  placing the digit in both lines is tried on an empty board and cells ruled
  out under all of them lose the digit.
"""

from __future__ import annotations
import logging
from itertools import product
from typing import List, Optional, Tuple

import numpy as np

from ..core.board import SudokuBoard
from ..exceptions import ConstraintViolationError, SolvingError

log = logging.getLogger(__name__)

N = SudokuBoard.SIZE
B = SudokuBoard.BOX_SIZE

Cell = Tuple[int, int]


def _force_value(board: SudokuBoard, row: int, col: int, value: int,
                 solution: Optional[SudokuBoard], unit: str) -> None:
    """Place a forced value, cross-checking it against a known solution."""
    if solution is not None:
        expected = solution.get(row, col)
        if expected != value:
            log.error("Wrong value solved by %s [%d][%d] with %d (expected %d)",
                      unit, row, col, value, expected)
            raise SolvingError(
                f"Wrong value solved by {unit} [{row}][{col}] with {value}, "
                f"solution has {expected}"
            )
    log.debug("Solved by %s [%d][%d] with %d", unit, row, col, value)
    board.set(row, col, value)


def solve_basic(board: SudokuBoard, solution: Optional[SudokuBoard] = None) -> int:
    """
    One pass of basic elimination over boxes, then rows, then columns.

    Units where the digit is already placed are skipped. Placements happen
    immediately, so later units in the same pass see their effect.

    Args:
        board: Board to solve in place.
        solution: Optional known solution; forcing a value that disagrees
            with it raises SolvingError.

    Returns:
        Number of values placed.
    """
    placed = 0

    for box_row in range(B):
        for box_col in range(B):
            r0, c0 = box_row * B, box_col * B
            for value in range(1, N + 1):
                if board.solved_in_box[box_row, box_col, value - 1]:
                    continue
                rows, cols = np.nonzero(board.possible[r0:r0 + B, c0:c0 + B, value - 1])
                if len(rows) == 1:
                    _force_value(board, r0 + int(rows[0]), c0 + int(cols[0]),
                                 value, solution, "box")
                    placed += 1

    for row in range(N):
        for value in range(1, N + 1):
            if board.solved_in_row[row, value - 1]:
                continue
            cols = np.flatnonzero(board.possible[row, :, value - 1])
            if len(cols) == 1:
                _force_value(board, row, int(cols[0]), value, solution, "row")
                placed += 1

    for col in range(N):
        for value in range(1, N + 1):
            if board.solved_in_col[col, value - 1]:
                continue
            rows = np.flatnonzero(board.possible[:, col, value - 1])
            if len(rows) == 1:
                _force_value(board, int(rows[0]), col, value, solution, "column")
                placed += 1

    return placed


def _remove(board: SudokuBoard, row: int, col: int, value: int, reason: str) -> None:
    log.debug("Removing %s [%d][%d] for %d", reason, row, col, value)
    board.set_impossible(row, col, value)


def _resolve_box_locked(board: SudokuBoard, box_row: int, box_col: int, value: int) -> int:
    k = value - 1
    r0, c0 = box_row * B, box_col * B
    rows, cols = np.nonzero(board.possible[r0:r0 + B, c0:c0 + B, k])
    if not 2 <= len(rows) <= 3:
        return 0

    changes = 0
    if np.all(rows == rows[0]):
        row = r0 + int(rows[0])
        for col in range(N):
            if not c0 <= col < c0 + B and board.possible[row, col, k]:
                _remove(board, row, col, value, "locked box row")
                changes += 1
    elif np.all(cols == cols[0]):
        col = c0 + int(cols[0])
        for row in range(N):
            if not r0 <= row < r0 + B and board.possible[row, col, k]:
                _remove(board, row, col, value, "locked box column")
                changes += 1

    if changes and log.isEnabledFor(logging.DEBUG):
        log.debug("%s\n%s", board.possibilities_string(value), board)
    return changes


def solve_box_locked_candidates(board: SudokuBoard) -> int:
    """
    Locked candidates, box form.

    For each box and unplaced digit with two or three candidate cells, all in
    one row (or column), remove the digit from the rest of that row (or
    column) outside the box.

    Returns:
        Number of candidates removed.
    """
    changes = 0
    for box_row in range(B):
        for box_col in range(B):
            for value in range(1, N + 1):
                if not board.solved_in_box[box_row, box_col, value - 1]:
                    changes += _resolve_box_locked(board, box_row, box_col, value)
    return changes


def _clear_box_except_line(board: SudokuBoard, value: int, box_row: int, box_col: int,
                           row: Optional[int] = None, col: Optional[int] = None) -> int:
    k = value - 1
    changes = 0
    for r in range(box_row * B, box_row * B + B):
        for c in range(box_col * B, box_col * B + B):
            if r == row or c == col:
                continue
            if board.possible[r, c, k]:
                _remove(board, r, c, value, "locked line")
                changes += 1
    return changes


def solve_line_locked_candidates(board: SudokuBoard) -> int:
    """
    Locked candidates, line form.

    For each row (or column) and unplaced digit with two or three candidate
    cells, all inside one box, remove the digit from the other cells of that
    box.

    Returns:
        Number of candidates removed.
    """
    changes = 0
    for value in range(1, N + 1):
        k = value - 1
        for row in range(N):
            if board.solved_in_row[row, k]:
                continue
            cols = np.flatnonzero(board.possible[row, :, k])
            if 2 <= len(cols) <= 3 and len({int(c) // B for c in cols}) == 1:
                changes += _clear_box_except_line(board, value, row // B,
                                                  int(cols[0]) // B, row=row)
        for col in range(N):
            if board.solved_in_col[col, k]:
                continue
            rows = np.flatnonzero(board.possible[:, col, k])
            if 2 <= len(rows) <= 3 and len({int(r) // B for r in rows}) == 1:
                changes += _clear_box_except_line(board, value, int(rows[0]) // B,
                                                  col // B, col=col)
    return changes


def _eliminate_by_cases(board: SudokuBoard, value: int,
                        first: List[Cell], second: List[Cell]) -> int:
    """
    Try every consistent placement of value in both cell pairs on an empty
    board and remove value wherever all of them rule it out.
    """
    k = value - 1
    ruled_out = []
    for a, b in product(first, second):
        hypothesis = SudokuBoard()
        try:
            hypothesis.set(a[0], a[1], value)
            hypothesis.set(b[0], b[1], value)
        except ConstraintViolationError:
            continue
        ruled_out.append(~hypothesis.possible[:, :, k])

    if not ruled_out:
        return 0

    targets = np.logical_and.reduce(ruled_out) & board.possible[:, :, k] & (board.grid == 0)
    changes = 0
    for row, col in zip(*np.nonzero(targets)):
        _remove(board, int(row), int(col), value, "by cases")
        changes += 1

    if changes and log.isEnabledFor(logging.DEBUG):
        log.debug("Based on %s and %s\n%s", first, second, board.possibilities_string(value))
    return changes


def _resolve_pairs(board: SudokuBoard, value: int, pairs: List[List[Cell]], axis: int) -> int:
    changes = 0
    for index, first in enumerate(pairs):
        for second in pairs[index + 1:]:
            shared = {cell[axis] for cell in first} & {cell[axis] for cell in second}
            if shared:
                changes += _eliminate_by_cases(board, value, first, second)
    return changes


def solve_x_wing_and_skyscraper(board: SudokuBoard) -> int:
    """
    X-Wing and Skyscraper eliminations for every digit, rows then columns.

    Returns:
        Number of candidates removed.
    """
    changes = 0
    for value in range(1, N + 1):
        k = value - 1

        row_pairs = []
        for row in range(N):
            cols = np.flatnonzero(board.possible[row, :, k])
            if len(cols) == 2:
                row_pairs.append([(row, int(c)) for c in cols])
        if len(row_pairs) >= 2:
            changes += _resolve_pairs(board, value, row_pairs, axis=1)

        col_pairs = []
        for col in range(N):
            rows = np.flatnonzero(board.possible[:, col, k])
            if len(rows) == 2:
                col_pairs.append([(int(r), col) for r in rows])
        if len(col_pairs) >= 2:
            changes += _resolve_pairs(board, value, col_pairs, axis=0)

    return changes


def propagate(board: SudokuBoard, solution: Optional[SudokuBoard] = None,
              use_locked_candidates: bool = True) -> int:
    """
    Repeat basic elimination, falling back to box locked candidates, until
    neither makes progress.

    Returns:
        Total number of changes.
    """
    total = 0
    while True:
        changes = solve_basic(board, solution)
        if not changes and use_locked_candidates:
            changes = solve_box_locked_candidates(board)
        if not changes:
            return total
        total += changes


def has_contradiction(board: SudokuBoard) -> bool:
    """True if some empty cell has no candidate left."""
    empty = board.grid == 0
    return bool(np.any(empty & ~board.possible.any(axis=2)))
