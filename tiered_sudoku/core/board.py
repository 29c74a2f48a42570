"""Sudoku board representation with possibility tracking."""

from __future__ import annotations
import logging
from typing import List, Tuple, Optional, Sequence, Union

import numpy as np

from ..exceptions import ConstraintViolationError, InvalidInputError

log = logging.getLogger(__name__)

GridLike = Union[np.ndarray, Sequence[Sequence[int]]]


class SudokuBoard:
    """
    Represents a 9x9 Sudoku board together with the candidates it still allows.

    Besides the grid itself the board keeps:

    - ``possible[row, col, value - 1]``: whether ``value`` can still go into
      the cell given everything placed so far. Placing a value removes it from
      every peer in the same row, column and box.
    - ``user_possible``: an independent set of candidate marks owned by the
      caller. Placement never touches it.
    - ``solved_in_row``, ``solved_in_col`` and ``solved_in_box``: which digits
      are already placed in each unit. Once set they are never reset.

    Clearing a cell only empties the grid; eliminated candidates stay
    eliminated. Use :meth:`from_board` to rebuild the candidates from the
    remaining values.
    """

    SIZE = 9
    BOX_SIZE = 3

    def __init__(
        self,
        grid: Optional[GridLike] = None,
        check_validity: bool = True,
        puzzle_id: str = "UNDEFINED",
    ):
        """
        Initialize a Sudoku board.

        Args:
            grid: Optional initial 9x9 grid (0 means empty). Every value is
                placed through :meth:`set`, so construction enforces the same
                rules as later placements.
            check_validity: If True, placing a value the tracked candidates
                rule out raises ConstraintViolationError.
            puzzle_id: Free-form label.
        """
        self.size = self.SIZE
        self.box_size = self.BOX_SIZE
        self.check_validity = check_validity
        self.puzzle_id = puzzle_id
        self.solution: Optional[SudokuBoard] = None

        self.grid = np.zeros((self.SIZE, self.SIZE), dtype=np.int8)
        self.possible = np.ones((self.SIZE, self.SIZE, self.SIZE), dtype=bool)
        self.user_possible = np.zeros((self.SIZE, self.SIZE, self.SIZE), dtype=bool)
        self.solved_in_row = np.zeros((self.SIZE, self.SIZE), dtype=bool)
        self.solved_in_col = np.zeros((self.SIZE, self.SIZE), dtype=bool)
        self.solved_in_box = np.zeros(
            (self.BOX_SIZE, self.BOX_SIZE, self.SIZE), dtype=bool
        )

        if grid is not None:
            values = np.asarray(grid)
            if values.shape != (self.SIZE, self.SIZE):
                raise InvalidInputError(
                    f"Grid shape must be ({self.SIZE}, {self.SIZE}), got {values.shape}"
                )
            for row in range(self.SIZE):
                for col in range(self.SIZE):
                    self.set(row, col, int(values[row, col]))

    def copy(self) -> SudokuBoard:
        """Create a deep copy of the board, candidates included."""
        new_board = SudokuBoard.__new__(SudokuBoard)
        new_board.size = self.size
        new_board.box_size = self.box_size
        new_board.check_validity = self.check_validity
        new_board.puzzle_id = self.puzzle_id
        new_board.solution = self.solution
        new_board.grid = self.grid.copy()
        new_board.possible = self.possible.copy()
        new_board.user_possible = self.user_possible.copy()
        new_board.solved_in_row = self.solved_in_row.copy()
        new_board.solved_in_col = self.solved_in_col.copy()
        new_board.solved_in_box = self.solved_in_box.copy()
        return new_board

    @classmethod
    def from_board(cls, other: SudokuBoard, puzzle_id: Optional[str] = None) -> SudokuBoard:
        """
        Rebuild a board from the values of another one.

        Candidates are recomputed from the placed values only, so eliminations
        made by solving techniques and stale candidates left behind by
        :meth:`clear` are both dropped.
        """
        board = cls(
            other.grid,
            check_validity=other.check_validity,
            puzzle_id=other.puzzle_id if puzzle_id is None else puzzle_id,
        )
        board.solution = other.solution
        return board

    # -- validation -------------------------------------------------------

    def _check_index(self, index: int, name: str) -> None:
        if index < 0 or index >= self.SIZE:
            raise InvalidInputError(f"Incorrect {name} ({index})")

    def _check_box_index(self, index: int, name: str) -> None:
        if index < 0 or index >= self.BOX_SIZE:
            raise InvalidInputError(f"Incorrect box {name} ({index})")

    def _check_value(self, value: int, allow_zero: bool = False) -> None:
        lowest = 0 if allow_zero else 1
        if value < lowest or value > self.SIZE:
            raise InvalidInputError(f"Incorrect value ({value})")

    # -- grid access ------------------------------------------------------

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        self._check_index(row, "row")
        self._check_index(col, "column")
        return int(self.grid[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """
        Set value at position (row, col). Use 0 to clear.

        A non-zero value removes itself from the candidates of every peer,
        leaves the cell with no other candidate and marks the digit as solved
        in the row, column and box.

        Raises:
            InvalidInputError: row, column or value out of range.
            ConstraintViolationError: validity checking is on and the value
                is no longer a candidate for the cell.
        """
        self._check_value(value, allow_zero=True)
        self._check_index(row, "row")
        self._check_index(col, "column")

        if self.check_validity and not self.is_possible(row, col, value):
            raise ConstraintViolationError(row, col, value)

        self.grid[row, col] = value

        if value != 0:
            self._eliminate_peers(row, col, value)
            self.solved_in_box[row // self.BOX_SIZE, col // self.BOX_SIZE, value - 1] = True
            self.solved_in_row[row, value - 1] = True
            self.solved_in_col[col, value - 1] = True

    def clear(self, row: int, col: int) -> None:
        """Clear the cell at position (row, col). Candidates are left as they are."""
        self.set(row, col, 0)

    def _eliminate_peers(self, row: int, col: int, value: int) -> None:
        k = value - 1
        keep = self.possible[row, col, k]

        self.possible[row, col, :] = False
        self.possible[row, :, k] = False
        self.possible[:, col, k] = False
        box_row = (row // self.BOX_SIZE) * self.BOX_SIZE
        box_col = (col // self.BOX_SIZE) * self.BOX_SIZE
        self.possible[box_row:box_row + self.BOX_SIZE,
                      box_col:box_col + self.BOX_SIZE, k] = False

        self.possible[row, col, k] = keep

    def is_empty(self, row: int, col: int) -> bool:
        """Check if cell is empty (value is 0)."""
        return self.get(row, col) == 0

    def get_row(self, row: int) -> np.ndarray:
        """Get all values in a row."""
        return self.grid[row, :]

    def get_col(self, col: int) -> np.ndarray:
        """Get all values in a column."""
        return self.grid[:, col]

    def get_box(self, row: int, col: int) -> np.ndarray:
        """Get all values in the box containing (row, col)."""
        box_row = (row // self.box_size) * self.box_size
        box_col = (col // self.box_size) * self.box_size
        return self.grid[box_row:box_row + self.box_size,
                        box_col:box_col + self.box_size].flatten()

    def get_box_index(self, row: int, col: int) -> int:
        """Get the box index (0 to 8) for a cell."""
        return (row // self.box_size) * self.box_size + (col // self.box_size)

    # -- candidates -------------------------------------------------------

    def is_possible(self, row: int, col: int, value: int) -> bool:
        """Check if value is still a candidate for (row, col). 0 is always possible."""
        self._check_value(value, allow_zero=True)
        self._check_index(row, "row")
        self._check_index(col, "column")
        if value == 0:
            return True
        return bool(self.possible[row, col, value - 1])

    def set_impossible(self, row: int, col: int, value: int) -> None:
        """Remove value from the candidates of (row, col)."""
        self._check_value(value)
        self._check_index(row, "row")
        self._check_index(col, "column")
        self.possible[row, col, value - 1] = False

    def candidates(self, row: int, col: int) -> List[int]:
        """Candidates of (row, col) in ascending order."""
        self._check_index(row, "row")
        self._check_index(col, "column")
        return [int(k) + 1 for k in np.flatnonzero(self.possible[row, col])]

    def count_candidates(self, row: int, col: int) -> int:
        """Number of candidates left for (row, col)."""
        return int(np.count_nonzero(self.possible[row, col]))

    def is_user_possible(self, row: int, col: int, value: int) -> bool:
        """Check the caller-owned candidate mark for value at (row, col)."""
        self._check_value(value, allow_zero=True)
        self._check_index(row, "row")
        self._check_index(col, "column")
        if value == 0:
            return True
        return bool(self.user_possible[row, col, value - 1])

    def set_user_possible(self, row: int, col: int, value: int) -> None:
        """Mark value as a user candidate for (row, col)."""
        self._check_value(value)
        self._check_index(row, "row")
        self._check_index(col, "column")
        self.user_possible[row, col, value - 1] = True

    def set_user_impossible(self, row: int, col: int, value: int) -> None:
        """Remove the user candidate mark for value at (row, col)."""
        self._check_value(value)
        self._check_index(row, "row")
        self._check_index(col, "column")
        self.user_possible[row, col, value - 1] = False

    # -- solved-unit caches -----------------------------------------------

    def is_solved_in_row(self, row: int, value: int) -> bool:
        self._check_value(value)
        self._check_index(row, "row")
        return bool(self.solved_in_row[row, value - 1])

    def is_solved_in_col(self, col: int, value: int) -> bool:
        self._check_value(value)
        self._check_index(col, "column")
        return bool(self.solved_in_col[col, value - 1])

    def is_solved_in_box(self, box_row: int, box_col: int, value: int) -> bool:
        self._check_value(value)
        self._check_box_index(box_row, "row")
        self._check_box_index(box_col, "column")
        return bool(self.solved_in_box[box_row, box_col, value - 1])

    # -- whole-board queries ----------------------------------------------

    def get_empty_cells(self) -> List[Tuple[int, int]]:
        """Get list of all empty cell positions in row-major order."""
        return [(int(r), int(c)) for r, c in zip(*np.nonzero(self.grid == 0))]

    def count_empty(self) -> int:
        """Count the number of empty cells."""
        return int(np.sum(self.grid == 0))

    def count_filled(self) -> int:
        """Count the number of filled cells (the clue count of a puzzle)."""
        return int(np.sum(self.grid != 0))

    def is_complete(self) -> bool:
        """Check if all cells are filled. Says nothing about correctness."""
        return self.count_empty() == 0

    def is_valid(self) -> bool:
        """
        Check if the current board state is valid.
        Does not check if solution is complete, only if no conflicts exist.
        """
        for i in range(self.size):
            row = self.get_row(i)
            non_zero = row[row != 0]
            if len(non_zero) != len(set(non_zero)):
                return False

        for j in range(self.size):
            col = self.get_col(j)
            non_zero = col[col != 0]
            if len(non_zero) != len(set(non_zero)):
                return False

        for box_row in range(0, self.size, self.box_size):
            for box_col in range(0, self.size, self.box_size):
                box = self.get_box(box_row, box_col)
                non_zero = box[box != 0]
                if len(non_zero) != len(set(non_zero)):
                    return False

        return True

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly solved."""
        return self.is_complete() and self.is_valid()

    def is_same(self, other: SudokuBoard) -> bool:
        """Cell-wise comparison of the grids, ignoring candidates."""
        return bool(np.array_equal(self.grid, other.grid))

    # -- representations --------------------------------------------------

    def to_string(self) -> str:
        """81 digits, row-major, 0 for empty cells."""
        return ''.join(str(v) for v in self.grid.flatten())

    @classmethod
    def from_string(
        cls,
        s: str,
        check_validity: bool = True,
        puzzle_id: str = "UNDEFINED",
    ) -> SudokuBoard:
        """
        Create a board from a string representation.

        Args:
            s: 81 characters, row-major. 0 or . for empty, 1-9 for values.
            check_validity: Passed to the new board.
            puzzle_id: Passed to the new board.
        """
        cells = cls.SIZE * cls.SIZE
        if len(s) != cells:
            raise InvalidInputError(f"String length must be {cells}, got {len(s)}")

        grid = np.zeros((cls.SIZE, cls.SIZE), dtype=np.int8)
        for idx, c in enumerate(s):
            if c == '.':
                c = '0'
            if c not in "0123456789":
                raise InvalidInputError(f"Invalid character {c!r} at position {idx}")
            grid[idx // cls.SIZE, idx % cls.SIZE] = int(c)

        return cls(grid, check_validity=check_validity, puzzle_id=puzzle_id)

    @classmethod
    def from_2d_list(
        cls,
        data: Sequence[Sequence[int]],
        check_validity: bool = True,
        puzzle_id: str = "UNDEFINED",
    ) -> SudokuBoard:
        """Create a board from a 9x9 nested list."""
        if len(data) != cls.SIZE or any(len(row) != cls.SIZE for row in data):
            raise InvalidInputError(f"Array must be {cls.SIZE}x{cls.SIZE}")
        return cls(np.array(data, dtype=np.int64), check_validity=check_validity,
                   puzzle_id=puzzle_id)

    def possibilities_string(self, value: int) -> str:
        """Map of where value is still possible (1) or ruled out (0)."""
        self._check_value(value)
        lines = [f"Possibilities for {value}:"]
        for row in range(self.size):
            if row > 0 and row % self.box_size == 0:
                lines.append("-----------")
            chunks = []
            for box_col in range(0, self.size, self.box_size):
                cells = self.possible[row, box_col:box_col + self.box_size, value - 1]
                chunks.append(''.join('1' if c else '0' for c in cells))
            lines.append('|'.join(chunks))
        return '\n'.join(lines)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (self.box_size * 2 + 1)) + '+') * self.box_size

        for i in range(self.size):
            if i % self.box_size == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j in range(self.size):
                val = self.grid[i, j]
                row_str += ' .' if val == 0 else f' {val}'
                if (j + 1) % self.box_size == 0:
                    row_str += ' |'

            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"SudokuBoard(id={self.puzzle_id!r}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SudokuBoard):
            return False
        return self.is_same(other)

    def __hash__(self) -> int:
        return hash(self.to_string())
