"""Square value type and grid helpers.

Grid layout (row-major, row 0 is the far side from White):
    row 0 = rank 8, row 7 = rank 1
    column 0 = file a, column 7 = file h
"""

from __future__ import annotations

from typing import NamedTuple

BOARD_ROWS = 8
BOARD_COLUMNS = 8


class Square(NamedTuple):
    """Immutable (row, column) pair, 0-indexed."""

    row: int
    column: int

    def offset(self, d_row: int, d_column: int) -> Square:
        """Square displaced by (*d_row*, *d_column*); may fall off the board."""
        return Square(self.row + d_row, self.column + d_column)

    def __str__(self) -> str:
        return f"({self.row}, {self.column})"
