"""Position mapping between algebraic coordinates and grid squares.

``row = 8 - rank`` and ``column = file - 'a'``, so a8 is ``Square(0, 0)`` and
h1 is ``Square(7, 7)``.
"""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.core.errors import OutOfRange
from chessmatch.core.types import BOARD_COLUMNS, BOARD_ROWS, Square

FILES = "abcdefgh"


@dataclass(frozen=True, slots=True)
class ChessPosition:
    """Algebraic coordinate: file letter 'a'–'h' and rank 1–8."""

    file: str
    rank: int

    def __post_init__(self) -> None:
        if (
            not isinstance(self.file, str)
            or len(self.file) != 1
            or self.file not in FILES
            or not isinstance(self.rank, int)
            or not 1 <= self.rank <= BOARD_ROWS
        ):
            raise OutOfRange(
                "Error instantiating ChessPosition. Valid values are from a1 to h8"
                f" (got {self.file!r}, {self.rank!r})"
            )

    def to_square(self) -> Square:
        return Square(BOARD_ROWS - self.rank, ord(self.file) - ord("a"))

    @classmethod
    def from_square(cls, sq: Square) -> ChessPosition:
        if not (0 <= sq.row < BOARD_ROWS and 0 <= sq.column < BOARD_COLUMNS):
            raise OutOfRange(f"Square outside the board: {sq}")
        return cls(chr(ord("a") + sq.column), BOARD_ROWS - sq.row)

    @classmethod
    def parse(cls, name: str) -> ChessPosition:
        """Parse a square name, e.g. 'e4'."""
        if len(name) != 2 or not name[1].isdigit():
            raise OutOfRange(f"Invalid square name: {name!r}")
        return cls(name[0], int(name[1]))

    def __str__(self) -> str:
        return f"{self.file}{self.rank}"


def from_algebraic(file: str, rank: int) -> Square:
    """``('e', 4)`` → ``Square(4, 4)``."""
    return ChessPosition(file, rank).to_square()


def to_algebraic(sq: Square) -> tuple[str, int]:
    """``Square(4, 4)`` → ``('e', 4)``."""
    pos = ChessPosition.from_square(sq)
    return pos.file, pos.rank


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. ``Square(7, 0)`` → 'a1'."""
    return str(ChessPosition.from_square(sq))


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → ``Square(4, 4)``."""
    return ChessPosition.parse(name).to_square()
