"""Board - piece placement on a fixed-size grid."""

from __future__ import annotations

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import BoardError
from chessmatch.core.piece import Piece
from chessmatch.core.types import BOARD_COLUMNS, BOARD_ROWS, Square


class Board:
    """Mutable grid holding at most one piece per square.

    The board is a passive store: it knows nothing about legality.  Every
    accessor validates the square and raises :class:`BoardError` when it
    lies outside the grid.
    """

    __slots__ = ("_rows", "_columns", "_grid")

    def __init__(self, rows: int = BOARD_ROWS, columns: int = BOARD_COLUMNS) -> None:
        if rows < 1 or columns < 1:
            raise BoardError(
                "Error creating board: there must be at least 1 row and 1 column"
            )
        self._rows = rows
        self._columns = columns
        self._grid: list[list[Piece | None]] = [
            [None] * columns for _ in range(rows)
        ]

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def columns(self) -> int:
        return self._columns

    # -- Element access -----------------------------------------------------

    def contains(self, sq: Square) -> bool:
        return 0 <= sq.row < self._rows and 0 <= sq.column < self._columns

    def _check(self, sq: Square) -> None:
        if not self.contains(sq):
            raise BoardError(f"Position not on the board: {sq}")

    def occupant(self, sq: Square) -> Piece | None:
        self._check(sq)
        return self._grid[sq.row][sq.column]

    __getitem__ = occupant

    def is_occupied(self, sq: Square) -> bool:
        return self.occupant(sq) is not None

    def place(self, piece: Piece, sq: Square) -> None:
        """Put *piece* on *sq*, overwriting (and detaching) any occupant."""
        self._check(sq)
        old_piece = self._grid[sq.row][sq.column]
        if old_piece is not None and old_piece is not piece:
            old_piece.square = None
        self._grid[sq.row][sq.column] = piece
        piece.square = sq

    def remove(self, sq: Square) -> Piece | None:
        """Detach and return the occupant of *sq* (``None`` if empty)."""
        self._check(sq)
        piece = self._grid[sq.row][sq.column]
        if piece is None:
            return None
        self._grid[sq.row][sq.column] = None
        piece.square = None
        return piece

    # -- Query helpers ------------------------------------------------------

    def pieces(self, color: Color | None = None) -> list[Piece]:
        """Pieces on the board in row-major order, optionally of one *color*."""
        return [
            piece
            for row in self._grid
            for piece in row
            if piece is not None and (color is None or piece.color == color)
        ]

    def grid(self) -> list[list[Piece | None]]:
        """Row-major copy of the occupancy grid."""
        return [row.copy() for row in self._grid]

    def layout(self) -> tuple[str, ...]:
        """One string per row, piece letters with '.' for empty squares."""
        return tuple(
            "".join(str(p) if p is not None else "." for p in row)
            for row in self._grid
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        back_rank = [
            PieceType.ROOK,
            PieceType.KNIGHT,
            PieceType.BISHOP,
            PieceType.QUEEN,
            PieceType.KING,
            PieceType.BISHOP,
            PieceType.KNIGHT,
            PieceType.ROOK,
        ]
        for column, pt in enumerate(back_rank):
            b.place(Piece(Color.BLACK, pt), Square(0, column))
            b.place(Piece(Color.BLACK, PieceType.PAWN), Square(1, column))
            b.place(Piece(Color.WHITE, PieceType.PAWN), Square(6, column))
            b.place(Piece(Color.WHITE, pt), Square(7, column))
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for row_idx, line in enumerate(self.layout()):
            rows.append(f"{self._rows - row_idx} {' '.join(line)}")
        rows.append("  " + " ".join(chr(ord("a") + c) for c in range(self._columns)))
        return "\n".join(rows)
