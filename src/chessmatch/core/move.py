"""Move value object."""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.core.enums import MoveFlag
from chessmatch.core.notation import square_name
from chessmatch.core.types import Square


@dataclass(frozen=True, slots=True)
class Move:
    """Immutable source/target pair tagged with its special-move kind."""

    source: Square
    target: Square
    flag: MoveFlag = MoveFlag.NORMAL

    @property
    def en_passant_square(self) -> Square:
        """Square of the pawn removed by an en-passant capture."""
        return Square(self.source.row, self.target.column)

    def rook_squares(self, columns: int) -> tuple[Square, Square]:
        """(from, to) of the rook relocated by a castling move."""
        row = self.source.row
        if self.flag == MoveFlag.CASTLE_KINGSIDE:
            return Square(row, columns - 1), Square(row, self.source.column + 1)
        if self.flag == MoveFlag.CASTLE_QUEENSIDE:
            return Square(row, 0), Square(row, self.source.column - 1)
        raise ValueError(f"Not a castling move: {self}")

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{square_name(self.source)}{square_name(self.target)}"
