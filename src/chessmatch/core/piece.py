"""Piece entity."""

from __future__ import annotations

from dataclasses import dataclass

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.types import Square

# Character ↔ (Color, PieceType), uppercase = white
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}


@dataclass(eq=False, slots=True)
class Piece:
    """A piece in play.

    Identity matters: the match tracks pieces by reference (en-passant
    target, pending promotion, captured list), so equality is identity.
    ``square`` is maintained by :class:`~chessmatch.core.board.Board`.
    """

    color: Color
    piece_type: PieceType
    square: Square | None = None
    move_count: int = 0

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """Letter (uppercase = white, lowercase = black)."""
        return _CHARS[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        return (
            f"Piece({self.color}, {self.piece_type.name.lower()}, "
            f"square={self.square}, moves={self.move_count})"
        )

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Create piece from its letter, e.g. 'N' → white knight."""
        try:
            color, ptype = _CHAR_MAP[char]
        except KeyError:
            raise ValueError(f"Invalid piece character: {char!r}") from None
        return cls(color, ptype)

    def is_opponent_of(self, other: Piece | None) -> bool:
        return other is not None and other.color != self.color
