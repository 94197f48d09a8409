"""Rules engine for standard chess."""

from chessmatch.core import ChessError, ChessPosition, Color, PieceType
from chessmatch.game import ChessMatch, MatchOptions

__all__ = [
    "ChessError",
    "ChessMatch",
    "ChessPosition",
    "Color",
    "MatchOptions",
    "PieceType",
]
