"""Exceptions raised by the rules engine.

Caller-input errors are also :class:`ValueError` subclasses; none of them
leaves a partially applied move behind.
"""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all rules-engine errors."""


class BoardError(ChessError, ValueError):
    """Square outside the grid, or invalid board dimensions."""


class OutOfRange(ChessError, ValueError):
    """Algebraic coordinates outside a1..h8."""


class NoPieceAtSource(ChessError, ValueError):
    """The selected source square is empty."""


class WrongOwner(ChessError, ValueError):
    """The selected piece belongs to the side not on move."""


class NoLegalMoves(ChessError, ValueError):
    """The selected piece has no possible destination."""


class IllegalTarget(ChessError, ValueError):
    """The destination is not among the piece's possible moves."""


class SelfCheck(ChessError, ValueError):
    """The move would leave the mover's own king attacked."""


class NoPendingPromotion(ChessError, ValueError):
    """A promotion choice was given while no pawn awaits promotion."""


class InvalidPromotion(ChessError, ValueError):
    """Requested promotion kind is not a bishop, knight, queen or rook."""


class PromotionPending(ChessError, ValueError):
    """A move was attempted before the pending promotion was resolved."""


class MatchOver(ChessError, ValueError):
    """A move was attempted after checkmate."""


class NoKingOnBoard(ChessError, RuntimeError):
    """A side has no king on the board (invariant violation)."""
