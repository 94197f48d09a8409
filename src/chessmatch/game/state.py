"""Match state and move history records."""

from __future__ import annotations

from dataclasses import dataclass, field, replace

from chessmatch.core.enums import Color
from chessmatch.core.move import Move
from chessmatch.core.piece import Piece


@dataclass(slots=True)
class MatchState:
    """Turn bookkeeping of a match.

    ``en_passant`` is the pawn that has just advanced two squares;
    ``promoted`` is the piece awaiting a promotion choice.
    """

    turn: int = 1
    current_player: Color = Color.WHITE
    check: bool = False
    checkmate: bool = False
    en_passant: Piece | None = None
    promoted: Piece | None = None

    def snapshot(self) -> MatchState:
        """Shallow copy; piece references are shared, not cloned."""
        return replace(self)

    def next_turn(self) -> None:
        self.turn += 1
        self.current_player = self.current_player.opposite


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    piece: Piece
    captured: Piece | None
    state_before: MatchState = field(repr=False)
    promoted_to: Piece | None = None

    @property
    def was_capture(self) -> bool:
        return self.captured is not None
