"""Match phases and configuration objects for the game layer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum, auto

from chessmatch.core.enums import PieceType
from chessmatch.core.errors import InvalidPromotion

# ── Match phase FSM states ───────────────────────────────────────────────────


class MatchPhase(IntEnum):
    """Finite-state-machine states for a match."""

    IN_PROGRESS = auto()
    AWAITING_PROMOTION = auto()  # two-phase promotion not yet resolved
    CHECKMATE = auto()


# ── Promotion choices ────────────────────────────────────────────────────────

PROMOTION_TYPES: dict[str, PieceType] = {
    "B": PieceType.BISHOP,
    "N": PieceType.KNIGHT,
    "Q": PieceType.QUEEN,
    "R": PieceType.ROOK,
}


def promotion_type(kind: PieceType | str) -> PieceType:
    """Resolve a promotion choice given as :class:`PieceType` or letter."""
    if isinstance(kind, PieceType):
        if kind in PROMOTION_TYPES.values():
            return kind
    elif isinstance(kind, str) and kind.upper() in PROMOTION_TYPES:
        return PROMOTION_TYPES[kind.upper()]
    raise InvalidPromotion(f"Invalid type for promotion: {kind!r}")


# ── Options ──────────────────────────────────────────────────────────────────


@dataclass(frozen=True, slots=True)
class MatchOptions:
    """Immutable match configuration.

    Args:
        auto_promotion: Kind a pawn promotes to as soon as it reaches the
            last rank.  A letter such as ``"Q"`` is converted to its
            :class:`PieceType`.  ``None`` switches to two-phase promotion,
            where the caller picks the kind with
            :meth:`~chessmatch.game.match.ChessMatch.replace_promoted_piece`.
    """

    auto_promotion: PieceType | None = PieceType.QUEEN

    def __post_init__(self) -> None:
        if self.auto_promotion is not None:
            # Letters are stored as their PieceType.
            object.__setattr__(
                self, "auto_promotion", promotion_type(self.auto_promotion)
            )

    @classmethod
    def two_phase_promotion(cls) -> MatchOptions:
        return cls(auto_promotion=None)
