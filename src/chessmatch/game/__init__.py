"""Game layer — the match engine, its state, options and events.

Quick start::

    from chessmatch.game import ChessMatch

    match = ChessMatch()
    match.perform_move("e2", "e4")
    match.perform_move("e7", "e5")
"""

from chessmatch.game.interfaces import MatchOptions, MatchPhase, promotion_type
from chessmatch.game.match import ChessMatch, MatchEvents
from chessmatch.game.state import MatchState, MoveRecord

__all__ = [
    # Configuration / phases
    "MatchOptions",
    "MatchPhase",
    "promotion_type",
    # Concrete
    "ChessMatch",
    "MatchEvents",
    "MatchState",
    "MoveRecord",
]
