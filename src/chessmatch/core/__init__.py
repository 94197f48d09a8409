"""Core domain layer — board, pieces and move generation, no dependencies.

Quick start::

    from chessmatch.core import Board, MoveGenerator, parse_square

    board = Board.initial()
    gen = MoveGenerator(board)
    knight = board[parse_square("g1")]
    print(sorted(gen.possible_moves(knight)))
"""

from chessmatch.core.board import Board
from chessmatch.core.enums import Color, MoveFlag, PieceType
from chessmatch.core.errors import (
    BoardError,
    ChessError,
    IllegalTarget,
    InvalidPromotion,
    MatchOver,
    NoKingOnBoard,
    NoLegalMoves,
    NoPendingPromotion,
    NoPieceAtSource,
    OutOfRange,
    PromotionPending,
    SelfCheck,
    WrongOwner,
)
from chessmatch.core.move import Move
from chessmatch.core.move_generator import MoveGenerator
from chessmatch.core.notation import (
    ChessPosition,
    from_algebraic,
    parse_square,
    square_name,
    to_algebraic,
)
from chessmatch.core.piece import Piece
from chessmatch.core.types import Square

__all__ = [
    # Enums
    "Color",
    "MoveFlag",
    "PieceType",
    # Errors
    "BoardError",
    "ChessError",
    "IllegalTarget",
    "InvalidPromotion",
    "MatchOver",
    "NoKingOnBoard",
    "NoLegalMoves",
    "NoPendingPromotion",
    "NoPieceAtSource",
    "OutOfRange",
    "PromotionPending",
    "SelfCheck",
    "WrongOwner",
    # Types / notation
    "ChessPosition",
    "Square",
    "from_algebraic",
    "parse_square",
    "square_name",
    "to_algebraic",
    # Domain objects
    "Board",
    "Move",
    "MoveGenerator",
    "Piece",
]
