"""ChessMatch — the rules engine that owns a board and plays moves on it.

Validates moves, applies them (castling, en passant, promotion), rejects
moves that leave the mover's king attacked, and detects check and checkmate.
Emits events via simple callbacks so a presentation layer can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from chessmatch.core.board import Board
from chessmatch.core.enums import Color, MoveFlag, PieceType
from chessmatch.core.errors import (
    IllegalTarget,
    MatchOver,
    NoKingOnBoard,
    NoLegalMoves,
    NoPendingPromotion,
    NoPieceAtSource,
    PromotionPending,
    SelfCheck,
    WrongOwner,
)
from chessmatch.core.move import Move
from chessmatch.core.move_generator import MoveGenerator
from chessmatch.core.notation import ChessPosition
from chessmatch.core.piece import Piece
from chessmatch.core.types import Square
from chessmatch.game.interfaces import MatchOptions, MatchPhase, promotion_type
from chessmatch.game.state import MatchState, MoveRecord

_LOGGER = logging.getLogger(__name__)

PositionLike = ChessPosition | Square | str

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord], None]
CheckmateCallback = Callable[[Color], None]  # winner


@dataclass
class MatchEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_checkmate: list[CheckmateCallback] = field(default_factory=list)


# ── Match engine ─────────────────────────────────────────────────────────────


class ChessMatch:
    """A single game of chess between two sides sharing one board.

    Not thread-safe: each match is meant to be driven from one thread, and
    independent games need independent instances.
    """

    __slots__ = (
        "_board",
        "_state",
        "_options",
        "_pieces_on_board",
        "_captured_pieces",
        "_history",
        "events",
    )

    def __init__(
        self, options: MatchOptions | None = None, *, board: Board | None = None
    ) -> None:
        self._options = options or MatchOptions()
        self._board = board if board is not None else Board.initial()
        self._state = MatchState()
        self._pieces_on_board: list[Piece] = self._board.pieces()
        self._captured_pieces: list[Piece] = []
        self._history: list[MoveRecord] = []
        self.events = MatchEvents()

    @classmethod
    def empty(
        cls,
        options: MatchOptions | None = None,
        current_player: Color = Color.WHITE,
    ) -> ChessMatch:
        """Match on an empty board, to be filled with :meth:`place_new_piece`."""
        match = cls(options, board=Board())
        match._state.current_player = current_player
        return match

    def place_new_piece(
        self, piece_type: PieceType, color: Color, position: PositionLike
    ) -> Piece:
        """Put a fresh piece on the board, replacing any occupant."""
        sq = self._to_square(position)
        old_piece = self._board.remove(sq)
        if old_piece is not None:
            self._pieces_on_board.remove(old_piece)
        piece = Piece(color, piece_type)
        self._board.place(piece, sq)
        self._pieces_on_board.append(piece)
        return piece

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def options(self) -> MatchOptions:
        return self._options

    @property
    def turn(self) -> int:
        return self._state.turn

    @property
    def current_player(self) -> Color:
        return self._state.current_player

    @property
    def check(self) -> bool:
        return self._state.check

    @property
    def checkmate(self) -> bool:
        return self._state.checkmate

    @property
    def en_passant_vulnerable(self) -> Piece | None:
        return self._state.en_passant

    @property
    def promoted(self) -> Piece | None:
        return self._state.promoted

    @property
    def phase(self) -> MatchPhase:
        if self._state.checkmate:
            return MatchPhase.CHECKMATE
        if self._state.promoted is not None:
            return MatchPhase.AWAITING_PROMOTION
        return MatchPhase.IN_PROGRESS

    @property
    def winner(self) -> Color | None:
        # The turn does not advance on checkmate, so the mover is still current.
        return self._state.current_player if self._state.checkmate else None

    @property
    def history(self) -> tuple[MoveRecord, ...]:
        return tuple(self._history)

    def pieces(self) -> list[list[Piece | None]]:
        """Board contents, row 0 = rank 8."""
        return self._board.grid()

    def pieces_on_board(self, color: Color | None = None) -> list[Piece]:
        return [p for p in self._pieces_on_board if color is None or p.color == color]

    def captured_pieces(self, color: Color | None = None) -> list[Piece]:
        return [p for p in self._captured_pieces if color is None or p.color == color]

    # ── Queries ──────────────────────────────────────────────────────────

    def possible_moves(self, source: PositionLike) -> list[list[bool]]:
        """Destinations of the piece on *source*, one flag per square."""
        sq = self._to_square(source)
        self._validate_source(sq, check_owner=False)
        piece = self._board[sq]
        assert piece is not None
        return self._generator().possible_moves_grid(piece)

    def legal_moves(self, source: PositionLike) -> set[Square]:
        """Possible moves of the piece on *source* that keep its king safe."""
        sq = self._to_square(source)
        self._validate_source(sq, check_owner=False)
        piece = self._board[sq]
        assert piece is not None

        gen = self._generator()
        legal: set[Square] = set()
        for target in gen.possible_moves(piece):
            with self._trial(gen.classify(piece, target)):
                if not self.is_in_check(piece.color):
                    legal.add(target)
        return legal

    def is_in_check(self, color: Color) -> bool:
        """Is *color*'s king among the opponent's possible destinations?"""
        king = self._king(color)
        assert king.square is not None
        return self._generator().is_square_attacked(king.square, color.opposite)

    def is_checkmate(self, color: Color) -> bool:
        """Is *color* in check with no move that escapes it?"""
        if not self.is_in_check(color):
            return False

        gen = self._generator()
        for piece in self.pieces_on_board(color):
            for target in gen.possible_moves(piece):
                with self._trial(gen.classify(piece, target)):
                    if not self.is_in_check(color):
                        return False
        return True

    # ── Commands ─────────────────────────────────────────────────────────

    def perform_move(self, source: PositionLike, target: PositionLike) -> Piece | None:
        """Play a move for the current player and return the captured piece."""
        self._ensure_accepting_moves()
        source_sq = self._to_square(source)
        target_sq = self._to_square(target)
        self._validate_source(source_sq, check_owner=True)
        self._validate_target(source_sq, target_sq)

        piece = self._board[source_sq]
        assert piece is not None
        move = self._generator().classify(piece, target_sq)
        mover = self._state.current_player
        state_before = self._state.snapshot()

        captured = self._make_move(move)
        if self.is_in_check(mover):
            self._undo_move(move, captured)
            _LOGGER.debug("Rejected %s: leaves the %s king in check", move, mover)
            raise SelfCheck("You can't put yourself in check")

        record = MoveRecord(move, piece, captured, state_before)
        self._history.append(record)
        self._state.en_passant = piece if move.flag == MoveFlag.DOUBLE_PAWN else None
        _LOGGER.debug(
            "Turn %d: %s %s %s%s",
            self._state.turn,
            mover,
            piece.piece_type.name.lower(),
            move,
            f" takes {captured.piece_type.name.lower()}" if captured else "",
        )

        if move.flag == MoveFlag.PROMOTION:
            self._state.promoted = piece
            if self._options.auto_promotion is None:
                _LOGGER.debug("Awaiting promotion choice for %s", move)
                return captured
            self._promote(record, self._options.auto_promotion)

        self._conclude_ply(record)
        return captured

    def replace_promoted_piece(self, kind: PieceType | str) -> Piece:
        """Resolve a pending promotion to *kind* (``B``, ``N``, ``Q`` or ``R``)."""
        if self._state.promoted is None:
            raise NoPendingPromotion("There is no piece to be promoted")
        piece_type = promotion_type(kind)
        record = self._history[-1]
        new_piece = self._promote(record, piece_type)
        self._conclude_ply(record)
        return new_piece

    def undo_last_move(self) -> Move | None:
        """Take back the last ply. Returns the undone Move, or None if empty."""
        if not self._history:
            return None

        record = self._history.pop()
        if record.promoted_to is not None:
            sq = record.promoted_to.square
            assert sq is not None
            self._board.remove(sq)
            self._pieces_on_board.remove(record.promoted_to)
            self._board.place(record.piece, sq)
            self._pieces_on_board.append(record.piece)

        self._undo_move(record.move, record.captured)
        self._state = record.state_before
        _LOGGER.debug("Undid %s", record.move)
        return record.move

    # ── Validation ───────────────────────────────────────────────────────

    def _ensure_accepting_moves(self) -> None:
        if self._state.checkmate:
            raise MatchOver("The match is over: checkmate")
        if self._state.promoted is not None:
            raise PromotionPending("Choose a piece for the pending promotion first")

    def _validate_source(self, sq: Square, *, check_owner: bool) -> None:
        piece = self._board[sq]
        if piece is None:
            raise NoPieceAtSource("There is no piece on source position")
        if check_owner and piece.color != self._state.current_player:
            raise WrongOwner("The chosen piece is not yours")
        if not self._generator().has_possible_move(piece):
            raise NoLegalMoves("There is no possible moves for the chosen piece")

    def _validate_target(self, source: Square, target: Square) -> None:
        piece = self._board[source]
        assert piece is not None
        if target not in self._generator().possible_moves(piece):
            raise IllegalTarget("The chosen piece can't move to target position")

    # ── Move application ─────────────────────────────────────────────────

    def _make_move(self, move: Move) -> Piece | None:
        """Apply *move* to the board and return the captured piece."""
        board = self._board
        piece = board.remove(move.source)
        assert piece is not None
        piece.move_count += 1
        captured = board.remove(move.target)
        board.place(piece, move.target)

        if move.flag.is_castle:
            rook_from, rook_to = move.rook_squares(board.columns)
            rook = board.remove(rook_from)
            assert rook is not None
            board.place(rook, rook_to)
            rook.move_count += 1
        elif move.flag == MoveFlag.EN_PASSANT:
            captured = board.remove(move.en_passant_square)

        if captured is not None:
            self._pieces_on_board.remove(captured)
            self._captured_pieces.append(captured)
        return captured

    def _undo_move(self, move: Move, captured: Piece | None) -> None:
        """Exact inverse of :meth:`_make_move`."""
        board = self._board
        piece = board.remove(move.target)
        assert piece is not None
        piece.move_count -= 1
        board.place(piece, move.source)

        if captured is not None:
            capture_sq = (
                move.en_passant_square
                if move.flag == MoveFlag.EN_PASSANT
                else move.target
            )
            board.place(captured, capture_sq)
            self._captured_pieces.remove(captured)
            self._pieces_on_board.append(captured)

        if move.flag.is_castle:
            rook_from, rook_to = move.rook_squares(board.columns)
            rook = board.remove(rook_to)
            assert rook is not None
            board.place(rook, rook_from)
            rook.move_count -= 1

    @contextmanager
    def _trial(self, move: Move) -> Iterator[Piece | None]:
        """Apply *move* for the duration of the block, then always undo it."""
        captured = self._make_move(move)
        try:
            yield captured
        finally:
            self._undo_move(move, captured)

    def _promote(self, record: MoveRecord, piece_type: PieceType) -> Piece:
        pawn = self._state.promoted
        assert pawn is not None and pawn.square is not None
        sq = pawn.square
        self._board.remove(sq)
        self._pieces_on_board.remove(pawn)

        new_piece = Piece(pawn.color, piece_type, move_count=pawn.move_count)
        self._board.place(new_piece, sq)
        self._pieces_on_board.append(new_piece)
        record.promoted_to = new_piece
        self._state.promoted = None
        _LOGGER.debug("Promoted %s to %s", record.move, piece_type.name.lower())
        return new_piece

    def _conclude_ply(self, record: MoveRecord) -> None:
        mover = record.piece.color
        opponent = mover.opposite
        self._state.check = self.is_in_check(opponent)
        if self.is_checkmate(opponent):
            self._state.checkmate = True
            _LOGGER.info("Checkmate on turn %d: %s wins", self._state.turn, mover)
        else:
            self._state.next_turn()

        for on_move in self.events.on_move:
            on_move(record)
        if self._state.checkmate:
            for on_checkmate in self.events.on_checkmate:
                on_checkmate(mover)

    # ── Internal ─────────────────────────────────────────────────────────

    def _generator(self) -> MoveGenerator:
        return MoveGenerator(self._board, self._state.en_passant)

    def _king(self, color: Color) -> Piece:
        for piece in self._pieces_on_board:
            if piece.color == color and piece.piece_type == PieceType.KING:
                return piece
        raise NoKingOnBoard(f"There is no {color} king on the board")

    @staticmethod
    def _to_square(position: PositionLike) -> Square:
        if isinstance(position, str):
            return ChessPosition.parse(position).to_square()
        if isinstance(position, ChessPosition):
            return position.to_square()
        return position
