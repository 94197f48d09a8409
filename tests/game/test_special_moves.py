"""Tests for castling, en passant and promotion."""

from __future__ import annotations

import pytest

from chessmatch.core.enums import Color, PieceType
from chessmatch.core.errors import (
    IllegalTarget,
    InvalidPromotion,
    NoPendingPromotion,
    PromotionPending,
    SelfCheck,
)
from chessmatch.core.notation import parse_square
from chessmatch.game.interfaces import MatchOptions, MatchPhase
from chessmatch.game.match import ChessMatch

CASTLING = {"e1": "K", "a1": "R", "h1": "R", "e8": "k"}


class TestCastling:
    def test_kingside(self, make_match) -> None:
        match = make_match(CASTLING)
        assert match.perform_move("e1", "g1") is None
        king = match.board[parse_square("g1")]
        rook = match.board[parse_square("f1")]
        assert king is not None and king.piece_type == PieceType.KING
        assert rook is not None and rook.piece_type == PieceType.ROOK
        assert match.board[parse_square("h1")] is None
        assert king.move_count == 1
        assert rook.move_count == 1

    def test_queenside(self, make_match) -> None:
        match = make_match(CASTLING)
        match.perform_move("e1", "c1")
        assert match.board.layout()[7] == "..KR...R"

    def test_black_kingside(self, make_match) -> None:
        match = make_match(
            {"e1": "K", "e8": "k", "h8": "r"}, current_player=Color.BLACK
        )
        match.perform_move("e8", "g8")
        assert match.board.layout()[0] == ".....rk."

    def test_excluded_after_king_moved(self, make_match) -> None:
        match = make_match(CASTLING)
        match.perform_move("e1", "f1")
        match.perform_move("e8", "d8")
        match.perform_move("f1", "e1")
        match.perform_move("d8", "e8")
        grid = match.possible_moves("e1")
        assert not grid[7][6]
        assert not grid[7][2]
        with pytest.raises(IllegalTarget):
            match.perform_move("e1", "g1")

    def test_excluded_after_rook_moved(self, make_match) -> None:
        match = make_match(CASTLING)
        match.perform_move("h1", "h2")
        match.perform_move("e8", "d8")
        match.perform_move("h2", "h1")
        match.perform_move("d8", "e8")
        grid = match.possible_moves("e1")
        assert not grid[7][6]
        assert grid[7][2]

    def test_through_attacked_square_allowed(self, make_match) -> None:
        match = make_match({**CASTLING, "f8": "r"})
        match.perform_move("e1", "g1")
        assert match.board.layout()[7] == "R....RK."

    def test_into_check_rejected(self, make_match) -> None:
        match = make_match({**CASTLING, "g8": "r"})
        before = match.board.layout()
        with pytest.raises(SelfCheck):
            match.perform_move("e1", "g1")
        assert match.board.layout() == before
        rook = match.board[parse_square("h1")]
        king = match.board[parse_square("e1")]
        assert rook is not None and rook.move_count == 0
        assert king is not None and king.move_count == 0


def _open_en_passant(match: ChessMatch) -> None:
    for source, target in [("e2", "e4"), ("a7", "a6"), ("e4", "e5"), ("d7", "d5")]:
        match.perform_move(source, target)


class TestEnPassant:
    def test_marker_follows_double_step(self) -> None:
        match = ChessMatch()
        match.perform_move("e2", "e4")
        pawn = match.board[parse_square("e4")]
        assert pawn is not None
        assert match.en_passant_vulnerable is pawn
        match.perform_move("a7", "a6")
        assert match.en_passant_vulnerable is None

    def test_single_step_does_not_mark(self) -> None:
        match = ChessMatch()
        match.perform_move("e2", "e3")
        assert match.en_passant_vulnerable is None

    def test_capture(self) -> None:
        match = ChessMatch()
        _open_en_passant(match)
        victim = match.board[parse_square("d5")]
        captured = match.perform_move("e5", "d6")
        assert captured is victim
        assert match.board[parse_square("d5")] is None
        pawn = match.board[parse_square("d6")]
        assert pawn is not None and str(pawn) == "P"
        assert match.captured_pieces(Color.BLACK) == [victim]

    def test_window_expires(self) -> None:
        match = ChessMatch()
        _open_en_passant(match)
        match.perform_move("h2", "h3")
        assert match.en_passant_vulnerable is None
        match.perform_move("a6", "a5")
        with pytest.raises(IllegalTarget):
            match.perform_move("e5", "d6")

    def test_escapes_check(self, make_match) -> None:
        match = make_match({"h1": "K", "d2": "P", "e5": "k", "e4": "p"})
        match.perform_move("d2", "d4")
        assert match.check
        assert not match.checkmate
        captured = match.perform_move("e4", "d3")
        assert captured is not None and str(captured) == "P"
        assert match.board[parse_square("d4")] is None
        assert not match.is_in_check(Color.BLACK)


PROMOTION = {"e1": "K", "h5": "k", "a7": "P", "b8": "r"}


class TestPromotion:
    def test_auto_queen(self, make_match) -> None:
        match = make_match(PROMOTION)
        pawn = match.board[parse_square("a7")]
        match.perform_move("a7", "a8")
        queen = match.board[parse_square("a8")]
        assert queen is not None and str(queen) == "Q"
        assert pawn not in match.pieces_on_board()
        assert not any(
            p.piece_type == PieceType.PAWN for p in match.pieces_on_board(Color.WHITE)
        )
        assert match.promoted is None
        assert match.turn == 2
        assert match.current_player == Color.BLACK

    def test_capture_promotes(self, make_match) -> None:
        match = make_match(PROMOTION)
        captured = match.perform_move("a7", "b8")
        assert captured is not None and str(captured) == "r"
        assert match.board.layout()[0] == ".Q......"

    def test_configured_kind(self, make_match) -> None:
        match = make_match(
            PROMOTION, options=MatchOptions(auto_promotion=PieceType.KNIGHT)
        )
        match.perform_move("a7", "a8")
        assert match.board.layout()[0] == "Nr......"

    def test_black_promotes(self, make_match) -> None:
        match = make_match(
            {"e1": "K", "e8": "k", "h2": "p"}, current_player=Color.BLACK
        )
        match.perform_move("h2", "h1")
        assert match.board.layout()[7] == "....K..q"
        assert match.check

    def test_no_pending_promotion(self) -> None:
        with pytest.raises(NoPendingPromotion):
            ChessMatch().replace_promoted_piece("Q")

    def test_auto_kind_given_as_letter(self, make_match) -> None:
        options = MatchOptions(auto_promotion="n")
        assert options.auto_promotion is PieceType.KNIGHT
        match = make_match({"e1": "K", "h5": "k", "a7": "P"}, options=options)
        match.perform_move("a7", "a8")
        knight = match.board[parse_square("a8")]
        assert knight is not None and knight.piece_type is PieceType.KNIGHT
        assert match.history[-1].promoted_to is knight
        assert match.promoted is None
        assert match.current_player == Color.BLACK

    def test_invalid_auto_kind(self) -> None:
        with pytest.raises(InvalidPromotion):
            MatchOptions(auto_promotion=PieceType.KING)

    @pytest.mark.parametrize("kind", ["K", "P", "x", ""])
    def test_invalid_auto_letter(self, kind: str) -> None:
        with pytest.raises(InvalidPromotion):
            MatchOptions(auto_promotion=kind)


class TestTwoPhasePromotion:
    def _pending(self, make_match) -> ChessMatch:
        match = make_match(PROMOTION, options=MatchOptions.two_phase_promotion())
        match.perform_move("a7", "a8")
        return match

    def test_pending_state(self, make_match) -> None:
        match = self._pending(make_match)
        assert match.promoted is match.board[parse_square("a8")]
        assert match.phase == MatchPhase.AWAITING_PROMOTION
        assert match.turn == 1
        assert match.current_player == Color.WHITE

    def test_moves_blocked_until_resolved(self, make_match) -> None:
        match = self._pending(make_match)
        with pytest.raises(PromotionPending):
            match.perform_move("e1", "e2")

    def test_resolve(self, make_match) -> None:
        match = self._pending(make_match)
        knight = match.replace_promoted_piece("n")
        assert knight.piece_type == PieceType.KNIGHT
        assert match.board[parse_square("a8")] is knight
        assert match.promoted is None
        assert match.phase == MatchPhase.IN_PROGRESS
        assert match.turn == 2
        assert match.current_player == Color.BLACK

    def test_resolve_with_piece_type(self, make_match) -> None:
        match = self._pending(make_match)
        rook = match.replace_promoted_piece(PieceType.ROOK)
        assert str(rook) == "R"

    @pytest.mark.parametrize("kind", ["K", "P", "x", "", PieceType.KING])
    def test_invalid_kind(self, make_match, kind: PieceType | str) -> None:
        match = self._pending(make_match)
        with pytest.raises(InvalidPromotion):
            match.replace_promoted_piece(kind)
        assert match.phase == MatchPhase.AWAITING_PROMOTION
