"""Per-piece move generation and attack detection.

Moves produced here are *possible* moves: they ignore whose turn it is and
whether the mover's own king would be left in check.  Filtering those is the
job of :class:`~chessmatch.game.match.ChessMatch`.
"""

from __future__ import annotations

from chessmatch.core.board import Board
from chessmatch.core.enums import Color, MoveFlag, PieceType
from chessmatch.core.move import Move
from chessmatch.core.piece import Piece
from chessmatch.core.types import Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDING_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


class MoveGenerator:
    """Computes possible destinations for pieces on a :class:`Board`.

    Match-level context is passed in explicitly: *en_passant* is the pawn
    that has just advanced two squares (if any).  Castling rights are read
    from the move counts of the king and rooks on the board.
    """

    __slots__ = ("_board", "_en_passant")

    def __init__(self, board: Board, en_passant: Piece | None = None) -> None:
        self._board = board
        self._en_passant = en_passant

    # -- Public API ---------------------------------------------------------

    def possible_moves(self, piece: Piece) -> set[Square]:
        """All squares *piece* could move to, computed fresh."""
        sq = piece.square
        if sq is None:
            return set()

        moves: set[Square] = set()
        pt = piece.piece_type
        if pt == PieceType.PAWN:
            self._gen_pawn(piece, sq, moves)
        elif pt == PieceType.KNIGHT:
            self._gen_steps(piece, sq, KNIGHT_OFFSETS, moves)
        elif pt == PieceType.KING:
            self._gen_steps(piece, sq, KING_OFFSETS, moves)
            self._gen_castling(piece, sq, moves)
        else:
            self._gen_sliding(piece, sq, _SLIDING_DIRS[pt], moves)
        return moves

    def possible_moves_grid(self, piece: Piece) -> list[list[bool]]:
        """:meth:`possible_moves` as one boolean per board square."""
        board = self._board
        moves = self.possible_moves(piece)
        return [
            [Square(row, column) in moves for column in range(board.columns)]
            for row in range(board.rows)
        ]

    def has_possible_move(self, piece: Piece) -> bool:
        return bool(self.possible_moves(piece))

    def classify(self, piece: Piece, target: Square) -> Move:
        """Tag the move of *piece* to *target* with its special-move kind."""
        source = piece.square
        if source is None:
            raise ValueError(f"{piece!r} is not on the board")

        d_row = target.row - source.row
        d_column = target.column - source.column
        flag = MoveFlag.NORMAL
        if piece.piece_type == PieceType.PAWN:
            if target.row == self._last_row(piece.color):
                flag = MoveFlag.PROMOTION
            elif abs(d_row) == 2:
                flag = MoveFlag.DOUBLE_PAWN
            elif d_column != 0 and self._board[target] is None:
                flag = MoveFlag.EN_PASSANT
        elif piece.piece_type == PieceType.KING and abs(d_column) == 2:
            flag = (
                MoveFlag.CASTLE_KINGSIDE if d_column > 0 else MoveFlag.CASTLE_QUEENSIDE
            )
        return Move(source, target, flag)

    # -- Attack detection ---------------------------------------------------

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Is *sq* among the possible moves of any piece of *by_color*?"""
        return any(
            sq in self.possible_moves(piece) for piece in self._board.pieces(by_color)
        )

    # -- Piece-specific generators (private) -------------------------------

    def _last_row(self, color: Color) -> int:
        return 0 if color == Color.WHITE else self._board.rows - 1

    def _gen_pawn(self, piece: Piece, sq: Square, moves: set[Square]) -> None:
        board = self._board
        if piece.color == Color.WHITE:
            step = -1
            start_row = board.rows - 2
        else:
            step = 1
            start_row = 1
        # Row a pawn must stand on to capture en passant.
        en_passant_row = start_row + 3 * step

        one_step = sq.offset(step, 0)
        if board.contains(one_step) and board[one_step] is None:
            moves.add(one_step)
            two_step = sq.offset(2 * step, 0)
            if (
                sq.row == start_row
                and board.contains(two_step)
                and board[two_step] is None
            ):
                moves.add(two_step)

        for d_column in (-1, 1):
            cap_sq = sq.offset(step, d_column)
            if not board.contains(cap_sq):
                continue
            target = board[cap_sq]
            if target is not None:
                if piece.is_opponent_of(target):
                    moves.add(cap_sq)
                continue
            if sq.row != en_passant_row or self._en_passant is None:
                continue
            victim = board[sq.offset(0, d_column)]
            if (
                victim is self._en_passant
                and victim.color != piece.color
                and victim.piece_type == PieceType.PAWN
            ):
                moves.add(cap_sq)

    def _gen_steps(
        self,
        piece: Piece,
        sq: Square,
        offsets: tuple[tuple[int, int], ...],
        moves: set[Square],
    ) -> None:
        board = self._board
        for d_row, d_column in offsets:
            to_sq = sq.offset(d_row, d_column)
            if not board.contains(to_sq):
                continue
            target = board[to_sq]
            if target is None or piece.is_opponent_of(target):
                moves.add(to_sq)

    def _gen_sliding(
        self,
        piece: Piece,
        sq: Square,
        directions: tuple[tuple[int, int], ...],
        moves: set[Square],
    ) -> None:
        board = self._board
        for d_row, d_column in directions:
            to_sq = sq.offset(d_row, d_column)
            while board.contains(to_sq):
                target = board[to_sq]
                if target is None:
                    moves.add(to_sq)
                    to_sq = to_sq.offset(d_row, d_column)
                    continue
                if piece.is_opponent_of(target):
                    moves.add(to_sq)
                break

    def _gen_castling(self, king: Piece, sq: Square, moves: set[Square]) -> None:
        # Squares crossed by the king are not tested for attacks here.
        if king.move_count != 0:
            return

        board = self._board
        row = sq.row
        last_column = board.columns - 1

        if sq.column + 2 < last_column and self._can_castle_with(
            king, Square(row, last_column), range(sq.column + 1, last_column)
        ):
            moves.add(Square(row, sq.column + 2))

        if sq.column - 2 > 0 and self._can_castle_with(
            king, Square(row, 0), range(1, sq.column)
        ):
            moves.add(Square(row, sq.column - 2))

    def _can_castle_with(self, king: Piece, rook_sq: Square, between: range) -> bool:
        board = self._board
        rook = board[rook_sq]
        if (
            rook is None
            or rook.piece_type != PieceType.ROOK
            or rook.color != king.color
            or rook.move_count != 0
        ):
            return False
        row = rook_sq.row
        return all(board[Square(row, column)] is None for column in between)
