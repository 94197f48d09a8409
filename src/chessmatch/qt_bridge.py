"""Qt bridge exposing a match to a presentation layer through signals."""

from __future__ import annotations

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from chessmatch.core.errors import ChessError
from chessmatch.core.notation import ChessPosition
from chessmatch.game.match import ChessMatch


class MatchBridge(QObject):
    """Thread-affine wrapper that turns match commands into slot calls."""

    move_made = pyqtSignal(str, str, object)  # source, target, captured piece
    move_rejected = pyqtSignal(str)
    checkmate = pyqtSignal(object)  # winner color
    promotion_required = pyqtSignal(str)  # square of the pawn
    possible_moves_ready = pyqtSignal(str, object)

    def __init__(self, match: ChessMatch | None = None) -> None:
        super().__init__()
        self._match = match or ChessMatch()

    @property
    def match(self) -> ChessMatch:
        return self._match

    @pyqtSlot(str, str)
    def request_move(self, source: str, target: str) -> None:
        """Perform *source* → *target* and report the outcome."""
        try:
            captured = self._match.perform_move(source, target)
        except ChessError as exc:
            self.move_rejected.emit(str(exc))
            return

        self.move_made.emit(source, target, captured)
        promoted = self._match.promoted
        if promoted is not None and promoted.square is not None:
            self.promotion_required.emit(
                str(ChessPosition.from_square(promoted.square))
            )
        self._report_checkmate()

    @pyqtSlot(str)
    def request_promotion(self, kind: str) -> None:
        try:
            self._match.replace_promoted_piece(kind)
        except ChessError as exc:
            self.move_rejected.emit(str(exc))
            return
        self._report_checkmate()

    @pyqtSlot(str)
    def request_possible_moves(self, source: str) -> None:
        try:
            grid = self._match.possible_moves(source)
        except ChessError as exc:
            self.move_rejected.emit(str(exc))
            return
        self.possible_moves_ready.emit(source, grid)

    def _report_checkmate(self) -> None:
        if self._match.checkmate:
            self.checkmate.emit(self._match.winner)
