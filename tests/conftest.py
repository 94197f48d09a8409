"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator, Mapping

import pytest

from chessmatch.core.enums import Color
from chessmatch.core.piece import Piece
from chessmatch.game.interfaces import MatchOptions
from chessmatch.game.match import ChessMatch

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

MatchFactory = Callable[..., ChessMatch]


def build_match(
    pieces: Mapping[str, str],
    current_player: Color = Color.WHITE,
    options: MatchOptions | None = None,
) -> ChessMatch:
    """Empty-board match with ``{"e1": "K", "e8": "k", ...}`` placed on it."""
    match = ChessMatch.empty(options, current_player)
    for name, char in pieces.items():
        proto = Piece.from_char(char)
        match.place_new_piece(proto.piece_type, proto.color, name)
    return match


@pytest.fixture
def make_match() -> MatchFactory:
    """Factory for matches set up from a square → piece-letter mapping."""
    return build_match


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QCoreApplication for Qt bridge tests."""
    qt_core = pytest.importorskip("PyQt6.QtCore")

    app = qt_core.QCoreApplication.instance()
    if app is None:
        app = qt_core.QCoreApplication([])
    yield app
