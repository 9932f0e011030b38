"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest

from chess3d.core.coords import EngineCoord
from chess3d.core.enums import GameStatus, PieceKind, Side
from chess3d.core.piece import PlacedPiece
from chess3d.engine.interfaces import IllegalMoveError, IRulesEngine

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"

_START_ROWS = (
    "RNBQKBNR",  # y = 0 (rank 1)
    "PPPPPPPP",
    "........",
    "........",
    "........",
    "........",
    "pppppppp",
    "rnbqkbnr",  # y = 7 (rank 8)
)


def _start_position() -> dict[EngineCoord, PlacedPiece]:
    return {
        (x, y): PlacedPiece.from_char(ch)
        for y, row in enumerate(_START_ROWS)
        for x, ch in enumerate(row)
        if ch != "."
    }


class FakeEngine(IRulesEngine):
    """Scripted rules engine.

    Legal destinations come from ``moves`` (engine coordinates); anything
    else is refused.  ``refuse_next`` makes the next ``commit_move`` raise
    even for a listed move.  Every call to ``commit_move`` is recorded.
    """

    def __init__(
        self,
        pieces: dict[EngineCoord, PlacedPiece] | None = None,
        moves: dict[EngineCoord, set[EngineCoord]] | None = None,
        side: Side = Side.WHITE,
    ) -> None:
        self.pieces = dict(_start_position() if pieces is None else pieces)
        self.moves = {k: set(v) for k, v in (moves or {}).items()}
        self.side = side
        self.next_status = GameStatus.IN_PROGRESS
        self._status = GameStatus.IN_PROGRESS
        self.refuse_next = False
        self.commits: list[tuple[EngineCoord, EngineCoord, PieceKind | None]] = []
        self.resets = 0

    def piece_at(self, x: int, y: int) -> PlacedPiece | None:
        return self.pieces.get((x, y))

    def legal_destinations(self, x: int, y: int) -> set[EngineCoord]:
        return set(self.moves.get((x, y), set()))

    def commit_move(
        self,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        promotion: PieceKind | None = None,
    ) -> None:
        src, dst = (from_x, from_y), (to_x, to_y)
        self.commits.append((src, dst, promotion))
        if self.refuse_next or dst not in self.moves.get(src, set()):
            self.refuse_next = False
            raise IllegalMoveError("refused", from_xy=src, to_xy=dst)
        piece = self.pieces.pop(src)
        if promotion is not None:
            piece = PlacedPiece(promotion, piece.side)
        self.pieces[dst] = piece
        self.moves = {}
        self.side = self.side.opposite
        self._status = self.next_status

    def status(self) -> GameStatus:
        return self._status

    def side_to_move(self) -> Side:
        return self.side

    def reset(self) -> None:
        self.resets += 1
        self.pieces = _start_position()
        self.moves = {}
        self.side = Side.WHITE
        self._status = GameStatus.IN_PROGRESS


@pytest.fixture
def make_engine() -> Callable[..., FakeEngine]:
    """Factory for :class:`FakeEngine` instances."""
    return FakeEngine


@pytest.fixture
def fake_engine() -> FakeEngine:
    """Fake engine in the starting position; e2 may go to e3/e4."""
    return FakeEngine(moves={(4, 1): {(4, 2), (4, 3)}})


def _is_ui_test(request: pytest.FixtureRequest) -> bool:
    return "ui" in Path(str(request.node.fspath)).parts


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton QApplication for UI tests."""
    from PyQt6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def _cleanup_qt_widgets(
    request: pytest.FixtureRequest,
) -> Iterator[None]:
    """Ensure UI tests do not leak top-level widgets into the next test."""
    if not _is_ui_test(request):
        yield
        return

    app = request.getfixturevalue("qapp")
    yield

    for widget in list(app.topLevelWidgets()):
        widget.close()
    app.processEvents()
