"""Tests for BoardController - the interaction core."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from chess3d.core.enums import GameStatus, PieceKind, Side
from chess3d.core.move import MoveRecord
from chess3d.core.piece import PlacedPiece
from chess3d.core.snapshot import BoardSnapshot
from chess3d.core.types import Square, all_squares, parse_square
from chess3d.engine.interfaces import IllegalMoveError
from chess3d.engine.python_chess_engine import PythonChessEngine
from chess3d.game.controller import BoardController, promotion_for
from chess3d.game.picking import CellAt, PieceAt
from chess3d.game.selection import SelectionPhase

if TYPE_CHECKING:
    from conftest import FakeEngine

E2, E4, E5, E7 = (parse_square(n) for n in ("e2", "e4", "e5", "e7"))

WHITE_PAWN = PlacedPiece(PieceKind.PAWN, Side.WHITE)
BLACK_PAWN = PlacedPiece(PieceKind.PAWN, Side.BLACK)


class _Recorder:
    def __init__(self, ctrl: BoardController) -> None:
        self.board_changes = 0
        self.moves: list[MoveRecord] = []
        self.rejected: list[tuple[MoveRecord, IllegalMoveError]] = []
        self.selections: list[object] = []
        ev = ctrl.events
        ev.on_board_changed.append(self._on_board_changed)
        ev.on_move.append(self.moves.append)
        ev.on_move_rejected.append(lambda r, e: self.rejected.append((r, e)))
        ev.on_selection_changed.append(self.selections.append)

    def _on_board_changed(self) -> None:
        self.board_changes += 1


def _promotion_engine(make_engine) -> FakeEngine:
    """White pawn on a7 that may step to a8, kings out of the way."""
    return make_engine(
        pieces={
            (0, 6): WHITE_PAWN,
            (0, 0): PlacedPiece(PieceKind.KING, Side.WHITE),
            (7, 7): PlacedPiece(PieceKind.KING, Side.BLACK),
        },
        moves={(0, 6): {(0, 7)}},
    )


class TestInitialState:
    def test_placement(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        assert ctrl.snapshot[Square(0, 0)] == PlacedPiece(PieceKind.ROOK, Side.BLACK)
        assert ctrl.snapshot[Square(7, 4)] == PlacedPiece(PieceKind.KING, Side.WHITE)

    def test_white_to_move_and_idle(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        assert ctrl.side_to_move == Side.WHITE
        assert ctrl.status == GameStatus.IN_PROGRESS
        assert ctrl.phase == SelectionPhase.IDLE
        assert len(ctrl.move_log) == 0
        assert ctrl.winner is None

    def test_legal_moves_are_mapped_to_ui(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        assert ctrl.legal_moves(E2) == frozenset({parse_square("e3"), E4})
        assert ctrl.legal_moves(E7) == frozenset()


class TestClickFlow:
    def test_handle_target_uses_square(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        ctrl.handle_target(CellAt(6, 4))
        assert ctrl.selection is not None and ctrl.selection.origin == E2
        ctrl.handle_target(PieceAt(4, 4))
        assert ctrl.move_log.entries == (MoveRecord(E2, E4),)

    def test_handle_miss_clears(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        ctrl.handle_target(PieceAt(6, 4))
        ctrl.handle_target(None)
        assert ctrl.phase == SelectionPhase.IDLE

    def test_select_then_move(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        rec = _Recorder(ctrl)

        ctrl.click(E2)
        assert ctrl.highlighted == frozenset({parse_square("e3"), E4})

        ctrl.click(E4)
        assert fake_engine.commits == [((4, 1), (4, 3), None)]
        assert ctrl.move_log.entries == (MoveRecord(E2, E4),)
        assert ctrl.snapshot[E4] == WHITE_PAWN
        assert ctrl.snapshot[E2] is None
        assert ctrl.side_to_move == Side.BLACK
        assert ctrl.selection is None
        assert rec.moves == [MoveRecord(E2, E4)]
        assert rec.board_changes == 1

    def test_selection_events(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        rec = _Recorder(ctrl)
        ctrl.click(E2)
        ctrl.click(None)
        assert len(rec.selections) == 2
        assert rec.selections[-1] is None

    def test_click_elsewhere_does_not_move(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        ctrl.click(E2)
        ctrl.click(E5)
        assert fake_engine.commits == []
        assert ctrl.phase == SelectionPhase.IDLE

    def test_opponent_piece_not_selectable(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        ctrl.click(E7)
        assert ctrl.phase == SelectionPhase.IDLE


class TestAttemptMove:
    def test_not_legal_skips_engine(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        rec = _Recorder(ctrl)
        result = ctrl.attempt_move(E2, E5)
        assert not result
        assert result.error is not None
        assert fake_engine.commits == []
        assert len(ctrl.move_log) == 0
        assert rec.rejected and rec.rejected[0][0] == MoveRecord(E2, E5)
        assert rec.board_changes == 0

    def test_engine_refusal_rolls_back(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        rec = _Recorder(ctrl)
        before = ctrl.snapshot
        fake_engine.refuse_next = True

        ctrl.click(E2)
        ctrl.click(E4)

        assert len(fake_engine.commits) == 1
        assert len(ctrl.move_log) == 0
        assert not ctrl.move_log.has_pending
        assert ctrl.snapshot == before
        assert ctrl.side_to_move == Side.WHITE
        assert ctrl.selection is None
        assert len(rec.rejected) == 1
        assert rec.moves == []

    def test_log_length_matches_accepted_moves(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        fake_engine.refuse_next = True
        ctrl.attempt_move(E2, E4)
        assert ctrl.attempt_move(E2, E4)
        assert len(ctrl.move_log) == 1

    def test_engine_crash_leaves_nothing_staged(
        self, fake_engine: FakeEngine, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        ctrl = BoardController(fake_engine)
        rec = _Recorder(ctrl)

        def crash(*args, **kwargs) -> None:
            raise RuntimeError("engine crashed")

        monkeypatch.setattr(fake_engine, "commit_move", crash)
        ctrl.click(E2)
        with pytest.raises(RuntimeError, match="engine crashed"):
            ctrl.click(E4)

        assert not ctrl.move_log.has_pending
        assert len(ctrl.move_log) == 0
        assert ctrl.selection is None
        assert rec.rejected == []
        assert rec.board_changes == 0

        # The next move goes through once the engine behaves again.
        monkeypatch.undo()
        assert ctrl.attempt_move(E2, E4)
        assert ctrl.move_log.entries == (MoveRecord(E2, E4),)

    def test_snapshot_is_replaced_not_mutated(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        before = ctrl.snapshot
        ctrl.attempt_move(E2, E4)
        assert ctrl.snapshot is not before
        assert before[E2] == WHITE_PAWN


class TestPromotion:
    def test_defaults_to_queen(self, make_engine) -> None:
        engine = _promotion_engine(make_engine)
        ctrl = BoardController(engine)
        ctrl.click(parse_square("a7"))
        ctrl.click(parse_square("a8"))
        assert engine.commits == [((0, 6), (0, 7), PieceKind.QUEEN)]
        assert ctrl.snapshot[parse_square("a8")] == PlacedPiece(
            PieceKind.QUEEN, Side.WHITE
        )

    def test_explicit_choice(self, make_engine) -> None:
        engine = _promotion_engine(make_engine)
        ctrl = BoardController(engine)
        result = ctrl.attempt_move(
            parse_square("a7"), parse_square("a8"), PieceKind.KNIGHT
        )
        assert result.promotion == PieceKind.KNIGHT
        assert engine.commits[0][2] == PieceKind.KNIGHT

    def test_plain_move_has_no_promotion(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        assert ctrl.attempt_move(E2, E4).promotion is None

    @pytest.mark.parametrize(
        "piece,dest,expected",
        [
            (WHITE_PAWN, Square(0, 3), PieceKind.QUEEN),
            (BLACK_PAWN, Square(7, 3), PieceKind.QUEEN),
            (WHITE_PAWN, Square(7, 3), None),
            (BLACK_PAWN, Square(0, 3), None),
            (WHITE_PAWN, Square(4, 3), None),
            (PlacedPiece(PieceKind.ROOK, Side.WHITE), Square(0, 3), None),
            (None, Square(0, 3), None),
        ],
    )
    def test_promotion_for(
        self,
        piece: PlacedPiece | None,
        dest: Square,
        expected: PieceKind | None,
    ) -> None:
        assert promotion_for(piece, dest) == expected

    def test_promotion_for_choice(self) -> None:
        assert promotion_for(WHITE_PAWN, Square(0, 0), PieceKind.ROOK) == PieceKind.ROOK


class TestGameOver:
    def test_winner_is_side_not_to_move(self, fake_engine: FakeEngine) -> None:
        fake_engine.next_status = GameStatus.CHECKMATE
        ctrl = BoardController(fake_engine)
        ctrl.attempt_move(E2, E4)
        assert ctrl.status == GameStatus.CHECKMATE
        assert ctrl.side_to_move == Side.BLACK
        assert ctrl.winner == Side.WHITE

    def test_stalemate_has_no_winner(self, fake_engine: FakeEngine) -> None:
        fake_engine.next_status = GameStatus.STALEMATE
        ctrl = BoardController(fake_engine)
        ctrl.attempt_move(E2, E4)
        assert ctrl.status.is_over
        assert ctrl.winner is None

    def test_clicks_after_mate_select_nothing_movable(
        self, fake_engine: FakeEngine
    ) -> None:
        fake_engine.next_status = GameStatus.CHECKMATE
        ctrl = BoardController(fake_engine)
        ctrl.attempt_move(E2, E4)
        ctrl.click(E7)
        assert ctrl.highlighted == frozenset()


class TestReset:
    def test_reset_game(self, fake_engine: FakeEngine) -> None:
        ctrl = BoardController(fake_engine)
        ctrl.attempt_move(E2, E4)
        ctrl.click(E7)
        rec = _Recorder(ctrl)

        ctrl.reset_game()

        assert fake_engine.resets == 1
        assert len(ctrl.move_log) == 0
        assert ctrl.side_to_move == Side.WHITE
        assert ctrl.selection is None
        assert ctrl.snapshot[E2] == WHITE_PAWN
        assert rec.board_changes == 1

    def test_reset_restores_every_square(self) -> None:
        ctrl = BoardController(PythonChessEngine())
        initial = BoardSnapshot.refresh(PythonChessEngine())
        # 1. e4 d5 2. exd5 Qxd5, two captures
        for uci in ("e2e4", "d7d5", "e4d5", "d8d5"):
            assert ctrl.attempt_move(parse_square(uci[:2]), parse_square(uci[2:]))
        assert ctrl.snapshot != initial
        rec = _Recorder(ctrl)

        ctrl.reset_game()

        for sq in all_squares():
            assert ctrl.snapshot[sq] == initial[sq], sq
        assert ctrl.status == GameStatus.IN_PROGRESS
        assert ctrl.side_to_move == Side.WHITE
        assert len(ctrl.move_log) == 0
        assert rec.board_changes == 1


class TestWithPythonChess:
    def test_scholars_mate(self) -> None:
        ctrl = BoardController(PythonChessEngine())
        for uci in ("e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7"):
            ctrl.click(parse_square(uci[:2]))
            ctrl.click(parse_square(uci[2:]))
        assert ctrl.status == GameStatus.CHECKMATE
        assert ctrl.winner == Side.WHITE
        assert ctrl.move_log.numbered_pairs()[-1] == "4. h5f7"

    def test_snapshot_matches_engine(self) -> None:
        engine = PythonChessEngine()
        ctrl = BoardController(engine)
        ctrl.attempt_move(E2, E4)
        assert ctrl.snapshot == BoardSnapshot.refresh(engine)
