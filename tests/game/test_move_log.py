"""Tests for MoveLog and its staged writes."""

import pytest

from chess3d.core.move import MoveRecord
from chess3d.core.types import parse_square
from chess3d.game.move_log import MoveLog


def _rec(uci: str) -> MoveRecord:
    return MoveRecord(parse_square(uci[:2]), parse_square(uci[2:]))


class TestStaging:
    def test_staged_entry_is_invisible(self) -> None:
        log = MoveLog()
        staged = log.stage(_rec("e2e4"))
        assert len(log) == 0
        assert log.has_pending
        assert staged.pending

    def test_finalize_appends(self) -> None:
        log = MoveLog()
        log.stage(_rec("e2e4")).finalize()
        assert log.entries == (_rec("e2e4"),)
        assert not log.has_pending

    def test_discard_leaves_log_untouched(self) -> None:
        log = MoveLog()
        log.stage(_rec("e2e4")).finalize()
        log.stage(_rec("e7e6")).discard()
        assert log.entries == (_rec("e2e4"),)
        assert not log.has_pending

    def test_only_one_pending(self) -> None:
        log = MoveLog()
        log.stage(_rec("e2e4"))
        with pytest.raises(RuntimeError):
            log.stage(_rec("d2d4"))

    def test_resolve_twice_fails(self) -> None:
        log = MoveLog()
        staged = log.stage(_rec("e2e4"))
        staged.finalize()
        with pytest.raises(RuntimeError):
            staged.discard()
        assert len(log) == 1


class TestFormatting:
    def test_numbered_pairs(self) -> None:
        log = MoveLog()
        for uci in ("e2e4", "e7e5", "g1f3"):
            log.stage(_rec(uci)).finalize()
        assert log.numbered_pairs() == ["1. e2e4 e7e5", "2. g1f3"]

    def test_clear(self) -> None:
        log = MoveLog()
        log.stage(_rec("e2e4")).finalize()
        log.stage(_rec("e7e5"))
        log.clear()
        assert len(log) == 0
        assert list(log) == []
