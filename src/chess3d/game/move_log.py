"""Append-only move log with staged (two-phase) writes."""

from __future__ import annotations

from collections.abc import Iterator

from chess3d.core.move import MoveRecord


class StagedMove:
    """A pending log entry: invisible to readers until :meth:`finalize`."""

    __slots__ = ("_log", "record", "_done")

    def __init__(self, log: MoveLog, record: MoveRecord) -> None:
        self._log = log
        self.record = record
        self._done = False

    @property
    def pending(self) -> bool:
        return not self._done

    def finalize(self) -> None:
        """Append the staged record to the log."""
        self._close()
        self._log._entries.append(self.record)

    def discard(self) -> None:
        """Drop the staged record; the log is left untouched."""
        self._close()

    def _close(self) -> None:
        if self._done:
            raise RuntimeError(f"Staged move {self.record} already resolved")
        if self._log._staged is not self:
            raise RuntimeError(f"Staged move {self.record} is not the log's pending entry")
        self._done = True
        self._log._staged = None


class MoveLog:
    """Ordered record of accepted moves.

    Entries only ever enter through :meth:`stage` followed by
    :meth:`StagedMove.finalize`, so the log length always equals the number
    of moves the engine accepted.
    """

    __slots__ = ("_entries", "_staged")

    def __init__(self) -> None:
        self._entries: list[MoveRecord] = []
        self._staged: StagedMove | None = None

    def stage(self, record: MoveRecord) -> StagedMove:
        """Reserve *record* for appending; at most one entry may be pending."""
        if self._staged is not None:
            raise RuntimeError(
                f"Cannot stage {record}: {self._staged.record} is still pending"
            )
        self._staged = StagedMove(self, record)
        return self._staged

    def clear(self) -> None:
        self._entries.clear()
        self._staged = None

    @property
    def entries(self) -> tuple[MoveRecord, ...]:
        return tuple(self._entries)

    @property
    def has_pending(self) -> bool:
        return self._staged is not None

    def numbered_pairs(self) -> list[str]:
        """Lines of the form ``1. e2e4 e7e5``."""
        lines: list[str] = []
        for idx in range(0, len(self._entries), 2):
            pair = " ".join(str(r) for r in self._entries[idx : idx + 2])
            lines.append(f"{idx // 2 + 1}. {pair}")
        return lines

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[MoveRecord]:
        return iter(self._entries)
