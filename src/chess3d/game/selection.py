"""Selection state machine - which square is picked and where it may go.

States::

    IDLE ──click own piece S──────────────▶ SELECTED(S, legal(S))
    SELECTED(o) ──click own piece S───────▶ SELECTED(S, legal(S))
    SELECTED(o, dests) ──click D ∈ dests──▶ IDLE   (commit o→D first)
    SELECTED ──any other click / miss─────▶ IDLE
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import TYPE_CHECKING

from chess3d.core.types import Square

if TYPE_CHECKING:
    from chess3d.core.enums import Side
    from chess3d.core.snapshot import BoardSnapshot

_LOGGER = logging.getLogger(__name__)

LegalMovesFn = Callable[[Square], frozenset[Square]]
CommitFn = Callable[[Square, Square], object]
SelectionCallback = Callable[["Selection | None"], None]


class SelectionPhase(IntEnum):
    """Finite-state-machine states for piece selection."""

    IDLE = auto()
    SELECTED = auto()


@dataclass(frozen=True, slots=True)
class Selection:
    """The picked origin and the destinations the engine allows from it."""

    origin: Square
    legal_destinations: frozenset[Square]

    def allows(self, dest: Square) -> bool:
        return dest in self.legal_destinations


class SelectionMachine:
    """Tracks at most one selected square.

    Args:
        legal_moves: Returns the legal destinations from a square (asked of
            the rules engine; never derived here).
        commit: Invoked with ``(origin, dest)`` when a highlighted
            destination is clicked, before the selection is cleared.
    """

    __slots__ = ("_selection", "_legal_moves", "_commit", "on_changed")

    def __init__(self, legal_moves: LegalMovesFn, commit: CommitFn) -> None:
        self._selection: Selection | None = None
        self._legal_moves = legal_moves
        self._commit = commit
        self.on_changed: list[SelectionCallback] = []

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def selection(self) -> Selection | None:
        return self._selection

    @property
    def phase(self) -> SelectionPhase:
        if self._selection is None:
            return SelectionPhase.IDLE
        return SelectionPhase.SELECTED

    @property
    def highlighted(self) -> frozenset[Square]:
        """Destinations currently shown to the user."""
        if self._selection is None:
            return frozenset()
        return self._selection.legal_destinations

    # ── Transitions ──────────────────────────────────────────────────────

    def click(self, sq: Square | None, snapshot: BoardSnapshot, side: Side) -> None:
        """Feed one resolved click (``None`` = missed the board)."""
        if sq is None:
            self.clear()
            return

        current = self._selection
        if current is not None and current.allows(sq):
            self._commit(current.origin, sq)
            self.clear()
            return

        if snapshot.is_own_piece(sq, side):
            self.select(sq)
            return

        self.clear()

    def select(self, origin: Square) -> None:
        """Select *origin*, replacing any previous selection wholesale."""
        self._selection = Selection(origin, frozenset(self._legal_moves(origin)))
        _LOGGER.debug(
            "Selected %s (%d destinations)",
            origin,
            len(self._selection.legal_destinations),
        )
        self._emit()

    def clear(self) -> None:
        if self._selection is None:
            return
        self._selection = None
        _LOGGER.debug("Selection cleared")
        self._emit()

    def _emit(self) -> None:
        for cb in self.on_changed:
            cb(self._selection)
