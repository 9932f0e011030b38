"""BoardController - the interaction core between the board UI and the rules engine.

Owns the board snapshot, the selection state machine and the move log.
Emits events via simple callbacks so the UI / tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chess3d.core.coords import to_engine, to_ui
from chess3d.core.enums import GameStatus, PieceKind, Side
from chess3d.core.move import MoveRecord
from chess3d.core.piece import PlacedPiece
from chess3d.core.snapshot import BoardSnapshot
from chess3d.core.types import Square
from chess3d.engine.interfaces import IllegalMoveError, IRulesEngine
from chess3d.game.move_log import MoveLog, StagedMove
from chess3d.game.picking import Target
from chess3d.game.selection import (
    Selection,
    SelectionCallback,
    SelectionMachine,
    SelectionPhase,
)

_LOGGER = logging.getLogger(__name__)

DEFAULT_PROMOTION = PieceKind.QUEEN

# ── Event definitions ────────────────────────────────────────────────────────

BoardChangedCallback = Callable[[], None]
MoveCallback = Callable[[MoveRecord], None]
RejectedCallback = Callable[[MoveRecord, IllegalMoveError], None]


@dataclass
class BoardEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_board_changed: list[BoardChangedCallback] = field(default_factory=list)
    on_selection_changed: list[SelectionCallback] = field(default_factory=list)
    on_move: list[MoveCallback] = field(default_factory=list)
    on_move_rejected: list[RejectedCallback] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class MoveResult:
    """Outcome of :meth:`BoardController.attempt_move`. Truthy when accepted."""

    record: MoveRecord
    promotion: PieceKind | None = None
    error: IllegalMoveError | None = None

    @property
    def accepted(self) -> bool:
        return self.error is None

    def __bool__(self) -> bool:
        return self.accepted


def promotion_for(
    piece: PlacedPiece | None,
    dest: Square,
    choice: PieceKind | None = None,
) -> PieceKind | None:
    """Promotion kind to send with a move, or ``None`` for a plain move.

    A pawn reaching its far rank needs one; *choice* wins when given,
    otherwise the pawn becomes a queen.
    """
    if piece is None or not piece.is_pawn or dest.row != piece.side.far_row:
        return None
    return choice if choice is not None else DEFAULT_PROMOTION


# ── Controller ───────────────────────────────────────────────────────────────


class BoardController:
    """Drives selection and move submission against an injected rules engine.

    Thread-safety: every method runs synchronously on the GUI thread; the
    engine call inside :meth:`attempt_move` blocks until it returns.
    """

    __slots__ = (
        "_engine",
        "_snapshot",
        "_side",
        "_status",
        "_log",
        "_selection",
        "events",
    )

    def __init__(self, engine: IRulesEngine) -> None:
        self._engine = engine
        self._log = MoveLog()
        self.events = BoardEvents()
        self._selection = SelectionMachine(self.legal_moves, self._commit_from_click)
        self._selection.on_changed.append(self._emit_selection)
        self._snapshot = BoardSnapshot.refresh(engine)
        self._side = engine.side_to_move()
        self._status = engine.status()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def snapshot(self) -> BoardSnapshot:
        return self._snapshot

    @property
    def side_to_move(self) -> Side:
        return self._side

    @property
    def status(self) -> GameStatus:
        return self._status

    @property
    def winner(self) -> Side | None:
        """The side that delivered mate, if the game ended that way."""
        if self._status == GameStatus.CHECKMATE:
            return self._side.opposite
        return None

    @property
    def move_log(self) -> MoveLog:
        return self._log

    @property
    def selection(self) -> Selection | None:
        return self._selection.selection

    @property
    def phase(self) -> SelectionPhase:
        return self._selection.phase

    @property
    def highlighted(self) -> frozenset[Square]:
        return self._selection.highlighted

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, origin: Square) -> frozenset[Square]:
        """Destinations the engine allows from *origin* in the current position."""
        return frozenset(
            to_ui(x, y) for x, y in self._engine.legal_destinations(*to_engine(origin))
        )

    # ── Commands ─────────────────────────────────────────────────────────

    def reset_game(self) -> None:
        """Start over: initial position, white to move, empty log, nothing selected."""
        self._engine.reset()
        self._log.clear()
        self._refresh_from_engine()
        self._selection.clear()
        _LOGGER.info("New game started")
        self._emit_board_changed()

    def click(self, sq: Square | None) -> None:
        """Feed a resolved pointer click (``None`` when the board was missed)."""
        self._selection.click(sq, self._snapshot, self._side)

    def handle_target(self, target: Target) -> None:
        """Feed a picked target; pieces and tiles both count as their square."""
        self.click(target.square if target is not None else None)

    def attempt_move(
        self,
        origin: Square,
        dest: Square,
        promotion: PieceKind | None = None,
    ) -> MoveResult:
        """Validate, stage, commit; roll back the staged log entry on rejection.

        Never raises :class:`IllegalMoveError`; the outcome is in the result.
        Any other engine failure propagates, with nothing left staged.
        """
        record = MoveRecord(origin, dest)
        from_xy, to_xy = to_engine(origin), to_engine(dest)

        if dest not in self.legal_moves(origin):
            error = IllegalMoveError(
                f"{dest} is not a legal destination from {origin}",
                from_xy=from_xy,
                to_xy=to_xy,
            )
            self._selection.clear()
            self._reject(record, error)
            return MoveResult(record, error=error)

        promo = promotion_for(self._snapshot[origin], dest, promotion)
        staged = self._log.stage(record)
        try:
            self._engine.commit_move(*from_xy, *to_xy, promotion=promo)
        except IllegalMoveError as exc:
            self._roll_back(staged)
            self._reject(record, exc)
            return MoveResult(record, promo, exc)
        except Exception:
            self._roll_back(staged)
            _LOGGER.error("Engine failed on %s, staged entry discarded", record)
            raise

        staged.finalize()
        self._refresh_from_engine()
        self._selection.clear()
        _LOGGER.info("Move %s accepted, status %s", record, self._status.name)
        if self._status.is_over:
            _LOGGER.info("Game over: %s", self._status.name)
        for cb in self.events.on_move:
            cb(record)
        self._emit_board_changed()
        return MoveResult(record, promo)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _commit_from_click(self, origin: Square, dest: Square) -> MoveResult:
        return self.attempt_move(origin, dest)

    def _roll_back(self, staged: StagedMove) -> None:
        if staged.pending:
            staged.discard()
        self._selection.clear()

    def _refresh_from_engine(self) -> None:
        engine = self._engine
        snapshot = BoardSnapshot.refresh(engine)
        side = engine.side_to_move()
        status = engine.status()
        self._snapshot, self._side, self._status = snapshot, side, status

    def _reject(self, record: MoveRecord, error: IllegalMoveError) -> None:
        _LOGGER.info("Move %s rejected: %s", record, error)
        for cb in self.events.on_move_rejected:
            cb(record, error)

    def _emit_board_changed(self) -> None:
        for cb in self.events.on_board_changed:
            cb()

    def _emit_selection(self, selection: Selection | None) -> None:
        for cb in self.events.on_selection_changed:
            cb(selection)
