"""Interaction layer - pick resolution, selection state machine, move log, board controller.

Quick start::

    from chess3d.core import parse_square
    from chess3d.engine import PythonChessEngine
    from chess3d.game import BoardController

    ctrl = BoardController(PythonChessEngine())
    ctrl.events.on_board_changed.append(lambda: print(ctrl.snapshot))
    ctrl.click(parse_square("e2"))
    ctrl.click(parse_square("e4"))
"""

from chess3d.game.controller import (
    DEFAULT_PROMOTION,
    BoardController,
    BoardEvents,
    MoveResult,
    promotion_for,
)
from chess3d.game.move_log import MoveLog, StagedMove
from chess3d.game.picking import CellAt, PieceAt, Target, parse_tag, resolve
from chess3d.game.selection import Selection, SelectionMachine, SelectionPhase

__all__ = [
    "DEFAULT_PROMOTION",
    "BoardController",
    "BoardEvents",
    "CellAt",
    "MoveLog",
    "MoveResult",
    "PieceAt",
    "Selection",
    "SelectionMachine",
    "SelectionPhase",
    "StagedMove",
    "Target",
    "parse_tag",
    "promotion_for",
    "resolve",
]
