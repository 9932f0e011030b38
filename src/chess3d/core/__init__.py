"""Core domain layer - board value types, coordinate mapping and snapshots.

Quick start::

    from chess3d.core import BoardSnapshot, Square, to_engine

    snapshot = BoardSnapshot.refresh(engine)
    print(snapshot[Square(7, 4)])   # 'K'
    print(to_engine(Square(7, 4)))  # (4, 0)
"""

from chess3d.core.coords import EngineCoord, to_engine, to_ui
from chess3d.core.enums import GameStatus, PieceKind, Side
from chess3d.core.move import MoveRecord
from chess3d.core.piece import PlacedPiece
from chess3d.core.snapshot import BoardSnapshot
from chess3d.core.types import (
    BOARD_SIZE,
    Square,
    all_squares,
    parse_square,
    square_name,
)

__all__ = [
    # Enums
    "GameStatus",
    "PieceKind",
    "Side",
    # Types / helpers
    "BOARD_SIZE",
    "EngineCoord",
    "Square",
    "all_squares",
    "parse_square",
    "square_name",
    "to_engine",
    "to_ui",
    # Domain objects
    "BoardSnapshot",
    "MoveRecord",
    "PlacedPiece",
]
