"""Translation between UI squares and rules-engine coordinates.

The rules engine addresses cells as ``(x, y)`` with the origin at white's
bottom-left corner (a1) and ``y`` growing towards black.  The UI counts rows
downward from the far rank.  Every engine query goes through exactly one of
these two functions.
"""

from __future__ import annotations

from typing import TypeAlias

from chess3d.core.types import BOARD_SIZE, Square

EngineCoord: TypeAlias = tuple[int, int]  # (x, y), both 0-7


def to_engine(sq: Square) -> EngineCoord:
    """UI square -> engine ``(x, y)``."""
    return sq.col, BOARD_SIZE - 1 - sq.row


def to_ui(x: int, y: int) -> Square:
    """Engine ``(x, y)`` -> UI square."""
    return Square(BOARD_SIZE - 1 - y, x)
