"""Rules-engine layer - the interface the board controller consumes and its
python-chess implementation."""

from chess3d.engine.interfaces import IllegalMoveError, IRulesEngine
from chess3d.engine.python_chess_engine import PythonChessEngine

__all__ = [
    "IRulesEngine",
    "IllegalMoveError",
    "PythonChessEngine",
]
