"""Abstract interface for the chess rules authority.

Follows Dependency Inversion: the board controller depends on this ABC, not
on a concrete rules library, so any engine honouring the contract (or a test
fake) can be injected.

All coordinates here are engine coordinates: ``x`` is the file (0 = a),
``y`` the rank counted from white's side (0 = rank 1).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from chess3d.core.coords import EngineCoord
    from chess3d.core.enums import GameStatus, PieceKind, Side
    from chess3d.core.piece import PlacedPiece


class IllegalMoveError(Exception):
    """The rules engine refused to commit a move."""

    def __init__(self, message: str, *, from_xy: EngineCoord, to_xy: EngineCoord) -> None:
        super().__init__(message)
        self.from_xy = from_xy
        self.to_xy = to_xy


class IRulesEngine(ABC):
    """Interface for the rules engine consulted by the board controller."""

    @abstractmethod
    def piece_at(self, x: int, y: int) -> PlacedPiece | None:
        """Piece standing on ``(x, y)``, or ``None``."""

    @abstractmethod
    def legal_destinations(self, x: int, y: int) -> set[EngineCoord]:
        """Every cell the piece on ``(x, y)`` may legally move to right now.

        Empty when the cell is empty or holds a piece of the side not to
        move.
        """

    @abstractmethod
    def commit_move(
        self,
        from_x: int,
        from_y: int,
        to_x: int,
        to_y: int,
        promotion: PieceKind | None = None,
    ) -> None:
        """Apply a move.

        Raises:
            IllegalMoveError: the move is not legal in the current position.
        """

    @abstractmethod
    def status(self) -> GameStatus:
        """Status of the current position."""

    @abstractmethod
    def side_to_move(self) -> Side:
        """Side whose turn it is."""

    @abstractmethod
    def reset(self) -> None:
        """Return to the standard starting position, white to move."""
