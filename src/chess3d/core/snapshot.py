"""BoardSnapshot - read-only piece placement for one turn."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING

from chess3d.core.coords import to_engine
from chess3d.core.enums import Side
from chess3d.core.piece import PlacedPiece
from chess3d.core.types import BOARD_SIZE, Square, all_squares

if TYPE_CHECKING:
    from chess3d.engine.interfaces import IRulesEngine


class BoardSnapshot(Mapping[Square, PlacedPiece | None]):
    """Immutable mapping of all 64 squares to their piece (or ``None``).

    A new snapshot is built after every engine state change; snapshots are
    never updated in place.
    """

    __slots__ = ("_squares",)

    def __init__(self, squares: Mapping[Square, PlacedPiece | None]) -> None:
        self._squares: dict[Square, PlacedPiece | None] = {
            sq: squares.get(sq) for sq in all_squares()
        }

    # ── Factories ────────────────────────────────────────────────────────

    @classmethod
    def refresh(cls, engine: IRulesEngine) -> BoardSnapshot:
        """Query *engine* for every square and build a fresh snapshot."""
        return cls({sq: engine.piece_at(*to_engine(sq)) for sq in all_squares()})

    @classmethod
    def empty(cls) -> BoardSnapshot:
        return cls({})

    # ── Mapping protocol ─────────────────────────────────────────────────

    def __getitem__(self, sq: Square) -> PlacedPiece | None:
        return self._squares[sq]

    def __iter__(self) -> Iterator[Square]:
        return iter(self._squares)

    def __len__(self) -> int:
        return len(self._squares)

    # ── Query helpers ────────────────────────────────────────────────────

    def occupied(self) -> Iterator[tuple[Square, PlacedPiece]]:
        """Squares holding a piece, with the piece."""
        for sq, piece in self._squares.items():
            if piece is not None:
                yield sq, piece

    def is_own_piece(self, sq: Square, side: Side) -> bool:
        piece = self._squares[sq]
        return piece is not None and piece.side == side

    # ── Dunder helpers ───────────────────────────────────────────────────

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BoardSnapshot):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        return hash(tuple(self._squares.items()))

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(BOARD_SIZE):
            cells = []
            for col in range(BOARD_SIZE):
                p = self._squares[Square(row, col)]
                cells.append(str(p) if p else ".")
            rows.append(f"{BOARD_SIZE - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
