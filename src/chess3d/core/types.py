"""Square value object and naming helpers.

Board layout (UI row/column, as seen from white's side):
    row 0 = rank 8 (black's back rank), row 7 = rank 1
    col 0 = file a, col 7 = file h

    Square(0, 0) = a8, Square(7, 4) = e1, Square(7, 7) = h1
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass

BOARD_SIZE = 8

_FILES = "abcdefgh"


@dataclass(frozen=True, slots=True, order=True)
class Square:
    """A logical board cell in UI row/column coordinates."""

    row: int
    col: int

    def __post_init__(self) -> None:
        if not (0 <= self.row < BOARD_SIZE and 0 <= self.col < BOARD_SIZE):
            raise ValueError(f"Square out of range: ({self.row}, {self.col})")

    @property
    def name(self) -> str:
        """Algebraic name, e.g. Square(6, 4) -> 'e2'."""
        return square_name(self)

    def __str__(self) -> str:
        return self.name


def square_name(sq: Square) -> str:
    """Human-readable name, e.g. Square(0, 0) -> 'a8'."""
    return _FILES[sq.col] + str(BOARD_SIZE - sq.row)


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' -> Square(4, 4)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(BOARD_SIZE - int(name[1]), _FILES.index(name[0]))


def all_squares() -> Iterator[Square]:
    """All 64 squares, row by row from the far rank."""
    for row in range(BOARD_SIZE):
        for col in range(BOARD_SIZE):
            yield Square(row, col)
