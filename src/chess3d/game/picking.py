"""Pick resolution - turn a scene hit list into a typed board target.

Scene items carry string tags ``piece_<row>_<col>`` (a piece's root item)
or ``square_<row>_<col>`` (a board tile).  A hit usually lands on an
untagged child (a piece's head, a marker disc), so each hit is walked up
through its ancestors until a tag parses.  The first hit that yields one
wins; pieces win over their tile only because they sit in front of it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias, TypeVar

from chess3d.core.types import Square

_LOGGER = logging.getLogger(__name__)

PIECE_PREFIX = "piece"
SQUARE_PREFIX = "square"
HIGHLIGHT_PREFIX = "highlight"

N = TypeVar("N")


@dataclass(frozen=True, slots=True)
class PieceAt:
    """The click landed on the piece standing at ``(row, col)``."""

    row: int
    col: int

    @property
    def square(self) -> Square:
        return Square(self.row, self.col)


@dataclass(frozen=True, slots=True)
class CellAt:
    """The click landed on the board tile ``(row, col)``."""

    row: int
    col: int

    @property
    def square(self) -> Square:
        return Square(self.row, self.col)


Target: TypeAlias = PieceAt | CellAt | None

_TARGET_TYPES: dict[str, type[PieceAt] | type[CellAt]] = {
    PIECE_PREFIX: PieceAt,
    SQUARE_PREFIX: CellAt,
}


def make_tag(prefix: str, sq: Square) -> str:
    """Encode a tag, e.g. ``make_tag("piece", Square(6, 4))`` -> ``piece_6_4``."""
    return f"{prefix}_{sq.row}_{sq.col}"


def parse_tag(tag: str | None) -> Target:
    """Decode a tag; anything malformed or off the board is ``None``."""
    if not tag:
        return None
    parts = tag.split("_")
    if len(parts) != 3:
        return None
    target_type = _TARGET_TYPES.get(parts[0])
    if target_type is None:
        return None
    try:
        row, col = int(parts[1]), int(parts[2])
        Square(row, col)
    except ValueError:
        return None
    return target_type(row, col)


def resolve(
    hits: Iterable[N],
    tag_of: Callable[[N], str | None],
    parent_of: Callable[[N], N | None],
) -> Target:
    """First target found walking each hit (front to back) up to the root.

    Args:
        hits: Scene hits, nearest first.
        tag_of: Tag stored on a node, if any.
        parent_of: The node's parent, ``None`` at the root.
    """
    for hit in hits:
        node: N | None = hit
        while node is not None:
            tag = tag_of(node)
            target = parse_tag(tag)
            if target is not None:
                _LOGGER.debug("Pick resolved %r -> %s", tag, target)
                return target
            if tag:
                _LOGGER.debug("Ignoring tag %r", tag)
            node = parent_of(node)
    return None
