"""Move record value object (long-algebraic representation)."""

from __future__ import annotations

from dataclasses import dataclass

from chess3d.core.types import Square


@dataclass(frozen=True, slots=True)
class MoveRecord:
    """A move as written to the move log, e.g. ``e2e4``.

    Built from the pre-move squares: once the engine has applied the move
    the origin is empty and can no longer be described.
    """

    origin: Square
    dest: Square

    def __str__(self) -> str:
        return f"{self.origin.name}{self.dest.name}"
