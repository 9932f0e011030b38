"""Orthographic orbit camera that projects board-space points onto the scene.

World space: the board lies in the ``x``/``z`` plane centred on the origin,
one unit per square, ``x`` growing with the column and ``z`` with the row;
``y`` points up.  The camera orbits the centre (``yaw``) and looks down at
``pitch`` degrees above the horizon.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from PyQt6.QtCore import QPointF

from chess3d.core.types import BOARD_SIZE, Square

DEFAULT_YAW = 30.0
DEFAULT_PITCH = 50.0
DEFAULT_ZOOM = 1.0

MIN_PITCH = 15.0
MAX_PITCH = 90.0
MIN_ZOOM = 0.5
MAX_ZOOM = 2.5


@dataclass
class Camera:
    """Viewing parameters. ``unit`` is the scene size of one square at zoom 1."""

    yaw: float = DEFAULT_YAW
    pitch: float = DEFAULT_PITCH
    zoom: float = DEFAULT_ZOOM
    unit: float = 64.0

    def reset(self) -> None:
        self.yaw = DEFAULT_YAW
        self.pitch = DEFAULT_PITCH
        self.zoom = DEFAULT_ZOOM

    def orbit(self, d_yaw: float, d_pitch: float) -> None:
        """Rotate around the board centre; pitch is clamped."""
        self.yaw = (self.yaw + d_yaw) % 360.0
        self.pitch = min(MAX_PITCH, max(MIN_PITCH, self.pitch + d_pitch))

    def zoom_by(self, factor: float) -> None:
        self.zoom = min(MAX_ZOOM, max(MIN_ZOOM, self.zoom * factor))

    # ── Projection ───────────────────────────────────────────────────────

    @property
    def scale(self) -> float:
        return self.unit * self.zoom

    @property
    def foreshortening(self) -> float:
        """Vertical squash of horizontal circles (1 = seen from straight above)."""
        return math.sin(math.radians(self.pitch))

    def _rotate(self, x: float, z: float) -> tuple[float, float]:
        a = math.radians(self.yaw)
        cos_a, sin_a = math.cos(a), math.sin(a)
        return x * cos_a - z * sin_a, x * sin_a + z * cos_a

    def project(self, x: float, y: float, z: float) -> QPointF:
        """World point -> scene point."""
        rx, rz = self._rotate(x, z)
        p = math.radians(self.pitch)
        s = self.scale
        return QPointF(rx * s, (rz * math.sin(p) - y * math.cos(p)) * s)

    def depth(self, x: float, y: float, z: float) -> float:
        """Distance towards the viewer; larger values are drawn on top."""
        _, rz = self._rotate(x, z)
        p = math.radians(self.pitch)
        return rz * math.cos(p) + y * math.sin(p)


def cell_center(sq: Square) -> tuple[float, float]:
    """World ``(x, z)`` of the centre of *sq*."""
    half = BOARD_SIZE / 2
    return sq.col - half + 0.5, sq.row - half + 0.5
