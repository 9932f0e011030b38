"""PieceItem - a chess piece assembled from projected 3D primitives.

Each piece is an invisible root item carrying the ``piece_<row>_<col>`` tag
with one child per primitive (discs, columns, cones, balls).  Clicks land on
the children; picking walks up to the root to find the tag.
"""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPainter, QPainterPath, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsPathItem,
    QStyleOptionGraphicsItem,
    QWidget,
)

from chess3d.core.enums import PieceKind, Side
from chess3d.core.piece import PlacedPiece
from chess3d.core.types import Square
from chess3d.game.picking import PIECE_PREFIX, make_tag
from chess3d.ui.board.camera import Camera, cell_center
from chess3d.ui.styles.theme import BoardTheme

TAG_KEY = 0  # QGraphicsItem.data() slot holding the pick tag


@dataclass(frozen=True, slots=True)
class _Part:
    """A solid of revolution around the piece's vertical axis.

    ``y`` is the height of the part's centre; ``dx`` shifts it sideways
    (the knight's head).  ``height == 0`` means a ball of ``r_bottom``.
    """

    r_bottom: float
    r_top: float
    height: float
    y: float
    dx: float = 0.0


def _cylinder(radius: float, height: float, y: float) -> _Part:
    return _Part(radius, radius, height, y)


def _cone(top: float, bottom: float, height: float, y: float) -> _Part:
    return _Part(bottom, top, height, y)


def _sphere(radius: float, y: float, dx: float = 0.0) -> _Part:
    return _Part(radius, radius, 0.0, y, dx)


# Bottom to top; dimensions in squares.
_SHAPES: dict[PieceKind, tuple[_Part, ...]] = {
    PieceKind.PAWN: (
        _cylinder(0.25, 0.08, 0.04),
        _cone(0.12, 0.2, 0.16, 0.16),
        _sphere(0.2, 0.32),
    ),
    PieceKind.ROOK: (
        _cylinder(0.28, 0.1, 0.05),
        _cylinder(0.22, 0.4, 0.3),
        _cylinder(0.26, 0.1, 0.55),
    ),
    PieceKind.KNIGHT: (
        _cylinder(0.25, 0.1, 0.05),
        _cone(0.14, 0.2, 0.35, 0.27),
        _sphere(0.15, 0.48, 0.06),
        _sphere(0.12, 0.55, 0.2),
    ),
    PieceKind.BISHOP: (
        _cylinder(0.25, 0.1, 0.05),
        _cylinder(0.12, 0.45, 0.32),
        _sphere(0.18, 0.6),
        _cylinder(0.04, 0.2, 0.78),
    ),
    PieceKind.QUEEN: (
        _cylinder(0.3, 0.12, 0.06),
        _cone(0.28, 0.22, 0.3, 0.27),
        _cylinder(0.18, 0.35, 0.55),
        _sphere(0.2, 0.85),
        _cone(0.05, 0.18, 0.15, 1.02),
    ),
    PieceKind.KING: (
        _cylinder(0.32, 0.12, 0.06),
        _cylinder(0.2, 0.5, 0.37),
        _sphere(0.2, 0.75),
        _cylinder(0.22, 0.08, 0.92),
        _cone(0.02, 0.18, 0.2, 1.1),
    ),
}


def _ellipse_rect(center: QPointF, rx: float, ry: float) -> QRectF:
    return QRectF(center.x() - rx, center.y() - ry, 2 * rx, 2 * ry)


class TaggedNode(QGraphicsItem):
    """Invisible container that carries a pick tag for its children.

    Its own shape is empty, so hit tests only ever land on the children.
    """

    def __init__(self, tag: str, parent: QGraphicsItem | None = None) -> None:
        super().__init__(parent)
        self.setData(TAG_KEY, tag)

    @property
    def tag(self) -> str:
        return self.data(TAG_KEY)

    def boundingRect(self) -> QRectF:
        return self.childrenBoundingRect()

    def shape(self) -> QPainterPath:
        return QPainterPath()

    def paint(
        self,
        painter: QPainter | None,
        option: QStyleOptionGraphicsItem | None,
        widget: QWidget | None = None,
    ) -> None:
        pass


class PieceItem(TaggedNode):
    """A single chess piece on the board.

    Stores its logical *square*; the primitives are its children.
    """

    def __init__(
        self,
        piece: PlacedPiece,
        square: Square,
        camera: Camera,
        theme: BoardTheme,
    ) -> None:
        super().__init__(make_tag(PIECE_PREFIX, square))
        self.piece = piece
        self.square = square

        x, z = cell_center(square)
        self.setZValue(100.0 + camera.depth(x, 0.0, z))
        self._build(camera, theme, x, z)

    # ── Geometry ─────────────────────────────────────────────────────────

    def _build(self, camera: Camera, theme: BoardTheme, x: float, z: float) -> None:
        if self.piece.side == Side.WHITE:
            body, cap = theme.white_piece, theme.white_piece.darker(108)
        else:
            body, cap = theme.black_piece, theme.black_piece.lighter(160)
        pen = QPen(theme.piece_outline, 1.0)

        for part in _SHAPES[self.piece.kind]:
            if part.height == 0.0:
                self._add_sphere(camera, part, x, z, body, pen)
            else:
                self._add_solid(camera, part, x, z, body, cap, pen)

    def _add_sphere(
        self,
        camera: Camera,
        part: _Part,
        x: float,
        z: float,
        color: QColor,
        pen: QPen,
    ) -> None:
        center = camera.project(x + part.dx, part.y, z)
        r = part.r_bottom * camera.scale
        ball = QGraphicsEllipseItem(_ellipse_rect(center, r, r), self)
        ball.setBrush(QBrush(color))
        ball.setPen(pen)

    def _add_solid(
        self,
        camera: Camera,
        part: _Part,
        x: float,
        z: float,
        body: QColor,
        cap: QColor,
        pen: QPen,
    ) -> None:
        s, f = camera.scale, camera.foreshortening
        y0, y1 = part.y - part.height / 2, part.y + part.height / 2
        bottom = camera.project(x + part.dx, y0, z)
        top = camera.project(x + part.dx, y1, z)
        rb, rt = part.r_bottom * s, part.r_top * s

        path = QPainterPath()
        path.addEllipse(_ellipse_rect(bottom, rb, rb * f))
        side = QPainterPath()
        side.addPolygon(
            QPolygonF(
                [
                    QPointF(bottom.x() - rb, bottom.y()),
                    QPointF(bottom.x() + rb, bottom.y()),
                    QPointF(top.x() + rt, top.y()),
                    QPointF(top.x() - rt, top.y()),
                ]
            )
        )
        side.closeSubpath()
        path = path.united(side)

        solid = QGraphicsPathItem(path, self)
        solid.setBrush(QBrush(body))
        solid.setPen(pen)

        lid = QGraphicsEllipseItem(_ellipse_rect(top, rt, rt * f), self)
        lid.setBrush(QBrush(cap))
        lid.setPen(QPen(Qt.PenStyle.NoPen) if rt < 0.03 * s else pen)
