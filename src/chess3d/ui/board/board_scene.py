"""BoardScene - QGraphicsScene that draws the projected 3D board and pieces."""

from __future__ import annotations

import logging
import math

from PyQt6.QtCore import QObject, QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QPen, QPolygonF
from PyQt6.QtWidgets import (
    QGraphicsEllipseItem,
    QGraphicsItem,
    QGraphicsPolygonItem,
    QGraphicsScene,
    QGraphicsSceneMouseEvent,
)

from chess3d.core.types import BOARD_SIZE, Square, all_squares
from chess3d.game.controller import BoardController
from chess3d.game.picking import (
    HIGHLIGHT_PREFIX,
    SQUARE_PREFIX,
    Target,
    make_tag,
    resolve,
)
from chess3d.game.selection import Selection
from chess3d.ui.board.camera import Camera, cell_center
from chess3d.ui.board.piece_item import TAG_KEY, PieceItem, TaggedNode
from chess3d.ui.styles.theme import BoardTheme

_LOGGER = logging.getLogger(__name__)

BOARD_TAG = "board"

_TILE_SIZE = 0.95  # tiles leave a thin gap showing the frame
_FRAME_MARGIN = 0.3
_FRAME_THICKNESS = 0.2
_MARKER_RADIUS = 0.3
_MAX_PIECE_HEIGHT = 1.3


def _item_tag(item: QGraphicsItem) -> str | None:
    value = item.data(TAG_KEY)
    return value if isinstance(value, str) else None


class BoardScene(QGraphicsScene):
    """Renders the board, highlights and pieces for a :class:`BoardController`.

    Subscribes to the controller's events: a board change rebuilds the
    pieces, a selection change redraws the markers.  Left clicks are
    resolved through the tag hierarchy and fed back to the controller.
    """

    def __init__(
        self,
        controller: BoardController,
        parent: QObject | None = None,
        *,
        camera: Camera | None = None,
        theme: BoardTheme | None = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._camera = camera if camera is not None else Camera()
        self._theme = theme if theme is not None else BoardTheme.default()
        self._show_legal_moves = True

        # Visual layers
        self._board_root: TaggedNode | None = None
        self._tile_items: dict[Square, QGraphicsPolygonItem] = {}
        self._piece_items: dict[Square, PieceItem] = {}
        self._marker_items: list[QGraphicsItem] = []

        self.setBackgroundBrush(QBrush(self._theme.background))
        self.setSceneRect(self._scene_bounds())

        controller.events.on_board_changed.append(self.sync)
        controller.events.on_selection_changed.append(self._on_selection_changed)

        self.redraw()

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def camera(self) -> Camera:
        return self._camera

    @property
    def controller(self) -> BoardController:
        return self._controller

    @property
    def board_root(self) -> TaggedNode | None:
        return self._board_root

    def tile_item(self, sq: Square) -> QGraphicsPolygonItem:
        return self._tile_items[sq]

    def piece_item(self, sq: Square) -> PieceItem | None:
        return self._piece_items.get(sq)

    def marker_items(self) -> list[QGraphicsItem]:
        return list(self._marker_items)

    def redraw(self) -> None:
        """Rebuild everything (after a camera change)."""
        self._draw_board()
        self.sync()

    def sync(self) -> None:
        """Re-create piece items and markers from the controller's state."""
        self._sync_pieces()
        self._draw_markers(self._controller.selection)

    def set_show_legal_moves(self, visible: bool) -> None:
        """Show or hide the legal-destination discs."""
        self._show_legal_moves = visible
        self._draw_markers(self._controller.selection)

    def target_at(self, pos: QPointF) -> Target:
        """Resolve what lies under *pos*, nearest item first."""
        hits = self.items(
            pos,
            Qt.ItemSelectionMode.IntersectsItemShape,
            Qt.SortOrder.DescendingOrder,
        )
        return resolve(hits, _item_tag, lambda item: item.parentItem())

    def click_at(self, pos: QPointF) -> Target:
        """Pointer entry point: pick at *pos* and hand the target to the controller."""
        target = self.target_at(pos)
        self._controller.handle_target(target)
        return target

    # ── Board drawing ────────────────────────────────────────────────────

    def _scene_bounds(self) -> QRectF:
        # Large enough for any yaw/pitch at zoom 1.
        u = self._camera.unit
        radius = (BOARD_SIZE / 2 + _FRAME_MARGIN) * math.sqrt(2) * u
        top = radius + _MAX_PIECE_HEIGHT * u
        bottom = radius + _FRAME_THICKNESS * u
        return QRectF(-radius, -top, 2 * radius, top + bottom)

    def _quad(self, x0: float, z0: float, x1: float, z1: float, y: float) -> QPolygonF:
        cam = self._camera
        return QPolygonF(
            [
                cam.project(x0, y, z0),
                cam.project(x1, y, z0),
                cam.project(x1, y, z1),
                cam.project(x0, y, z1),
            ]
        )

    def _draw_board(self) -> None:
        """Draw or redraw the frame and the 64 tiles under a tagged root."""
        if self._board_root is not None:
            self.removeItem(self._board_root)
        self._tile_items.clear()
        self._marker_items.clear()

        root = TaggedNode(BOARD_TAG)
        root.setZValue(0)
        self.addItem(root)
        self._board_root = root

        half = BOARD_SIZE / 2 + _FRAME_MARGIN
        no_pen = QPen(Qt.PenStyle.NoPen)

        # Frame: front faces of the slab, then its top.
        side_color = self._theme.frame.darker(140)
        top = self._quad(-half, -half, half, half, 0.0)
        bottom = self._quad(-half, -half, half, half, -_FRAME_THICKNESS)
        for i in range(4):
            j = (i + 1) % 4
            face = QGraphicsPolygonItem(
                QPolygonF([top[i], top[j], bottom[j], bottom[i]]), root
            )
            face.setBrush(QBrush(side_color))
            face.setPen(no_pen)
            face.setZValue(-1)
        frame = QGraphicsPolygonItem(top, root)
        frame.setBrush(QBrush(self._theme.frame))
        frame.setPen(no_pen)

        inset = (1.0 - _TILE_SIZE) / 2
        for sq in all_squares():
            cx, cz = cell_center(sq)
            x0, z0 = cx - 0.5 + inset, cz - 0.5 + inset
            tile = QGraphicsPolygonItem(
                self._quad(x0, z0, x0 + _TILE_SIZE, z0 + _TILE_SIZE, 0.01), root
            )
            is_light = (sq.row + sq.col) % 2 == 0
            color = self._theme.light_square if is_light else self._theme.dark_square
            tile.setBrush(QBrush(color))
            tile.setPen(no_pen)
            tile.setData(TAG_KEY, make_tag(SQUARE_PREFIX, sq))
            self._tile_items[sq] = tile

        _LOGGER.debug(
            "Board drawn (yaw=%.1f pitch=%.1f zoom=%.2f)",
            self._camera.yaw,
            self._camera.pitch,
            self._camera.zoom,
        )

    # ── Piece synchronisation ────────────────────────────────────────────

    def _sync_pieces(self) -> None:
        """Re-create all piece items from the current snapshot."""
        for item in self._piece_items.values():
            self.removeItem(item)
        self._piece_items.clear()

        for sq, piece in self._controller.snapshot.occupied():
            item = PieceItem(piece, sq, self._camera, self._theme)
            self.addItem(item)
            self._piece_items[sq] = item

    # ── Selection / highlights ───────────────────────────────────────────

    def _on_selection_changed(self, selection: Selection | None) -> None:
        self._draw_markers(selection)

    def _draw_markers(self, selection: Selection | None) -> None:
        for item in self._marker_items:
            self.removeItem(item)
        self._marker_items.clear()

        if selection is None or self._board_root is None:
            return

        origin = self._tile_items[selection.origin]
        glow = QGraphicsPolygonItem(origin.polygon(), self._board_root)
        glow.setBrush(QBrush(self._theme.highlight_from))
        glow.setPen(QPen(Qt.PenStyle.NoPen))
        glow.setData(TAG_KEY, make_tag(HIGHLIGHT_PREFIX, selection.origin))
        self._marker_items.append(glow)

        if not self._show_legal_moves:
            return
        for dest in sorted(selection.legal_destinations):
            self._marker_items.append(self._make_marker(dest, self._theme.highlight_to))

    def _make_marker(self, sq: Square, color: QColor) -> QGraphicsEllipseItem:
        """A flat disc hovering just above the tile."""
        cam = self._camera
        cx, cz = cell_center(sq)
        center = cam.project(cx, 0.05, cz)
        rx = _MARKER_RADIUS * cam.scale
        ry = rx * cam.foreshortening
        disc = QGraphicsEllipseItem(
            QRectF(center.x() - rx, center.y() - ry, 2 * rx, 2 * ry),
            self._board_root,
        )
        disc.setBrush(QBrush(color))
        disc.setPen(QPen(Qt.PenStyle.NoPen))
        disc.setData(TAG_KEY, make_tag(HIGHLIGHT_PREFIX, sq))
        return disc

    # ── Mouse interaction ────────────────────────────────────────────────

    def mousePressEvent(self, event: QGraphicsSceneMouseEvent | None) -> None:
        if event is None or event.button() != Qt.MouseButton.LeftButton:
            return super().mousePressEvent(event)
        self.click_at(event.scenePos())
        event.accept()
