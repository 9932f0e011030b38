"""BoardView - QGraphicsView wrapper for the board scene with orbit controls."""

from __future__ import annotations

from PyQt6.QtCore import QPointF, Qt
from PyQt6.QtGui import QMouseEvent, QPainter, QResizeEvent, QWheelEvent
from PyQt6.QtWidgets import QGraphicsView, QSizePolicy, QWidget

from chess3d.game.controller import BoardController
from chess3d.ui.board.board_scene import BoardScene
from chess3d.ui.board.camera import Camera
from chess3d.ui.styles.theme import BoardTheme

_DEGREES_PER_PIXEL = 0.4
_ZOOM_STEP = 1.1


class BoardView(QGraphicsView):
    """Displays the board scene and scales it to fit the widget.

    Left click selects and moves (handled by the scene).  Right-drag orbits
    the camera, the wheel zooms.
    """

    def __init__(
        self,
        controller: BoardController,
        parent: QWidget | None = None,
        *,
        camera: Camera | None = None,
        theme: BoardTheme | None = None,
    ) -> None:
        self._scene = BoardScene(controller, camera=camera, theme=theme)
        super().__init__(self._scene, parent)
        self._scene.setParent(self)
        self._orbit_anchor: QPointF | None = None

        self.setHorizontalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarPolicy.ScrollBarAlwaysOff)
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setDragMode(QGraphicsView.DragMode.NoDrag)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setMinimumSize(320, 320)

    @property
    def board_scene(self) -> BoardScene:
        return self._scene

    @property
    def camera(self) -> Camera:
        return self._scene.camera

    def reset_camera(self) -> None:
        """Back to the default viewpoint."""
        self.camera.reset()
        self._scene.redraw()

    # ── Events ───────────────────────────────────────────────────────────

    def resizeEvent(self, event: QResizeEvent | None) -> None:
        super().resizeEvent(event)
        self.fitInView(self._scene.sceneRect(), Qt.AspectRatioMode.KeepAspectRatio)

    def mousePressEvent(self, event: QMouseEvent | None) -> None:
        if event is not None and event.button() == Qt.MouseButton.RightButton:
            self._orbit_anchor = event.position()
            event.accept()
            return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event: QMouseEvent | None) -> None:
        if event is not None and self._orbit_anchor is not None:
            pos = event.position()
            delta = pos - self._orbit_anchor
            self._orbit_anchor = pos
            self.camera.orbit(
                delta.x() * _DEGREES_PER_PIXEL, delta.y() * _DEGREES_PER_PIXEL
            )
            self._scene.redraw()
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent | None) -> None:
        if event is not None and event.button() == Qt.MouseButton.RightButton:
            self._orbit_anchor = None
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def wheelEvent(self, event: QWheelEvent | None) -> None:
        if event is None:
            return
        steps = event.angleDelta().y() / 120
        if steps:
            self.camera.zoom_by(_ZOOM_STEP**steps)
            self._scene.redraw()
        event.accept()
