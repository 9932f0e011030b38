"""GameInfoPanel - turn indicator, status banner, new-game button, move history."""

from __future__ import annotations

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from chess3d.core.enums import GameStatus, Side
from chess3d.game.controller import BoardController
from chess3d.ui.i18n import Strings

_SWATCH_SIZE = 20
_SWATCH_STYLE = {
    Side.WHITE: "background: #f5f5f5; border: 1px solid #888; border-radius: 10px;",
    Side.BLACK: "background: #1c1c1c; border: 1px solid #888; border-radius: 10px;",
}
_STATUS_STYLE = {
    GameStatus.CHECK: "color: #ff9f1c; font-weight: bold;",
    GameStatus.CHECKMATE: "color: #ff5555; font-weight: bold;",
    GameStatus.STALEMATE: "color: #4da6ff; font-weight: bold;",
}


class GameInfoPanel(QWidget):
    """Read-only view of the controller's state plus the New Game button."""

    new_game_clicked = pyqtSignal()

    def __init__(self, strings: Strings, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._strings = strings
        self._side = Side.WHITE
        self._status = GameStatus.IN_PROGRESS
        self._history: list[str] = []
        self._setup_ui()
        self.retranslate_ui(strings)

    def _setup_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(8, 8, 8, 8)
        layout.setSpacing(10)

        self._title = QLabel()
        self._title.setFont(QFont("Helvetica Neue", 18, QFont.Weight.Bold))
        self._title.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self._title)

        line = QFrame()
        line.setFrameShape(QFrame.Shape.HLine)
        layout.addWidget(line)

        self._turn_header = QLabel()
        self._turn_header.setFont(QFont("Helvetica Neue", 11))
        layout.addWidget(self._turn_header)

        turn_row = QHBoxLayout()
        self._swatch = QLabel()
        self._swatch.setFixedSize(_SWATCH_SIZE, _SWATCH_SIZE)
        turn_row.addWidget(self._swatch)
        self._turn_label = QLabel()
        self._turn_label.setFont(QFont("Helvetica Neue", 13, QFont.Weight.Bold))
        turn_row.addWidget(self._turn_label, 1)
        layout.addLayout(turn_row)

        self._status_label = QLabel()
        self._status_label.setFont(QFont("Helvetica Neue", 13))
        self._status_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._status_label.setWordWrap(True)
        layout.addWidget(self._status_label)

        self._btn_new = QPushButton()
        self._btn_new.setMinimumHeight(36)
        self._btn_new.clicked.connect(self.new_game_clicked)
        layout.addWidget(self._btn_new)

        self._history_header = QLabel()
        self._history_header.setFont(QFont("Helvetica Neue", 12, QFont.Weight.Bold))
        layout.addWidget(self._history_header)

        self._list = QListWidget()
        self._list.setSelectionMode(QListWidget.SelectionMode.NoSelection)
        layout.addWidget(self._list, 1)

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def status_text(self) -> str:
        return self._status_label.text()

    @property
    def turn_text(self) -> str:
        return self._turn_label.text()

    def history_lines(self) -> list[str]:
        return [self._list.item(i).text() for i in range(self._list.count())]

    def retranslate_ui(self, strings: Strings) -> None:
        self._strings = strings
        s = strings
        self._title.setText(s.app_title)
        self._turn_header.setText(s.current_turn)
        self._btn_new.setText(s.new_game)
        self._history_header.setText(s.move_history)
        self._render_state()

    def update_from(self, controller: BoardController) -> None:
        """Pull turn, status and history from *controller*."""
        self._side = controller.side_to_move
        self._status = controller.status
        self._history = controller.move_log.numbered_pairs()
        self._render_state()
        self._list.clear()
        self._list.addItems(self._history)
        self._list.scrollToBottom()

    # ── Rendering ────────────────────────────────────────────────────────

    def _render_state(self) -> None:
        s = self._strings
        self._turn_label.setText(s.side_name(self._side))
        self._swatch.setStyleSheet(_SWATCH_STYLE[self._side])

        if self._status == GameStatus.CHECK:
            text = s.check
        elif self._status == GameStatus.CHECKMATE:
            text = f"{s.checkmate}\n{s.wins(s.side_name(self._side.opposite))}"
        elif self._status == GameStatus.STALEMATE:
            text = f"{s.stalemate}\n{s.draw}"
        else:
            text = ""
        self._status_label.setText(text)
        self._status_label.setStyleSheet(_STATUS_STYLE.get(self._status, ""))
        self._status_label.setVisible(bool(text))
