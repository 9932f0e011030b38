"""Visual theme constants and QSS styles for Chess3D."""

from __future__ import annotations

from dataclasses import dataclass

from PyQt6.QtGui import QColor


@dataclass(frozen=True)
class BoardTheme:
    """Colour scheme for the board, pieces and highlights."""

    background: QColor
    frame: QColor  # wooden slab under the tiles
    light_square: QColor
    dark_square: QColor
    white_piece: QColor
    black_piece: QColor
    piece_outline: QColor
    highlight_from: QColor  # selected piece origin
    highlight_to: QColor  # legal move targets

    @classmethod
    def default(cls) -> BoardTheme:
        return cls(
            background=QColor(31, 31, 46),
            frame=QColor(89, 64, 38),
            light_square=QColor(242, 230, 204),
            dark_square=QColor(102, 89, 77),
            white_piece=QColor(245, 245, 245),
            black_piece=QColor(28, 28, 28),
            piece_outline=QColor(90, 90, 90),
            highlight_from=QColor(255, 255, 0, 100),  # yellow transparent
            highlight_to=QColor(51, 204, 51, 128),  # green disc
        )


# ── Application-wide QSS ────────────────────────────────────────────────────

APP_STYLE = """
QMainWindow {
    background: #2b2b2b;
}

QLabel {
    color: #e0e0e0;
    font-family: "Helvetica Neue", sans-serif;
}

QListWidget {
    background: #1e1e1e;
    color: #d4d4d4;
    border: 1px solid #3c3c3c;
    font-family: "Consolas", monospace;
    font-size: 12px;
}

QPushButton {
    background: #3c3c3c;
    color: #e0e0e0;
    border: 1px solid #555;
    border-radius: 4px;
    padding: 6px 14px;
    font-size: 13px;
}
QPushButton:hover {
    background: #505050;
}
QPushButton:pressed {
    background: #264f78;
}

QMenuBar {
    background: #2b2b2b;
    color: #e0e0e0;
}
QMenuBar::item:selected {
    background: #3c3c3c;
}
QMenu {
    background: #2b2b2b;
    color: #e0e0e0;
    border: 1px solid #3c3c3c;
}
QMenu::item:selected {
    background: #264f78;
}
"""
