"""MainWindow - top-level window assembling the board, info panel and menus."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QSettings, Qt
from PyQt6.QtGui import QAction, QActionGroup, QCloseEvent, QKeySequence
from PyQt6.QtWidgets import (
    QLabel,
    QMainWindow,
    QMessageBox,
    QSplitter,
    QStatusBar,
)

from chess3d.core.move import MoveRecord
from chess3d.engine.interfaces import IllegalMoveError, IRulesEngine
from chess3d.engine.python_chess_engine import PythonChessEngine
from chess3d.game.controller import BoardController
from chess3d.ui.board.board_view import BoardView
from chess3d.ui.board.camera import Camera
from chess3d.ui.i18n import LANGUAGES, Strings, strings_for
from chess3d.ui.panels.info_panel import GameInfoPanel
from chess3d.ui.settings import AppSettings, save_settings

_LOGGER = logging.getLogger(__name__)

_BOARD_STRETCH = 3
_PANEL_STRETCH = 1


class MainWindow(QMainWindow):
    """Main application window for Chess3D.

    Args:
        settings: User preferences; language and camera are taken from here.
        engine: Rules engine to play against, python-chess by default.
        store: Where preference changes are persisted; ``None`` keeps them
            in memory only.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        engine: IRulesEngine | None = None,
        store: QSettings | None = None,
    ) -> None:
        super().__init__()
        self._settings = (settings or AppSettings()).normalized()
        self._store = store
        self._strings = strings_for(self._settings.language)
        self._controller = BoardController(engine or PythonChessEngine())

        self.setMinimumSize(900, 640)
        self.resize(1200, 800)

        self._setup_ui()
        self._setup_menu()
        self._connect_signals()
        self.retranslate_ui()
        self._info_panel.update_from(self._controller)

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def controller(self) -> BoardController:
        return self._controller

    @property
    def board_view(self) -> BoardView:
        return self._board_view

    @property
    def info_panel(self) -> GameInfoPanel:
        return self._info_panel

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def strings(self) -> Strings:
        return self._strings

    def language_actions(self) -> dict[str, QAction]:
        return dict(self._language_actions)

    # ── UI setup ─────────────────────────────────────────────────────────

    def _setup_ui(self) -> None:
        camera = Camera(yaw=self._settings.camera_yaw, pitch=self._settings.camera_pitch)
        self._board_view = BoardView(self._controller, camera=camera)
        self._board_view.board_scene.set_show_legal_moves(
            self._settings.show_legal_moves
        )
        self._info_panel = GameInfoPanel(self._strings)

        splitter = QSplitter(Qt.Orientation.Horizontal)
        splitter.addWidget(self._board_view)
        splitter.addWidget(self._info_panel)
        splitter.setStretchFactor(0, _BOARD_STRETCH)
        splitter.setStretchFactor(1, _PANEL_STRETCH)
        splitter.setSizes([_BOARD_STRETCH * 300, _PANEL_STRETCH * 300])
        splitter.setChildrenCollapsible(False)
        self.setCentralWidget(splitter)

        # Status bar
        self._status = QStatusBar()
        self.setStatusBar(self._status)
        self._status_label = QLabel()
        self._status.addWidget(self._status_label)

    def _setup_menu(self) -> None:
        menu_bar = self.menuBar()
        assert menu_bar is not None

        # Game menu
        self._menu_game = menu_bar.addMenu("")
        assert self._menu_game is not None

        self._act_new_game = QAction(self)
        self._act_new_game.setShortcut(QKeySequence("Ctrl+N"))
        self._act_new_game.triggered.connect(self._on_new_game)
        self._menu_game.addAction(self._act_new_game)

        self._menu_game.addSeparator()

        self._act_close = QAction(self)
        self._act_close.setShortcut(QKeySequence("Ctrl+W"))
        self._act_close.triggered.connect(self.close)
        self._menu_game.addAction(self._act_close)

        # View menu
        self._menu_view = menu_bar.addMenu("")
        assert self._menu_view is not None

        self._act_reset_camera = QAction(self)
        self._act_reset_camera.setShortcut(QKeySequence("Ctrl+R"))
        self._act_reset_camera.triggered.connect(self._on_reset_camera)
        self._menu_view.addAction(self._act_reset_camera)

        # Settings menu
        self._menu_settings = menu_bar.addMenu("")
        assert self._menu_settings is not None
        self._menu_language = self._menu_settings.addMenu("")
        assert self._menu_language is not None

        self._language_group = QActionGroup(self)
        self._language_group.setExclusive(True)
        self._language_actions: dict[str, QAction] = {}
        for code, name in LANGUAGES:
            action = QAction(name, self)
            action.setCheckable(True)
            action.setChecked(code == self._settings.language)
            action.triggered.connect(
                lambda _checked=False, lang=code: self.set_language(lang)
            )
            self._language_group.addAction(action)
            self._menu_language.addAction(action)
            self._language_actions[code] = action

        # Help menu
        self._menu_help = menu_bar.addMenu("")
        assert self._menu_help is not None

        self._act_help = QAction(self)
        self._act_help.setShortcut(QKeySequence("?"))
        self._act_help.triggered.connect(self._on_help)
        self._menu_help.addAction(self._act_help)

    def retranslate_ui(self) -> None:
        """Re-apply all visible strings from the active locale."""
        s = self._strings
        self.setWindowTitle(s.app_title)
        self._menu_game.setTitle(s.menu_game)
        self._act_new_game.setText(s.new_game)
        self._act_close.setText(s.close_window)
        self._menu_view.setTitle(s.menu_view)
        self._act_reset_camera.setText(s.reset_camera)
        self._menu_settings.setTitle(s.menu_settings)
        self._menu_language.setTitle(s.language)
        self._menu_help.setTitle(s.menu_help)
        self._act_help.setText(s.show_help)
        self._status_label.setText(s.status_ready)
        self._info_panel.retranslate_ui(s)

    # ── Signal wiring ────────────────────────────────────────────────────

    def _connect_signals(self) -> None:
        self._info_panel.new_game_clicked.connect(self._on_new_game)

        events = self._controller.events
        events.on_board_changed.append(self._on_board_changed)
        events.on_move_rejected.append(self._on_move_rejected)

    # ── Commands ─────────────────────────────────────────────────────────

    def set_language(self, code: str) -> None:
        """Switch the UI language and persist the choice."""
        strings = strings_for(code)
        if strings.code != code:
            _LOGGER.warning("Unsupported language %r, using %r", code, strings.code)
        self._settings.language = strings.code
        self._strings = strings
        self._language_actions[strings.code].setChecked(True)
        self.retranslate_ui()
        self._persist()
        _LOGGER.info("Language set to %s", strings.code)

    def _on_new_game(self) -> None:
        self._controller.reset_game()

    def _on_reset_camera(self) -> None:
        self._board_view.reset_camera()

    def _on_help(self) -> None:
        QMessageBox.information(self, self._strings.help_title, self._strings.help_text)

    # ── Controller callbacks ─────────────────────────────────────────────

    def _on_board_changed(self) -> None:
        self._info_panel.update_from(self._controller)
        self._status_label.setText(self._strings.status_ready)

    def _on_move_rejected(self, record: MoveRecord, error: IllegalMoveError) -> None:
        self._status_label.setText(
            self._strings.status_illegal_move.format(move=record)
        )

    # ── Lifecycle ────────────────────────────────────────────────────────

    def _persist(self) -> None:
        if self._store is not None:
            save_settings(self._settings, self._store)

    def closeEvent(self, event: QCloseEvent | None) -> None:
        camera = self._board_view.camera
        self._settings.camera_yaw = camera.yaw
        self._settings.camera_pitch = camera.pitch
        self._persist()
        super().closeEvent(event)
