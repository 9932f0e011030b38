"""Qt application bootstrap helpers."""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PyQt6.QtWidgets import QApplication

    from chess3d.ui.settings import AppSettings

_LOGGER = logging.getLogger(__name__)


def _configure_application(app: QApplication) -> None:
    """Apply app-wide settings and theme."""
    from chess3d.ui.settings import APPLICATION, ORGANIZATION
    from chess3d.ui.styles.theme import APP_STYLE

    app.setOrganizationName(ORGANIZATION)
    app.setApplicationName(APPLICATION)
    app.setStyle("Fusion")
    app.setStyleSheet(APP_STYLE)


def run_application(
    argv: list[str] | None = None,
    *,
    language: str | None = None,
) -> int:
    """Create and run the main Qt application.

    *language* overrides the stored preference; it is saved with the other
    preferences when the window closes.
    """
    from PyQt6.QtWidgets import QApplication

    from chess3d.ui.main_window import MainWindow
    from chess3d.ui.settings import default_store, load_settings

    app = QApplication(sys.argv if argv is None else argv)
    _configure_application(app)

    store = default_store()
    settings: AppSettings = load_settings(store)
    if language is not None:
        settings.language = language
    _LOGGER.debug("Starting with %s", settings)

    window = MainWindow(settings, store=store)
    window.show()

    return app.exec()
