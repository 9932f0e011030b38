"""AppSettings - user preferences and their persistence in QSettings."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from PyQt6.QtCore import QSettings

from chess3d.ui.board.camera import (
    DEFAULT_PITCH,
    DEFAULT_YAW,
    MAX_PITCH,
    MIN_PITCH,
)
from chess3d.ui.i18n import DEFAULT_LANGUAGE, FALLBACK_LANGUAGE, is_supported

_LOGGER = logging.getLogger(__name__)

ORGANIZATION = "Chess3D"
APPLICATION = "Chess3D"

_KEY_LANGUAGE = "language"
_KEY_SHOW_LEGAL = "board/show_legal_moves"
_KEY_YAW = "camera/yaw"
_KEY_PITCH = "camera/pitch"

# ── Settings data class ──────────────────────────────────────────────────────


@dataclass
class AppSettings:
    """All user-configurable settings."""

    # General
    language: str = DEFAULT_LANGUAGE

    # Board
    show_legal_moves: bool = True

    # Camera
    camera_yaw: float = DEFAULT_YAW
    camera_pitch: float = DEFAULT_PITCH

    def normalized(self) -> AppSettings:
        """Copy with an unsupported language replaced and pitch clamped."""
        language = self.language
        if not is_supported(language):
            _LOGGER.warning(
                "Unsupported language %r, using %r", language, FALLBACK_LANGUAGE
            )
            language = FALLBACK_LANGUAGE
        return AppSettings(
            language=language,
            show_legal_moves=self.show_legal_moves,
            camera_yaw=self.camera_yaw % 360.0,
            camera_pitch=min(MAX_PITCH, max(MIN_PITCH, self.camera_pitch)),
        )


# ── Persistence ──────────────────────────────────────────────────────────────


def default_store() -> QSettings:
    return QSettings(ORGANIZATION, APPLICATION)


def load_settings(store: QSettings) -> AppSettings:
    """Read settings from *store*; missing or invalid keys keep their defaults."""
    defaults = AppSettings()
    try:
        settings = AppSettings(
            language=str(store.value(_KEY_LANGUAGE, defaults.language)),
            show_legal_moves=bool(
                store.value(_KEY_SHOW_LEGAL, defaults.show_legal_moves, type=bool)
            ),
            camera_yaw=float(store.value(_KEY_YAW, defaults.camera_yaw, type=float)),
            camera_pitch=float(
                store.value(_KEY_PITCH, defaults.camera_pitch, type=float)
            ),
        )
    except (TypeError, ValueError):
        _LOGGER.warning("Stored settings are malformed, using defaults")
        settings = defaults
    return settings.normalized()


def save_settings(settings: AppSettings, store: QSettings) -> None:
    store.setValue(_KEY_LANGUAGE, settings.language)
    store.setValue(_KEY_SHOW_LEGAL, settings.show_legal_moves)
    store.setValue(_KEY_YAW, settings.camera_yaw)
    store.setValue(_KEY_PITCH, settings.camera_pitch)
    store.sync()
    _LOGGER.debug("Settings saved: %s", settings)
