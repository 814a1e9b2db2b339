"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/Pomodoro Timer/settings.json

Durations are not editable from the window; edit the file and restart.

Usage::

    settings = load_settings()
    settings.sound_volume = 50
    save_settings(settings)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

log = logging.getLogger(__name__)

# Shared with database/db.py, audio/sounds.py and logger.py
APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "Pomodoro Timer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

SECONDS_IN_MINUTE = 60


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── timer ─────────────────────────────────────────────────────────
    work_duration: float = 0.4 * SECONDS_IN_MINUTE   # seconds
    rest_duration: float = 0.1 * SECONDS_IN_MINUTE
    warning_ratio: float = 0.2                        # share of duration
    ticks_per_second: int = 4

    # ── audio ─────────────────────────────────────────────────────────
    sound_enabled: bool = True
    sound_volume: int = 70                            # 0-100

    # ── history ───────────────────────────────────────────────────────
    history_enabled: bool = True

    # ── window ────────────────────────────────────────────────────────
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 420
    window_height: int = 110
    always_on_top: bool = False

    # ── diagnostics ───────────────────────────────────────────────────
    log_to_console: bool = False

    @property
    def tick_interval_ms(self) -> int:
        """QTimer interval derived from ``ticks_per_second`` (min 10 ms)."""
        return max(10, 1000 // max(1, self.ticks_per_second))


def _matches_default(default, value) -> bool:
    """True if *value* from JSON has the type of the field's *default*."""
    if isinstance(value, bool) or isinstance(default, bool):
        return isinstance(value, bool) and isinstance(default, bool)
    if default is None:
        return value is None or isinstance(value, int)
    if isinstance(default, float):
        return isinstance(value, (int, float))
    return isinstance(value, type(default))


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored; values of the wrong type are dropped so the
    field keeps its default.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            defaults = Settings()
            filtered = {}
            for f in fields(Settings):
                if f.name not in data:
                    continue
                value = data[f.name]
                if _matches_default(getattr(defaults, f.name), value):
                    filtered[f.name] = value
                else:
                    log.warning(
                        "Ignoring %s=%r in '%s': expected %s.",
                        f.name, value, SETTINGS_PATH, f.type,
                    )
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        log.warning(
            "Could not read settings from '%s', using defaults.",
            SETTINGS_PATH,
            exc_info=True,
        )
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
    log.debug("Saved settings to '%s'", SETTINGS_PATH)
