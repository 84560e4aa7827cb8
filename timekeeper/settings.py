"""Default timer preferences with JSON persistence.

Settings are stored in the per-user application directory:
    macOS    ~/Library/Application Support/Timekeeper/settings.json
    Windows  %APPDATA%/Timekeeper/settings.json
    other    $XDG_CONFIG_HOME/timekeeper/settings.json  (default ~/.config)

Usage::

    settings = load_settings()
    settings.update_frequency = 250
    save_settings(settings)
    config = settings.to_config(duration="5m", callback=on_done)

Only preferences live here; a running timer's progress is never saved.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.config import TimerConfig, DEFAULT_UPDATE_FREQUENCY

logger = logging.getLogger(__name__)


def _app_support_dir() -> Path:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "Timekeeper"
    if sys.platform == "win32":
        base = os.environ.get("APPDATA")
        return (Path(base) if base else Path.home() / "AppData" / "Roaming") / "Timekeeper"
    base = os.environ.get("XDG_CONFIG_HOME")
    return (Path(base) if base else Path.home() / ".config") / "timekeeper"


APP_SUPPORT_DIR = _app_support_dir()
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable timer defaults."""

    # ── display ───────────────────────────────────────────────────────
    update_frequency: int = DEFAULT_UPDATE_FREQUENCY   # ms
    format: str | None = None                          # None → pretty time
    editable: bool = False

    # ── duration policy ───────────────────────────────────────────────
    repeat: bool = False
    countdown: bool = False
    restart: bool = False

    def to_config(self, **overrides) -> TimerConfig:
        """Build a ``TimerConfig`` from these defaults plus ``overrides``."""
        options = asdict(self)
        options.update(overrides)
        return TimerConfig(**options)


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults."""
    if not SETTINGS_PATH.exists():
        return Settings()
    try:
        data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        logger.warning("could not read %s, using defaults: %s", SETTINGS_PATH, exc)
        return Settings()
    if not isinstance(data, dict):
        logger.warning("%s does not hold an object, using defaults", SETTINGS_PATH)
        return Settings()
    # Only use keys that exist in the dataclass
    valid_keys = {f.name for f in fields(Settings)}
    filtered = {k: v for k, v in data.items() if k in valid_keys}
    return Settings(**filtered)


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
