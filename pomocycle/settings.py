"""Application settings with JSON persistence.

Settings are stored at:
    ~/.pomocycle/settings.json   (or $POMOCYCLE_HOME/settings.json)

Usage::

    settings = load_settings()
    settings.always_on_top = True
    save_settings(settings)

Interval lengths are fixed and intentionally not part of this file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, asdict, fields

from .database.db import APP_SUPPORT_DIR


SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"


@dataclass
class Settings:
    """All user-configurable preferences."""

    # ── app ───────────────────────────────────────────────────────────
    log_level: str = "INFO"
    confirm_reset: bool = True

    # ── window ────────────────────────────────────────────────────────
    always_on_top: bool = False
    window_x: int | None = None
    window_y: int | None = None
    window_width: int = 360
    window_height: int = 300


# Fields whose default is None but which hold an int once set.
_OPTIONAL_INT_FIELDS = {"window_x", "window_y"}


def _fits(name: str, default, value) -> bool:
    """True when *value* has the same JSON type as the field's default."""
    if name in _OPTIONAL_INT_FIELDS:
        return value is None or (
            isinstance(value, int) and not isinstance(value, bool)
        )
    if isinstance(default, bool):
        return isinstance(value, bool)
    if isinstance(default, int):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, type(default))


def load_settings() -> Settings:
    """Load settings from disk, falling back to defaults.

    Unknown keys are ignored and wrongly typed values fall back to the
    field default.
    """
    try:
        if SETTINGS_PATH.exists():
            data = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
            defaults = {f.name: f.default for f in fields(Settings)}
            filtered = {
                k: v for k, v in data.items()
                if k in defaults and _fits(k, defaults[k], v)
            }
            return Settings(**filtered)
    except (OSError, ValueError, TypeError, AttributeError):
        pass
    return Settings()


def save_settings(settings: Settings) -> None:
    """Write settings to disk as JSON."""
    SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
    SETTINGS_PATH.write_text(
        json.dumps(asdict(settings), indent=2) + "\n",
        encoding="utf-8",
    )
