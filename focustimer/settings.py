"""User preferences with JSON persistence.

Preferences are stored as a flat key-value map at:
    ~/Library/Application Support/FocusTimer/settings.json

Usage::

    store = PreferenceStore()
    store.set(KEY_TITLE, "Deep work")
    settings = load_settings(store)

Only preferences are persisted.  The countdown itself always starts
from 00:00 on launch.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .audio.sounds import DEFAULT_SOUND_TYPE, resolve_sound_type


logger = logging.getLogger(__name__)


APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "FocusTimer"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

# ── keys ──────────────────────────────────────────────────────────────────

KEY_BACKGROUND = "timer_bg"
KEY_TITLE = "timer_title"
KEY_SOUND = "timer_sound"

DEFAULT_TITLE = "Focus Timer"


class PreferenceStore:
    """Flat key-value store backed by a JSON file.

    Every mutation is written through to disk immediately.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or SETTINGS_PATH
        self._data: dict[str, Any] = self._read()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self._write()

    def remove(self, key: str) -> None:
        if key in self._data:
            del self._data[key]
            self._write()

    def __contains__(self, key: str) -> bool:
        return key in self._data

    # ── internal ──────────────────────────────────────────────────────

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable preferences at %s: %s", self._path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring preferences at %s: not a JSON object", self._path)
            return {}
        return data

    def _write(self) -> None:
        """Persist the map; a failed write is logged and the in-memory
        value is kept for the rest of the session."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(self._data, indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError as exc:
            logger.warning("Could not save preferences to %s: %s", self._path, exc)


@dataclass
class Settings:
    """Preferences read at startup."""

    title: str = DEFAULT_TITLE
    alarm_sound: str = DEFAULT_SOUND_TYPE.value
    background_image: str | None = None    # data URI


def load_settings(store: PreferenceStore) -> Settings:
    """Build ``Settings`` from *store*, falling back to defaults."""
    title = store.get(KEY_TITLE)
    background = store.get(KEY_BACKGROUND)
    return Settings(
        title=title if isinstance(title, str) and title else DEFAULT_TITLE,
        alarm_sound=resolve_sound_type(store.get(KEY_SOUND)).value,
        background_image=background if isinstance(background, str) and background else None,
    )
