"""Application settings with JSON persistence.

Settings are stored at:
    ~/Library/Application Support/JustPomodoro/settings.json

``Settings`` is an immutable snapshot.  Every value is clamped into its
valid range when the snapshot is built, so an out-of-range duration can
never reach the timer.  To change a setting, build a new snapshot::

    store = SettingsStore()
    settings = store.load()
    store.save(replace(settings, work_duration=50))
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path

from .timer.types import SessionType


logger = logging.getLogger(__name__)

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "JustPomodoro"
SETTINGS_PATH = APP_SUPPORT_DIR / "settings.json"

# ── valid ranges (minutes / sessions) ────────────────────────────────────

MIN_WORK_DURATION = 1
MAX_WORK_DURATION = 60
MIN_BREAK_DURATION = 1
MAX_SHORT_BREAK_DURATION = 15
MAX_LONG_BREAK_DURATION = 30
MIN_SESSIONS_BEFORE_LONG_BREAK = 2
MAX_SESSIONS_BEFORE_LONG_BREAK = 8


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(int(value), high))


@dataclass(frozen=True)
class Settings:
    """All user-configurable preferences."""

    # ── timer (minutes) ───────────────────────────────────────────────
    work_duration: int = 25
    short_break_duration: int = 5
    long_break_duration: int = 15
    sessions_before_long_break: int = 4
    auto_start_breaks: bool = False
    auto_start_work: bool = False

    # ── side effects ──────────────────────────────────────────────────
    sound_enabled: bool = True
    notifications_enabled: bool = True
    show_timer_in_menu_bar: bool = True

    def __post_init__(self) -> None:
        # frozen: go through object.__setattr__ to store the clamped values
        clamped = {
            "work_duration": _clamp(
                self.work_duration, MIN_WORK_DURATION, MAX_WORK_DURATION,
            ),
            "short_break_duration": _clamp(
                self.short_break_duration,
                MIN_BREAK_DURATION, MAX_SHORT_BREAK_DURATION,
            ),
            "long_break_duration": _clamp(
                self.long_break_duration,
                MIN_BREAK_DURATION, MAX_LONG_BREAK_DURATION,
            ),
            "sessions_before_long_break": _clamp(
                self.sessions_before_long_break,
                MIN_SESSIONS_BEFORE_LONG_BREAK, MAX_SESSIONS_BEFORE_LONG_BREAK,
            ),
        }
        for name, value in clamped.items():
            object.__setattr__(self, name, value)
        for f in fields(self):
            if f.type in ("bool", bool):
                object.__setattr__(self, f.name, bool(getattr(self, f.name)))

    def duration_for(self, session_type: SessionType) -> int:
        """Configured length of *session_type* in minutes."""
        if session_type is SessionType.WORK:
            return self.work_duration
        if session_type is SessionType.SHORT_BREAK:
            return self.short_break_duration
        return self.long_break_duration

    def seconds_for(self, session_type: SessionType) -> int:
        return self.duration_for(session_type) * 60


DEFAULT_SETTINGS = Settings()


class SettingsStore:
    """Loads and saves :class:`Settings` as a JSON file.

    Never raises: a missing or unreadable file yields the defaults, and a
    failed write is logged and dropped.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or SETTINGS_PATH

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> Settings:
        """Load settings from disk, falling back to defaults."""
        if not self._path.exists():
            return Settings()
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
            # Only use keys that exist in the dataclass
            valid_keys = {f.name for f in fields(Settings)}
            filtered = {k: v for k, v in data.items() if k in valid_keys}
            return Settings(**filtered)
        except (OSError, ValueError, TypeError, AttributeError, OverflowError):
            logger.warning(
                "Could not read settings from %s, using defaults",
                self._path, exc_info=True,
            )
        return Settings()

    def save(self, settings: Settings) -> None:
        """Write settings to disk as JSON."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(asdict(settings), indent=2) + "\n",
                encoding="utf-8",
            )
        except OSError:
            logger.error("Could not save settings to %s", self._path, exc_info=True)
