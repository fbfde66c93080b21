"""Shared test helpers for Just Pomodoro."""

from __future__ import annotations

from datetime import date, timedelta

from justpomodoro.settings import Settings
from justpomodoro.stats import DailyStats
from justpomodoro.timer.engine import TimerEngine


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeToday:
    """Callable stand-in for ``date.today`` that tests can move forward."""

    def __init__(self, value: date) -> None:
        self.value = value

    def __call__(self) -> date:
        return self.value

    def advance(self, days: int = 1) -> None:
        self.value = self.value + timedelta(days=days)


class FakeTickSource:
    """Manual tick source: ``fire()`` delivers one tick while active."""

    def __init__(self) -> None:
        self._callback = None
        self._active = False
        self.starts = 0
        self.stops = 0

    def bind(self, callback) -> None:
        self._callback = callback

    def start(self) -> None:
        self._active = True
        self.starts += 1

    def stop(self) -> None:
        self._active = False
        self.stops += 1

    @property
    def is_active(self) -> bool:
        return self._active

    def fire(self, times: int = 1) -> None:
        for _ in range(times):
            if self._active and self._callback is not None:
                self._callback()


class MemorySettingsStore:
    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or Settings()
        self.saved: list[Settings] = []

    def load(self) -> Settings:
        return self.settings

    def save(self, settings: Settings) -> None:
        self.settings = settings
        self.saved.append(settings)


class MemoryStatsStore:
    def __init__(self, stats: DailyStats | None = None) -> None:
        self.stats = stats or DailyStats()
        self.saved: list[DailyStats] = []

    def load(self) -> DailyStats:
        return self.stats

    def save(self, stats: DailyStats) -> None:
        self.stats = stats
        self.saved.append(stats)


class RecordingSoundPlayer:
    def __init__(self) -> None:
        self.calls: list[str] = []

    def play_completion(self) -> None:
        self.calls.append("completion")

    def play_start(self) -> None:
        self.calls.append("start")

    def play_pause(self) -> None:
        self.calls.append("pause")


class RecordingNotifier:
    def __init__(self) -> None:
        self.permission_requests = 0
        self.sent: list[tuple] = []

    def request_permission(self) -> None:
        self.permission_requests += 1

    def send_session_complete(self, session_type, sound_enabled) -> None:
        self.sent.append((session_type, sound_enabled))


class BrokenSoundPlayer:
    """Every call blows up, like a missing audio device."""

    def play_completion(self) -> None:
        raise RuntimeError("no audio device")

    play_start = play_completion
    play_pause = play_completion


class BrokenNotifier:
    def request_permission(self) -> None:
        raise RuntimeError("notification centre unavailable")

    def send_session_complete(self, session_type, sound_enabled) -> None:
        raise RuntimeError("notification centre unavailable")


def complete_session(engine: TimerEngine) -> None:
    """Fast-complete the running session by jumping to the last tick."""
    engine._clock._remaining = 1
    engine.tick_source.fire()
