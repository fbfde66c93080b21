"""Per-day work/break minute totals.

Stats roll over lazily: there is no background clock.  Every mutating
call first checks whether the tracked date is still today and zeroes the
totals when it is not.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Callable, Protocol


def format_minutes(minutes: int) -> str:
    """``45`` → ``"45m"``, ``125`` → ``"2h 5m"``."""
    minutes = max(0, minutes)
    hours, mins = divmod(minutes, 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"


@dataclass(frozen=True)
class DailyStats:
    work_minutes: int = 0
    break_minutes: int = 0
    last_tracked_date: date | None = None

    @classmethod
    def zero(cls, today: date | None = None) -> DailyStats:
        return cls(0, 0, today or date.today())

    @property
    def total_minutes(self) -> int:
        return self.work_minutes + self.break_minutes

    @property
    def formatted_work_time(self) -> str:
        return format_minutes(self.work_minutes)

    @property
    def formatted_break_time(self) -> str:
        return format_minutes(self.break_minutes)

    @property
    def formatted_total_time(self) -> str:
        return format_minutes(self.total_minutes)

    def is_from(self, day: date) -> bool:
        return self.last_tracked_date == day


class DailyStatsStore(Protocol):
    def load(self) -> DailyStats: ...

    def save(self, stats: DailyStats) -> None: ...


class DailyStatsManager:
    """Holds today's stats in memory and persists every change."""

    def __init__(
        self,
        store: DailyStatsStore,
        *,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._store = store
        self._today = today
        loaded = store.load()
        if loaded.is_from(today()):
            self._stats = loaded
        else:
            self._stats = DailyStats.zero(today())
            self._store.save(self._stats)

    @property
    def stats(self) -> DailyStats:
        return self._stats

    def add_work_time(self, minutes: int) -> None:
        self.reset_if_needed()
        self._stats = replace(
            self._stats,
            work_minutes=self._stats.work_minutes + max(0, minutes),
            last_tracked_date=self._today(),
        )
        self._store.save(self._stats)

    def add_break_time(self, minutes: int) -> None:
        self.reset_if_needed()
        self._stats = replace(
            self._stats,
            break_minutes=self._stats.break_minutes + max(0, minutes),
            last_tracked_date=self._today(),
        )
        self._store.save(self._stats)

    def reset_if_needed(self) -> bool:
        """Zero the totals when they belong to an earlier day."""
        today = self._today()
        if self._stats.is_from(today):
            return False
        self._stats = DailyStats.zero(today)
        self._store.save(self._stats)
        return True

    def reset(self) -> None:
        self._stats = DailyStats.zero(self._today())
        self._store.save(self._stats)
