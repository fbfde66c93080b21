"""Session clock: the pure Pomodoro state machine.

States
------
IDLE      Not counting down; waiting for start.
RUNNING   Counting down one second per tick.
PAUSED    Frozen; remembers the remaining time.

Transitions
-----------
IDLE | PAUSED → RUNNING       (start)
RUNNING → PAUSED              (pause)
Any → IDLE                    (reset; remaining restored to full length)
RUNNING → IDLE + next session (tick reaches 0)
Any → IDLE + next session     (skip)

The clock knows nothing about Qt, timers, sounds or storage.  Every
operation that finishes a session returns a :class:`SessionCompletion`
describing what happened; the engine turns that into side effects and
decides whether to chain into the next session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from .types import SessionType, TimerState

if TYPE_CHECKING:
    from ..settings import Settings


@dataclass(frozen=True)
class SessionCompletion:
    """Outcome of one finished session."""

    session_type: SessionType
    credited_minutes: int
    next_session_type: SessionType
    auto_start: bool
    completed_work_sessions: int


def next_session_type(
    completed: SessionType,
    completed_work_sessions: int,
    sessions_before_long_break: int,
) -> SessionType:
    """Pick the session that follows *completed*.

    ``completed_work_sessions`` must already include the session that
    just finished.
    """
    if completed is SessionType.WORK:
        if (
            completed_work_sessions > 0
            and completed_work_sessions % sessions_before_long_break == 0
        ):
            return SessionType.LONG_BREAK
        return SessionType.SHORT_BREAK
    return SessionType.WORK


def should_auto_start(destination: SessionType, settings: Settings) -> bool:
    """Auto-start policy is decided by where we are going, not where from."""
    if destination is SessionType.WORK:
        return settings.auto_start_work
    return settings.auto_start_breaks


class SessionClock:
    """Countdown plus session sequencing for a single timer."""

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._state: TimerState = TimerState.IDLE
        self._session_type: SessionType = SessionType.WORK
        self._completed_work_sessions: int = 0
        self._total: int = settings.seconds_for(self._session_type)
        self._remaining: int = self._total

    # ══════════════════════════════════════════════════════════════════
    #  PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._state

    @property
    def session_type(self) -> SessionType:
        """The session currently active (or next, when IDLE)."""
        return self._session_type

    @property
    def remaining_seconds(self) -> int:
        return self._remaining

    @property
    def total_seconds(self) -> int:
        """Length of the current session as captured at its last reset."""
        return self._total

    @property
    def completed_work_sessions(self) -> int:
        return self._completed_work_sessions

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def progress_fraction(self) -> float:
        """0.0 → 1.0 progress through the current session."""
        if self._total <= 0:
            return 0.0
        return (self._total - self._remaining) / self._total

    @property
    def session_progress_text(self) -> str:
        """Position inside the long-break cycle, e.g. ``"2 of 4"``."""
        total = max(1, self._settings.sessions_before_long_break)
        current = (self._completed_work_sessions % total) + 1
        return f"{current} of {total}"

    @property
    def time_string(self) -> str:
        minutes, seconds = divmod(max(0, self._remaining), 60)
        return f"{minutes:02d}:{seconds:02d}"

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start(self) -> SessionCompletion | None:
        """Run the countdown.  No-op when already running.

        A session with nothing left on the clock completes on the spot
        instead of running at zero.
        """
        if self._state is TimerState.RUNNING:
            return None
        if self._remaining <= 0:
            return self._complete()
        self._state = TimerState.RUNNING
        return None

    def pause(self) -> bool:
        """Freeze the countdown.  Returns False when nothing changed."""
        if self._state is not TimerState.RUNNING:
            return False
        self._state = TimerState.PAUSED
        return True

    def reset(self) -> None:
        self._state = TimerState.IDLE
        self._reload_duration()

    def tick(self) -> SessionCompletion | None:
        """Advance one second.  Ignored unless RUNNING."""
        if self._state is not TimerState.RUNNING:
            return None
        if self._remaining > 0:
            self._remaining -= 1
        if self._remaining <= 0:
            return self._complete()
        return None

    def skip(self) -> SessionCompletion:
        """Finish the current session now, from any state."""
        return self._complete()

    def apply_settings(self, settings: Settings) -> None:
        """Swap in new settings.

        An IDLE clock picks up the new duration immediately; a running or
        paused session keeps its countdown until its next reset.
        """
        self._settings = settings
        if self._state is TimerState.IDLE:
            self._reload_duration()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL
    # ══════════════════════════════════════════════════════════════════

    def _reload_duration(self) -> None:
        self._total = self._settings.seconds_for(self._session_type)
        self._remaining = self._total

    def _complete(self) -> SessionCompletion:
        completed_type = self._session_type
        credited = self._total // 60

        if completed_type is SessionType.WORK:
            self._completed_work_sessions += 1

        self._session_type = next_session_type(
            completed_type,
            self._completed_work_sessions,
            self._settings.sessions_before_long_break,
        )
        self._state = TimerState.IDLE
        self._reload_duration()

        return SessionCompletion(
            session_type=completed_type,
            credited_minutes=credited,
            next_session_type=self._session_type,
            auto_start=should_auto_start(self._session_type, self._settings),
            completed_work_sessions=self._completed_work_sessions,
        )
