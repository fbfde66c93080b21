"""Timer engine: drives a :class:`SessionClock` and fans out side effects.

The engine is the single owner of all mutable timer state.  Presentation
code calls the control methods below and listens to the Qt signals; the
engine in turn calls its injected collaborators:

- ``SettingsStore``       load once, save on every ``update_settings``
- ``DailyStatsStore``     through :class:`DailyStatsManager`
- ``NotificationSender``  completion notifications
- ``SoundPlayer``         start / pause / completion sounds
- ``TickSource``          one callback per second while RUNNING

Collaborator calls are fire-and-forget: an exception from a sound or
notification backend is logged and the state transition goes ahead.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Protocol

from PyQt6.QtCore import QObject, pyqtSignal

from ..settings import Settings, SettingsStore
from ..stats import DailyStats, DailyStatsManager, DailyStatsStore
from .clock import SessionClock, SessionCompletion
from .ticks import QtTickSource, TickSource
from .types import SessionType, TimerState


logger = logging.getLogger(__name__)

# Upper bound on automatic transitions applied by one call.  Durations are
# at least one minute, so a real chain stops after a single start; the
# bound only matters if a session somehow starts with nothing left.
MAX_AUTO_CHAIN = 8


class NotificationSender(Protocol):
    def request_permission(self) -> None: ...

    def send_session_complete(
        self, session_type: SessionType, sound_enabled: bool,
    ) -> None: ...


class SoundPlayer(Protocol):
    def play_completion(self) -> None: ...

    def play_start(self) -> None: ...

    def play_pause(self) -> None: ...


class TimerEngine(QObject):
    """Qt-facing Pomodoro timer.

    Signals
    -------
    tick(remaining_seconds: int)
        Emitted after every applied tick and whenever the remaining time
        is recomputed (reset, settings change).
    state_changed(new_state: TimerState)
        Emitted after every control operation and every completion, even
        when the state itself is unchanged, so views can refresh the
        session type.
    session_completed(completion: SessionCompletion)
        Emitted once per finished session (natural or skipped).
    stats_changed(stats: DailyStats)
    settings_changed(settings: Settings)
    """

    tick = pyqtSignal(int)
    state_changed = pyqtSignal(object)
    session_completed = pyqtSignal(object)
    stats_changed = pyqtSignal(object)
    settings_changed = pyqtSignal(object)

    def __init__(
        self,
        settings_store: SettingsStore,
        stats_store: DailyStatsStore,
        notifier: NotificationSender,
        sound_player: SoundPlayer,
        parent: QObject | None = None,
        *,
        tick_source: TickSource | None = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        super().__init__(parent)

        self._settings_store = settings_store
        self._notifier = notifier
        self._sound = sound_player

        self._settings: Settings = settings_store.load()
        self._stats = DailyStatsManager(stats_store, today=today)
        self._clock = SessionClock(self._settings)

        self._ticks: TickSource = tick_source or QtTickSource(self)
        self._ticks.bind(self._on_tick)

        self._fire(self._notifier.request_permission)

    # ══════════════════════════════════════════════════════════════════
    #  PUBLIC PROPERTIES
    # ══════════════════════════════════════════════════════════════════

    @property
    def state(self) -> TimerState:
        return self._clock.state

    @property
    def session_type(self) -> SessionType:
        return self._clock.session_type

    @property
    def time_remaining(self) -> int:
        """Seconds left on the clock."""
        return self._clock.remaining_seconds

    @property
    def total_duration(self) -> int:
        return self._clock.total_seconds

    @property
    def completed_work_sessions(self) -> int:
        return self._clock.completed_work_sessions

    @property
    def is_running(self) -> bool:
        return self._clock.state is TimerState.RUNNING

    @property
    def progress_fraction(self) -> float:
        return self._clock.progress_fraction

    @property
    def session_progress_text(self) -> str:
        return self._clock.session_progress_text

    @property
    def time_string(self) -> str:
        return self._clock.time_string

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def daily_stats(self) -> DailyStats:
        return self._stats.stats

    @property
    def tick_source(self) -> TickSource:
        return self._ticks

    # ══════════════════════════════════════════════════════════════════
    #  CONTROLS
    # ══════════════════════════════════════════════════════════════════

    def start_timer(self) -> None:
        """Start or resume.  No-op when already running."""
        if self._clock.state is TimerState.RUNNING:
            return
        self._check_rollover()
        completion = self._clock.start()
        if completion is not None:
            self._finish(completion)
            return
        self._ticks.start()
        if self._settings.sound_enabled:
            self._fire(self._sound.play_start)
        self.state_changed.emit(self._clock.state)

    def pause_timer(self) -> None:
        if not self._clock.pause():
            return
        self._ticks.stop()
        if self._settings.sound_enabled:
            self._fire(self._sound.play_pause)
        self.state_changed.emit(self._clock.state)

    def reset_timer(self) -> None:
        self._ticks.stop()
        self._clock.reset()
        self.tick.emit(self._clock.remaining_seconds)
        self.state_changed.emit(self._clock.state)

    def skip_session(self) -> None:
        self._ticks.stop()
        self._finish(self._clock.skip())

    def update_settings(self, settings: Settings) -> None:
        """Replace all settings.

        A running or paused session keeps its current countdown; the new
        durations apply from its next reset or completion.
        """
        self._settings = settings
        self._clock.apply_settings(settings)
        self._settings_store.save(settings)
        self.settings_changed.emit(settings)
        if self._clock.state is TimerState.IDLE:
            self.tick.emit(self._clock.remaining_seconds)

    def reset_daily_stats(self) -> None:
        self._stats.reset()
        self.stats_changed.emit(self._stats.stats)

    def shutdown(self) -> None:
        """Stop ticking.  Called when the application quits."""
        self._ticks.stop()

    # ══════════════════════════════════════════════════════════════════
    #  INTERNAL: timer mechanics
    # ══════════════════════════════════════════════════════════════════

    def _on_tick(self) -> None:
        # A tick queued before a pause/reset must not touch the clock.
        if self._clock.state is not TimerState.RUNNING:
            self._ticks.stop()
            return
        completion = self._clock.tick()
        if completion is not None:
            self._finish(completion)
            return
        self.tick.emit(self._clock.remaining_seconds)

    def _finish(self, completion: SessionCompletion | None) -> None:
        """Record completions and apply the auto-start chain iteratively."""
        chained = 0
        while completion is not None:
            self._ticks.stop()
            self._record_completion(completion)
            if not completion.auto_start:
                break
            if chained >= MAX_AUTO_CHAIN:
                logger.warning(
                    "Auto-start stopped after %d chained sessions", chained,
                )
                break
            chained += 1
            self._check_rollover()
            completion = self._clock.start()

        if self._clock.state is TimerState.RUNNING:
            self._ticks.start()
        self.tick.emit(self._clock.remaining_seconds)
        self.state_changed.emit(self._clock.state)

    def _record_completion(self, completion: SessionCompletion) -> None:
        if completion.session_type is SessionType.WORK:
            self._stats.add_work_time(completion.credited_minutes)
        else:
            self._stats.add_break_time(completion.credited_minutes)
        self.stats_changed.emit(self._stats.stats)

        logger.info(
            "%s session complete (%d min credited), next: %s",
            completion.session_type.label,
            completion.credited_minutes,
            completion.next_session_type.label,
        )

        if self._settings.sound_enabled:
            self._fire(self._sound.play_completion)
        if self._settings.notifications_enabled:
            self._fire(
                self._notifier.send_session_complete,
                completion.session_type,
                self._settings.sound_enabled,
            )

        self.session_completed.emit(completion)

    def _check_rollover(self) -> None:
        if self._stats.reset_if_needed():
            logger.info("New day, daily stats reset")
            self.stats_changed.emit(self._stats.stats)

    @staticmethod
    def _fire(func: Callable[..., object], *args: object) -> None:
        try:
            func(*args)
        except Exception:
            logger.exception("Side effect %s failed", getattr(func, "__name__", func))
