"""Enums shared by the clock, the engine and the presentation layer."""

from __future__ import annotations

from enum import Enum


class TimerState(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"


class SessionType(Enum):
    WORK = "Work"
    SHORT_BREAK = "Short Break"
    LONG_BREAK = "Long Break"

    @property
    def label(self) -> str:
        return self.value

    @property
    def icon(self) -> str:
        """Icon identity used by the menu-bar renderer."""
        return _ICONS[self]

    @property
    def is_break(self) -> bool:
        return self is not SessionType.WORK


_ICONS: dict[SessionType, str] = {
    SessionType.WORK: "work",
    SessionType.SHORT_BREAK: "short_break",
    SessionType.LONG_BREAK: "long_break",
}
