"""Timer package.

``TimerEngine`` lives in :mod:`justpomodoro.timer.engine`; it is not
re-exported here because it imports the settings module, which itself
depends on the enums below.
"""

from .types import TimerState, SessionType
from .clock import (
    SessionClock,
    SessionCompletion,
    next_session_type,
    should_auto_start,
)

__all__ = [
    "TimerState",
    "SessionType",
    "SessionClock",
    "SessionCompletion",
    "next_session_type",
    "should_auto_start",
]
