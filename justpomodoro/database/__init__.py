"""Database package."""

from .db import configure_engine, dispose_engine, get_session, init_db
from .models import DailyStatsRecord
from .store import DailyStatsStore

__all__ = [
    "configure_engine",
    "dispose_engine",
    "get_session",
    "init_db",
    "DailyStatsRecord",
    "DailyStatsStore",
]
