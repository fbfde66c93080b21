"""SQLite-backed store for :class:`~justpomodoro.stats.DailyStats`.

One row per calendar day.  ``load`` returns the most recently tracked
day; the stats manager decides whether that is still today.
"""

from __future__ import annotations

import logging
from datetime import datetime

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from ..stats import DailyStats
from .db import get_session
from .models import DailyStatsRecord


logger = logging.getLogger(__name__)


class DailyStatsStore:
    """Reads and writes daily aggregates.  Never raises."""

    def load(self) -> DailyStats:
        try:
            with get_session() as db:
                record = db.scalars(
                    select(DailyStatsRecord)
                    .order_by(DailyStatsRecord.date.desc())
                    .limit(1)
                ).first()
                if record is None:
                    return DailyStats.zero()
                return DailyStats(
                    work_minutes=record.work_minutes,
                    break_minutes=record.break_minutes,
                    last_tracked_date=record.date,
                )
        except (SQLAlchemyError, OSError):
            logger.warning("Could not load daily stats, starting from zero", exc_info=True)
            return DailyStats.zero()

    def save(self, stats: DailyStats) -> None:
        if stats.last_tracked_date is None:
            return
        try:
            with get_session() as db:
                record = db.scalars(
                    select(DailyStatsRecord)
                    .where(DailyStatsRecord.date == stats.last_tracked_date)
                ).first()
                if record is None:
                    record = DailyStatsRecord(date=stats.last_tracked_date)
                    db.add(record)
                record.work_minutes = stats.work_minutes
                record.break_minutes = stats.break_minutes
                record.updated_at = datetime.now()
        except (SQLAlchemyError, OSError):
            logger.error("Could not save daily stats", exc_info=True)
