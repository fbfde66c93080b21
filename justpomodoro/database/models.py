"""SQLAlchemy ORM models for Just Pomodoro."""

from datetime import datetime

from sqlalchemy import Column, Integer, DateTime, Date
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    pass


class DailyStatsRecord(Base):
    """Aggregated work/break minutes for one calendar day."""

    __tablename__ = "daily_stats"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, nullable=False, unique=True)
    work_minutes = Column(Integer, nullable=False, default=0)
    break_minutes = Column(Integer, nullable=False, default=0)
    updated_at = Column(DateTime, nullable=False, default=datetime.now)

    def __repr__(self) -> str:
        return (
            f"<DailyStatsRecord date={self.date} work={self.work_minutes}m "
            f"break={self.break_minutes}m>"
        )
