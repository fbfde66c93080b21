"""Shared pytest fixtures for Just Pomodoro tests."""

import os
import sys
from datetime import date

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PyQt6.QtWidgets import QApplication

from justpomodoro.database.db import configure_engine, dispose_engine, init_db
from justpomodoro.settings import Settings
from justpomodoro.timer.engine import TimerEngine

from helpers import (
    FakeTickSource,
    FakeToday,
    MemorySettingsStore,
    MemoryStatsStore,
    RecordingNotifier,
    RecordingSoundPlayer,
)


@pytest.fixture(scope="session")
def qapp():
    """A single QApplication instance shared across the entire test run."""
    app = QApplication.instance() or QApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield
    dispose_engine()


@pytest.fixture
def today():
    return FakeToday(date(2024, 3, 14))


@pytest.fixture
def sound():
    return RecordingSoundPlayer()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def ticks():
    return FakeTickSource()


@pytest.fixture
def make_engine(qapp, sound, notifier, ticks, today):
    """Factory: ``make_engine(settings=..., stats=...)`` → wired TimerEngine."""

    def _make(settings: Settings | None = None, stats=None) -> TimerEngine:
        return TimerEngine(
            MemorySettingsStore(settings or Settings()),
            MemoryStatsStore(stats),
            notifier,
            sound,
            tick_source=ticks,
            today=today,
        )

    return _make


@pytest.fixture
def engine(make_engine):
    """Default settings, auto-start OFF."""
    return make_engine()


@pytest.fixture
def engine_auto(make_engine):
    """Auto-start ON in both directions."""
    return make_engine(Settings(auto_start_breaks=True, auto_start_work=True))
