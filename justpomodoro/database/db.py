"""SQLite engine and session handling.

The engine is built on first use so that importing the package never
touches the disk.  Tests swap it for an in-memory database with
:func:`configure_engine`.
"""

import logging
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from ..settings import APP_SUPPORT_DIR
from .models import Base


logger = logging.getLogger(__name__)

DB_PATH = APP_SUPPORT_DIR / "justpomodoro.db"
DEFAULT_URL = f"sqlite:///{DB_PATH}"

_engine: Engine | None = None
_SessionFactory: sessionmaker | None = None


def _build_engine(url: str) -> Engine:
    return create_engine(url, connect_args={"check_same_thread": False})


def _current_engine() -> Engine:
    global _engine
    if _engine is None:
        DB_PATH.parent.mkdir(parents=True, exist_ok=True)
        _engine = _build_engine(DEFAULT_URL)
    return _engine


def configure_engine(url: str) -> None:
    """Point the package at *url*, dropping any engine already built."""
    global _engine
    dispose_engine()
    _engine = _build_engine(url)


def dispose_engine() -> None:
    """Close pooled connections.  The next session rebuilds the engine."""
    global _engine, _SessionFactory
    if _engine is not None:
        _engine.dispose()
    _engine = None
    _SessionFactory = None


def init_db() -> bool:
    """Create the ``daily_stats`` table if it is missing.

    Returns False when the database cannot be opened.  The app keeps
    running; the stats store then falls back to zero stats.
    """
    try:
        engine = _current_engine()
        Base.metadata.create_all(engine)
    except (SQLAlchemyError, OSError):
        logger.warning("Could not open the stats database", exc_info=True)
        return False
    logger.debug("Database ready at %s", engine.url)
    return True


@contextmanager
def get_session():
    """Yield a session; commit on success, roll back and re-raise on error."""
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_current_engine(), expire_on_commit=False)
    session: OrmSession = _SessionFactory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
