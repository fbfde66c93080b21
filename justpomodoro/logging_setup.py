"""Root logger setup: console always, plus a rotating file when writable."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_DIR_NAME = "logs"
LOG_FILE_BASENAME = "justpomodoro.log"
LOG_MAX_BYTES = 512_000
LOG_BACKUP_COUNT = 3

FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


def _file_handler(base_dir: Path) -> RotatingFileHandler:
    log_dir = base_dir / LOG_DIR_NAME
    log_dir.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_dir / LOG_FILE_BASENAME,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(FILE_FORMAT))
    return handler


def configure_logging(base_dir: Path, level: int = logging.INFO) -> Path | None:
    """Install the app's handlers on the root logger.

    Returns the log file path, or None when only console logging could
    be set up.  Calling it again replaces the previous handlers.
    """
    root = logging.getLogger()
    root.setLevel(level)
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()

    console = logging.StreamHandler()
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))
    root.addHandler(console)

    logger = logging.getLogger(__name__)
    try:
        handler = _file_handler(base_dir)
    except OSError:
        logger.warning("Could not open a log file in %s, logging to console only", base_dir)
        return None
    root.addHandler(handler)
    logger.info("Logging to %s", handler.baseFilename)
    return Path(handler.baseFilename)


__all__ = ["configure_logging"]
