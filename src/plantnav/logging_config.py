"""Logging setup for plantnav."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
MAX_BYTES = 1024 * 1024
BACKUP_COUNT = 3


def configure_logging(
    level: str | int = logging.WARNING,
    log_file: str | Path | None = None,
    console: bool = True,
) -> logging.Logger:
    """Configure the ``plantnav`` logger.

    Logs go to a rotating file when ``log_file`` is given, otherwise to stderr
    if ``console`` is set. With neither, records are dropped; the TUI uses that
    so nothing is written over the screen. Calling again replaces handlers.

    Args:
        level: Level name ("DEBUG", "INFO", ...) or number
        log_file: Optional path of the log file
        console: Log to stderr when no file is given

    Returns:
        The configured ``plantnav`` logger
    """
    logger = logging.getLogger("plantnav")
    logger.setLevel(level.upper() if isinstance(level, str) else level)

    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handler: logging.Handler
    if log_file:
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            path, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"
        )
    elif console:
        handler = logging.StreamHandler()
    else:
        handler = logging.NullHandler()

    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    logger.propagate = False
    return logger
