"""Logger configuration bootstrap.

Where: platform/logging/config.py
What: Configure the shared application logger and expose its console.
Why: The console shows operator-facing events while an optional file keeps the zfs command trail.
"""

from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path
from typing import Final

from rich.console import Console

from .handlers import SnapshotRichHandler

LOGGER_NAME: Final[str] = "zsnapfree"
FILE_LOG_FORMAT: Final[str] = "%(asctime)s %(levelname)-8s [%(threadName)s] %(name)s: %(message)s"
LOG_FILE_MAX_BYTES: Final[int] = 10 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 5


def setup_logger(
    log_file: Path | None = None,
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> logging.Logger:
    """Configure the ``zsnapfree`` logger.

    The console handler writes to stderr so the report on stdout stays clean.
    The optional file handler keeps DEBUG records, which include every zfs
    command line run by :func:`zsnapfree.platform.process.run_command`,
    tagged with the thread that ran it (the UI thread or the zfs worker).

    Args:
        log_file: Rotating log file to write. None disables file logging.
        console_level: Minimum level shown on the console.
        file_level: Minimum level written to ``log_file``.

    Returns:
        logging.Logger: The configured logger; calling again replaces its handlers.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)

    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    console = Console(stderr=True, soft_wrap=True)
    console_handler = SnapshotRichHandler(console=console)
    console_handler.setLevel(console_level)
    logger.addHandler(console_handler)

    if log_file is not None:
        resolved_log_file = Path(log_file).expanduser().resolve()
        resolved_log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            resolved_log_file,
            maxBytes=LOG_FILE_MAX_BYTES,
            backupCount=LOG_FILE_BACKUPS,
            encoding="utf-8",
        )
        file_handler.setLevel(file_level)
        file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        logger.addHandler(file_handler)

    return logger


def console_for(logger: logging.Logger) -> Console | None:
    """Return the console of the first Rich handler attached to ``logger``."""

    for handler in logger.handlers:
        if isinstance(handler, SnapshotRichHandler):
            return handler.console
    return None


logger: Final[logging.Logger] = setup_logger()


__all__ = ["LOGGER_NAME", "console_for", "logger", "setup_logger"]
