"""Logging facade exports.

Where: platform/logging/__init__.py
What: Re-export configured logger, setup helpers, and custom Rich handlers.
Why: Provide a single canonical import path for every layer.
"""

from __future__ import annotations

from .config import LOGGER_NAME, console_for, logger, setup_logger
from .handlers import SnapshotRichHandler

__all__ = [
    "LOGGER_NAME",
    "SnapshotRichHandler",
    "console_for",
    "logger",
    "setup_logger",
]
