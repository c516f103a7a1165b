"""Formatting helpers shared by the summary output and the interactive view."""

from __future__ import annotations

from datetime import datetime

import humanfriendly

APPROXIMATE_PREFIX = "~"


def format_bytes(value: int, *, approximate: bool = False) -> str:
    """Render a byte count with binary units, prefixed with ``~`` when approximate."""

    rendered = humanfriendly.format_size(value, binary=True)
    return f"{APPROXIMATE_PREFIX}{rendered}" if approximate else rendered


def format_creation(timestamp: int) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M")


__all__ = ["APPROXIMATE_PREFIX", "format_bytes", "format_creation"]
