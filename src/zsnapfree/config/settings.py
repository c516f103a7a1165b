"""Where: src/zsnapfree/config/settings.py
What: Runtime settings assembled from command line flags and fixed defaults.
Why: Keep tunables in one place; the tool reads no configuration file.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path
from typing import Final

# External tool ---------------------------------------------------------------

DEFAULT_ZFS_BINARY: Final[str] = "zfs"

# Properties requested from ``zfs list``; order is part of the parsing contract.
LIST_PROPERTIES: Final[tuple[str, ...]] = ("name", "used", "referenced", "creation")

# Interactive loop --------------------------------------------------------------

# Seconds to wait for a key before draining background completions.
KEY_POLL_INTERVAL: Final[float] = 0.1

# Rows moved by page up / page down when the terminal height is unknown.
DEFAULT_PAGE_SIZE: Final[int] = 10

# Rows reserved around the snapshot table for borders, header and footer.
TABLE_CHROME_ROWS: Final[int] = 7


def resolve_zfs_binary(explicit: str | None) -> str:
    """Return the zfs executable to invoke.

    Explicit paths are used verbatim; bare command names are looked up on
    ``PATH`` and left unresolved when missing so the failure surfaces as a
    query error on first use.
    """

    candidate = (explicit or "").strip() or DEFAULT_ZFS_BINARY
    if "/" in candidate:
        return str(Path(candidate).expanduser())
    return shutil.which(candidate) or candidate


@dataclass(slots=True, frozen=True)
class Settings:
    """Session-wide settings derived from the command line."""

    zfs_binary: str = DEFAULT_ZFS_BINARY
    target: str | None = None
    recursive: bool = False
    use_dry_run: bool = True


__all__ = [
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_ZFS_BINARY",
    "KEY_POLL_INTERVAL",
    "LIST_PROPERTIES",
    "Settings",
    "TABLE_CHROME_ROWS",
    "resolve_zfs_binary",
]
