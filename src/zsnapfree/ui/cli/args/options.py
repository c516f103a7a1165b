"""Command line argument options."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import final


@final
@dataclass(slots=True)
class CLIArgs:
    """Parsed command line arguments for a ``zsnapfree`` run."""

    target: str | None
    recursive: bool
    summary: bool
    select: list[str] = field(default_factory=list)
    use_dry_run: bool = True
    zfs_binary: str = "zfs"
    verbose: bool = False
    quiet: bool = False
    log_file: Path | None = None


__all__ = ["CLIArgs"]
