"""
Summary: Thin subprocess wrapper used by adapters that drive external tools.
Why: Keep argv logging and output capture in one place so adapters only map results.
"""

from __future__ import annotations

import shlex
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass

from zsnapfree.platform.logging import logger


@dataclass(slots=True, frozen=True)
class CommandResult:
    """Captured outcome of one external command invocation."""

    argv: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)

    def error_text(self) -> str:
        """Return the most useful diagnostic text for a failed run."""

        message = self.stderr.strip() or self.stdout.strip()
        return message or f"exit status {self.returncode}"


def run_command(argv: Sequence[str]) -> CommandResult:
    """Run ``argv`` to completion and capture its text output.

    Raises:
        OSError: The executable is missing or cannot be started.
    """

    args = tuple(argv)
    logger.debug("Running command: %s", shlex.join(args))
    completed = subprocess.run(
        list(args),
        capture_output=True,
        text=True,
        check=False,
    )
    result = CommandResult(
        argv=args,
        returncode=completed.returncode,
        stdout=completed.stdout,
        stderr=completed.stderr,
    )
    if not result.ok:
        logger.debug("Command failed (%s): %s", result.returncode, result.error_text())
    return result


__all__ = ["CommandResult", "run_command"]
