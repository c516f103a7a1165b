"""Command execution package for CLI."""

from zsnapfree.ui.cli.commands.executor import CommandExecutor
from zsnapfree.ui.cli.commands.interactive import InteractiveCommand
from zsnapfree.ui.cli.commands.summary import SummaryCommand

__all__ = [
    "CommandExecutor",
    "InteractiveCommand",
    "SummaryCommand",
]
