"""Command line interface package."""

from zsnapfree.ui.cli.cli import CommandProcessor, main

__all__ = ["CommandProcessor", "main"]
