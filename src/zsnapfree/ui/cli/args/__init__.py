"""Command line argument handling package."""

from zsnapfree.ui.cli.args.options import CLIArgs
from zsnapfree.ui.cli.args.parser import ArgumentParser

__all__ = ["ArgumentParser", "CLIArgs"]
