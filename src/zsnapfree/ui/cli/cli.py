"""Command line interface for zsnapfree."""

import sys
from collections.abc import Sequence
from typing import final

from zsnapfree.platform.logging import logger
from zsnapfree.ui.cli.args import ArgumentParser, CLIArgs
from zsnapfree.ui.cli.commands import CommandExecutor, InteractiveCommand, SummaryCommand


@final
class CommandProcessor:
    """Command line interface processor."""

    @staticmethod
    def process_command(args_list: Sequence[str] | None = None) -> None:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).
        """
        try:
            args: CLIArgs = ArgumentParser.process_args(args_list)

            command: CommandExecutor = (
                SummaryCommand(args) if args.summary else InteractiveCommand(args)
            )
            exit_code = command.execute()
            if exit_code:
                sys.exit(exit_code)

        except KeyboardInterrupt:
            logger.info("\nOperation cancelled by user")
            sys.exit(130)
        except Exception as e:
            logger.error("An unexpected error occurred: %s", str(e))
            sys.exit(1)


def main() -> int:
    """Main entry point.

    Returns:
        int: Process exit code (0 on success). Failures leave through
        ``sys.exit(...)`` inside command processing.
    """
    CommandProcessor.process_command()
    return 0
