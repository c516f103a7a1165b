"""Command line argument parser."""

import argparse
import logging
from collections.abc import Sequence
from pathlib import Path
from typing import final

from zsnapfree.config.settings import DEFAULT_ZFS_BINARY
from zsnapfree.platform.logging import setup_logger
from zsnapfree.ui.cli.args.options import CLIArgs


@final
class ArgumentParser:
    """Command line argument parser."""

    @staticmethod
    def create_parser() -> argparse.ArgumentParser:
        """Create argument parser.

        Returns:
            argparse.ArgumentParser: Configured argument parser.
        """
        parser = argparse.ArgumentParser(
            prog="zsnapfree",
            description=(
                "Pick ZFS snapshots to destroy and see how much space that would reclaim."
            ),
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        _ = parser.add_argument(
            "target",
            nargs="?",
            type=str,
            help="Dataset whose snapshots to list (defaults to every dataset)",
            metavar="TARGET",
        )
        _ = parser.add_argument(
            "-r",
            "--recursive",
            action="store_true",
            help="Include snapshots of descendant datasets of TARGET",
        )
        _ = parser.add_argument(
            "--summary",
            action="store_true",
            help="Print the snapshot table and reclaim estimate, then exit",
        )
        _ = parser.add_argument(
            "--select",
            nargs="+",
            default=[],
            metavar="NAME",
            help="Preselect snapshots by full name or unambiguous snapshot name",
        )
        _ = parser.add_argument(
            "--no-dry-run",
            dest="use_dry_run",
            action="store_false",
            help="Never call `zfs destroy -n`; sum snapshot sizes instead",
        )
        _ = parser.add_argument(
            "--zfs-binary",
            type=str,
            default=DEFAULT_ZFS_BINARY,
            metavar="PATH",
            help="zfs executable to run (default: %(default)s)",
        )
        verbosity = parser.add_mutually_exclusive_group()
        _ = verbosity.add_argument(
            "--verbose",
            action="store_true",
            help="Show debug logging, including every zfs command run",
        )
        _ = verbosity.add_argument(
            "--quiet",
            action="store_true",
            help="Suppress all output except errors",
        )
        _ = parser.add_argument(
            "--log-file",
            type=str,
            metavar="PATH",
            help="Also write debug logs to PATH",
        )
        return parser

    @staticmethod
    def process_args(args_list: Sequence[str] | None = None) -> CLIArgs:
        """Process command line arguments.

        Args:
            args_list: List of command line arguments (for testing).

        Returns:
            CLIArgs: Processed command line arguments.

        Raises:
            SystemExit: On invalid arguments.
        """
        parser = ArgumentParser.create_parser()
        parsed_args = parser.parse_args(args_list)

        # Set log level based on verbosity flags
        if parsed_args.quiet:
            log_level = logging.ERROR
        elif parsed_args.verbose:
            log_level = logging.DEBUG
        else:
            log_level = logging.INFO

        log_file = Path(parsed_args.log_file) if parsed_args.log_file else None
        _ = setup_logger(log_file=log_file, console_level=log_level)

        target: str | None = parsed_args.target
        if target is not None:
            target = target.rstrip("/") or None

        return CLIArgs(
            target=target,
            recursive=parsed_args.recursive,
            summary=parsed_args.summary,
            select=list(parsed_args.select),
            use_dry_run=parsed_args.use_dry_run,
            zfs_binary=parsed_args.zfs_binary,
            verbose=parsed_args.verbose,
            quiet=parsed_args.quiet,
            log_file=log_file,
        )
