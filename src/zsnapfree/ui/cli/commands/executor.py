"""src/zsnapfree/ui/cli/commands/executor.py
What: Provide shared wiring for CLI command executors.
Why: Build the reclaim service and report display once for every command.
"""

from abc import ABC, abstractmethod

from zsnapfree.application.services import ReclaimService
from zsnapfree.config.settings import Settings
from zsnapfree.ui.cli.args.options import CLIArgs
from zsnapfree.ui.display import ReportDisplay


class CommandExecutor(ABC):
    """Base class for command execution."""

    args: CLIArgs
    settings: Settings
    service: ReclaimService
    report_display: ReportDisplay

    def __init__(
        self,
        args: CLIArgs,
        *,
        service: ReclaimService | None = None,
        report_display: ReportDisplay | None = None,
    ) -> None:
        """Initialize command executor.

        Args:
            args: Command line arguments.
            service: Reclaim service to use; built from ``args`` when omitted.
            report_display: Output helper; writes to stdout when omitted.
        """
        self.args = args
        self.settings = Settings(
            zfs_binary=args.zfs_binary,
            target=args.target,
            recursive=args.recursive,
            use_dry_run=args.use_dry_run,
        )
        self.service = service or ReclaimService(self.settings)
        self.report_display = report_display or ReportDisplay()

    @abstractmethod
    def execute(self) -> int:
        """Execute the command.

        Returns:
            Process exit code.
        """
        pass
