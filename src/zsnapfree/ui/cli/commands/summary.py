"""Non-interactive report command."""

from typing import final, override

from zsnapfree.features.snapshots import QueryError
from zsnapfree.platform.logging import logger
from zsnapfree.ui.cli.commands.executor import CommandExecutor


@final
class SummaryCommand(CommandExecutor):
    """Print the snapshot table and reclaim estimate for the preselection, then exit."""

    @override
    def execute(self) -> int:
        try:
            loaded = self.service.load(self.args.select)
        except QueryError as exc:
            logger.error("%s", exc)
            return 1

        self.report_display.show_report(
            loaded.snapshots,
            loaded.report,
            target=self.args.target,
            dry_run_unavailable=self.service.dry_run_unavailable,
        )
        if loaded.selection:
            self.report_display.show_exit_hint(
                self.service.equivalent_commands(loaded.snapshots, loaded.selection),
                loaded.report,
            )
        return 0
