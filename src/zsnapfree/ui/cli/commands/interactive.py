"""src/zsnapfree/ui/cli/commands/interactive.py
What: Run the full-screen snapshot picker and print the equivalent zfs command afterwards.
Why: Keep terminal checks and post-session output out of the TUI package.
"""

import sys
from typing import final, override

from zsnapfree.platform.logging import logger
from zsnapfree.ui.cli.commands.executor import CommandExecutor
from zsnapfree.ui.tui import TerminalSession


@final
class InteractiveCommand(CommandExecutor):
    """Interactive selection session."""

    @override
    def execute(self) -> int:
        if not sys.stdin.isatty():
            logger.error("Interactive mode needs a terminal on stdin; use --summary instead")
            return 1

        session = TerminalSession(
            self.service,
            initial_selection=self.args.select,
            target=self.args.target,
        )
        ready = session.run()
        self.report_display.show_outcomes(session.outcomes)

        if ready is None:
            if session.error:
                logger.error("%s", session.error)
                return 1
            return 0

        report = ready.report
        if report.selected != ready.selection:
            # Quit while a recomputation was still in flight.
            report = self.service.recompute(ready.snapshots, ready.selection)

        self.report_display.show_exit_hint(
            self.service.equivalent_commands(ready.snapshots, ready.selection),
            report,
        )
        return 0
