"""Display utilities for reclaim reports and the post-session command hint."""

from __future__ import annotations

from collections.abc import Sequence
from typing import final

from rich.console import Console
from rich.markup import escape

from zsnapfree.features.snapshots import DestroyOutcome, DryRunUnavailable, ReclaimReport, Snapshot

from .formatting import format_bytes
from .table import build_snapshot_table, reclaim_headline, table_title


@final
class ReportDisplay:
    """Render reclaim reports and deletion outcomes outside the interactive view."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def show_report(
        self,
        snapshots: Sequence[Snapshot],
        report: ReclaimReport,
        *,
        target: str | None = None,
        dry_run_unavailable: DryRunUnavailable | None = None,
    ) -> None:
        """Print the snapshot table followed by the reclaim headline."""

        if not snapshots:
            scope = target or "any dataset"
            self.console.print(f"[yellow]No snapshots found for {scope}.[/yellow]")
            return

        self.console.print(
            build_snapshot_table(
                snapshots,
                report.selected,
                report,
                title=table_title(snapshots, target),
            )
        )
        self.console.print(reclaim_headline(report))
        if dry_run_unavailable is not None:
            self.console.print(
                f"[dim]~ marks figures summed from per-snapshot sizes "
                f"(dry-run estimates unavailable: {escape(dry_run_unavailable.reason)})[/dim]"
            )

    def show_outcomes(self, outcomes: Sequence[DestroyOutcome]) -> None:
        """Print a summary of destroy outcomes."""

        if not outcomes:
            return
        deleted = [outcome for outcome in outcomes if outcome.succeeded]
        failed = [outcome for outcome in outcomes if not outcome.succeeded]

        self.console.print("\n[bold]Destroy Summary:[/bold]")
        self.console.print(f"[green]Destroyed: {len(deleted)}[/green]")
        if failed:
            self.console.print(f"[red]Failed: {len(failed)}[/red]")
            for outcome in failed:
                self.console.print(f"[red]  • {outcome.name}: {escape(outcome.reason or '')}[/red]")

    def show_exit_hint(self, commands: Sequence[str], report: ReclaimReport) -> None:
        """Print the ``zfs destroy -nv`` command lines equivalent to the final selection."""

        if not commands:
            self.console.print("No snapshots selected; nothing to destroy.")
            return

        self.console.print(
            f"Running the following command{'s' if len(commands) > 1 else ''} should pretend to "
            f"delete {len(report.selected)} snapshots and show that this would reclaim "
            f"{format_bytes(report.total, approximate=report.approximate)}:\n"
        )
        for command in commands:
            self.console.print(f"  {command}", markup=False, highlight=False)
        self.console.print("\nRun it as root and without `-n` to actually do it.", markup=False)


__all__ = ["ReportDisplay"]
