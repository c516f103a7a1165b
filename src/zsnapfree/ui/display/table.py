"""Rich table projection of a snapshot listing and its reclaim report."""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from rich import box
from rich.style import Style
from rich.table import Table
from rich.text import Text

from zsnapfree.features.snapshots import ReclaimReport, Selection, Snapshot
from zsnapfree.features.snapshots.domain import group_by_dataset

from .formatting import format_bytes, format_creation

SELECTED_MARK = "+"
CURSOR_MARK = ">"
_CURSOR_STYLE = Style(color="blue", reverse=True)
_SELECTED_STYLE = Style(color="yellow")


def table_title(snapshots: Sequence[Snapshot], target: str | None = None) -> str:
    datasets = list(group_by_dataset(snapshots))
    if len(datasets) == 1:
        return f"Snapshots for {datasets[0]}"
    if target:
        return f"Snapshots under {target} ({len(datasets)} datasets)"
    return f"Snapshots ({len(datasets)} datasets)"


def reclaim_headline(report: ReclaimReport) -> Text:
    """Summarize the selection, mirroring what ``zfs destroy -n`` would report."""

    text = Text()
    _ = text.append("Destroying ", style="bold blue")
    _ = text.append(str(len(report.selected)))
    _ = text.append(" snapshots would reclaim ", style="bold blue")
    _ = text.append(format_bytes(report.total, approximate=report.approximate and report.total > 0))
    if report.degraded:
        _ = text.append("  (dry-run failed, showing summed sizes)", style="yellow")
    elif report.approximate and report.selected:
        _ = text.append("  (estimate from snapshot sizes)", style="dim")
    return text


def build_snapshot_table(
    snapshots: Sequence[Snapshot],
    selection: Selection,
    report: ReclaimReport,
    *,
    cursor: int | None = None,
    window: tuple[int, int] | None = None,
    failures: Mapping[str, str] | None = None,
    title: str | None = None,
) -> Table:
    """Build the snapshot table.

    Args:
        snapshots: Listing in display order.
        selection: Snapshot names marked for deletion.
        report: Reclaim report for ``selection``.
        cursor: Index of the highlighted row, if any.
        window: ``(start, stop)`` slice of rows to render.
        failures: Destroy failure reasons keyed by snapshot name.
        title: Optional table title.
    """
    single_dataset = len(group_by_dataset(snapshots)) <= 1
    failures = failures or {}

    table = Table(
        title=title,
        box=box.SIMPLE_HEAD,
        expand=True,
        show_edge=False,
        pad_edge=False,
    )
    table.add_column("", width=3, no_wrap=True)
    table.add_column("Snapshot", ratio=1, no_wrap=True, overflow="ellipsis")
    table.add_column("Created", no_wrap=True)
    table.add_column("Used", justify="right", no_wrap=True)
    table.add_column("Referenced", justify="right", no_wrap=True)
    table.add_column("If also destroyed", justify="right", no_wrap=True)

    start, stop = window if window is not None else (0, len(snapshots))
    for index in range(start, min(stop, len(snapshots))):
        snapshot = snapshots[index]
        marked = snapshot.name in selection
        mark = (CURSOR_MARK if index == cursor else " ") + (SELECTED_MARK if marked else " ")

        label = Text(snapshot.short_name if single_dataset else snapshot.name)
        reason = failures.get(snapshot.name)
        if reason:
            _ = label.append(f"  ✗ {reason}", style="red")

        marginal = report.marginal_for(snapshot.name)
        if marked:
            marginal_text = Text("selected", style="yellow")
        elif marginal is None:
            marginal_text = Text("-", style="dim")
        else:
            marginal_text = Text(
                format_bytes(marginal.bytes, approximate=marginal.approximate),
                style="dim" if marginal.approximate else "",
            )

        style: Style | None = None
        if index == cursor:
            style = _CURSOR_STYLE
        elif marked:
            style = _SELECTED_STYLE

        table.add_row(
            mark,
            label,
            format_creation(snapshot.creation),
            format_bytes(snapshot.used),
            format_bytes(snapshot.referenced),
            marginal_text,
            style=style,
        )
    return table


__all__ = [
    "CURSOR_MARK",
    "SELECTED_MARK",
    "build_snapshot_table",
    "reclaim_headline",
    "table_title",
]
