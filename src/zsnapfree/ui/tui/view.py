"""
Summary: Project an interaction state onto a Rich renderable.
Why: Drawing is a pure function of state and terminal height.
"""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.text import Text

from zsnapfree.config.settings import TABLE_CHROME_ROWS
from zsnapfree.ui.display import build_snapshot_table, format_bytes, reclaim_headline, table_title

from . import state as st

MIN_VISIBLE_ROWS = 3

READY_HELP = "[space] toggle  [c] clear  [d] destroy  [j/k] move  [q] quit"
CONFIRM_HELP = "[y] destroy  [n] cancel  [q] quit"
ERROR_HELP = "[r] retry  [esc] back  [q] quit"


def visible_rows(height: int) -> int:
    return max(height - TABLE_CHROME_ROWS, MIN_VISIBLE_ROWS)


def scroll_window(cursor: int, total: int, rows: int) -> tuple[int, int]:
    """Return the ``(start, stop)`` slice that keeps ``cursor`` roughly centred."""

    if total <= rows:
        return 0, total
    start = max(0, cursor - rows // 2)
    start = min(start, total - rows)
    return start, start + rows


def _ready_panel(ready: st.Ready, *, height: int, target: str | None) -> Panel:
    if not ready.snapshots:
        body: RenderableType = Text(f"No snapshots found for {target or 'any dataset'}.", style="yellow")
        return Panel(body, title="Snapshots", subtitle=Text("[q] quit"), border_style="blue")

    window = scroll_window(ready.cursor, len(ready.snapshots), visible_rows(height))
    table = build_snapshot_table(
        ready.snapshots,
        ready.selection,
        ready.report,
        cursor=ready.cursor,
        window=window,
        failures=ready.failures,
    )
    footer = reclaim_headline(ready.report)
    if ready.busy:
        _ = footer.append("  <recalculating...>", style="italic dim")
    return Panel(
        Group(table, footer),
        title=Text(table_title(ready.snapshots, target)),
        subtitle=Text(READY_HELP),
        border_style="blue",
    )


def _confirm_panel(ready: st.Ready) -> Panel:
    report = ready.report
    body = Text()
    _ = body.append(f"Destroy {len(ready.selection)} snapshots", style="bold")
    _ = body.append(" and reclaim ")
    _ = body.append(format_bytes(report.total, approximate=report.approximate), style="bold")
    _ = body.append("?\n\n")
    for name in sorted(ready.selection):
        _ = body.append(f"  {name}\n", style="yellow")
    return Panel(body, title="Confirm destroy", subtitle=Text(CONFIRM_HELP), border_style="red")


def render(state: st.State, *, height: int, target: str | None = None) -> RenderableType:
    """Build the renderable for ``state``."""

    if isinstance(state, st.Ready):
        return _ready_panel(state, height=height, target=target)
    if isinstance(state, st.ConfirmingDeletion):
        return Group(_ready_panel(state.ready, height=height, target=target), _confirm_panel(state.ready))
    if isinstance(state, st.Deleting):
        count = len(state.ready.selection)
        return Panel(
            Text(f"Destroying {count} snapshots...", style="bold"),
            title="Destroying",
            border_style="red",
        )
    if isinstance(state, st.ErrorState):
        return Panel(
            Text(state.message, style="red"),
            title="Error",
            subtitle=Text(ERROR_HELP),
            border_style="red",
        )
    if isinstance(state, st.Loading):
        return Panel(Text("Loading snapshots...", style="dim"), title=Text(target or "Snapshots"), border_style="blue")
    return Text("")


__all__ = ["render", "scroll_window", "visible_rows"]
