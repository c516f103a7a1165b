"""Rich logging handler with dedicated rendering for snapshot events."""

from __future__ import annotations

import logging
from typing import Any, ClassVar, override

from rich.console import ConsoleRenderable
from rich.logging import RichHandler
from rich.style import Style
from rich.text import Text


class SnapshotRichHandler(RichHandler):
    """Rich handler that highlights snapshot names and structured snapshot events."""

    _EVENT_STYLES: ClassVar[dict[str, tuple[str, str]]] = {
        "snapshot.list.complete": ("📋", "cyan"),
        "snapshot.dryrun.available": ("🔎", "green"),
        "snapshot.dryrun.unavailable": ("ℹ️", "yellow"),
        "snapshot.reclaim.degraded": ("⚠️", "yellow"),
        "snapshot.destroy.success": ("🗑️", "green"),
        "snapshot.destroy.error": ("⛔", "red"),
    }
    _DATASET_SEGMENT_LIMIT: ClassVar[int] = 3

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        """Initialize the handler with compact console settings.

        Args:
            *args: Positional arguments to pass to RichHandler.
            **kwargs: Keyword arguments to pass to RichHandler.
        """
        kwargs["show_time"] = False
        kwargs["show_path"] = False
        kwargs["show_level"] = False
        kwargs["rich_tracebacks"] = True
        kwargs["markup"] = True
        kwargs["omit_repeated_times"] = False
        super().__init__(*args, **kwargs)

    def _format_snapshot_name(self, name: str) -> Text:
        """Render ``pool/fs@snap`` with the dataset dimmed and the snapshot highlighted.

        Datasets deeper than the segment limit keep only their trailing
        components behind an ellipsis.
        """
        dataset, separator, snapshot = name.partition("@")
        parts = [part for part in dataset.split("/") if part]
        truncated = len(parts) > self._DATASET_SEGMENT_LIMIT
        if truncated:
            parts = parts[-self._DATASET_SEGMENT_LIMIT:]

        text = Text()
        if truncated:
            _ = text.append("…/", style=Style(color="magenta"))
        for index, part in enumerate(parts):
            if index:
                _ = text.append("/", style=Style(color="magenta"))
            _ = text.append(part, style=Style(color="bright_black"))
        if separator:
            _ = text.append("@", style=Style(color="magenta"))
            _ = text.append(snapshot, style=Style(color="white", bold=True))
        return text

    def _render_snapshot_event(self, record: logging.LogRecord, message: str) -> Text | None:
        event = getattr(record, "snapshot_event", None)
        if not isinstance(event, str):
            return None

        icon, color = self._EVENT_STYLES.get(event, ("ℹ️", "blue"))
        text = Text()
        _ = text.append(f"{icon} ", style=Style(color=color, bold=True))

        body = Text(style=Style(color=color))
        name = getattr(record, "snapshot_name", None)
        if event == "snapshot.destroy.success" and isinstance(name, str):
            _ = body.append("Destroyed ")
            _ = body.append_text(self._format_snapshot_name(name))
        elif event == "snapshot.destroy.error" and isinstance(name, str):
            _ = body.append("Failed to destroy ")
            _ = body.append_text(self._format_snapshot_name(name))
            error = getattr(record, "error_message", None)
            if error:
                _ = body.append(f" ({error})")
        elif event == "snapshot.list.complete":
            count = getattr(record, "snapshot_count", None)
            datasets = getattr(record, "dataset_count", None)
            _ = body.append("Listed snapshots")
            details: list[str] = []
            if isinstance(count, int):
                details.append(f"snapshots={count}")
            if isinstance(datasets, int):
                details.append(f"datasets={datasets}")
            if details:
                _ = body.append(" [" + ", ".join(details) + "]")
        else:
            _ = body.append(message)

        _ = text.append_text(body)
        return text

    @override
    def render_message(self, record: logging.LogRecord, message: str) -> ConsoleRenderable:
        """Render snapshot events with custom styling, everything else as Rich does."""

        snapshot_text = self._render_snapshot_event(record, message)
        if snapshot_text is not None:
            return snapshot_text
        return super().render_message(record, message)


__all__ = ["SnapshotRichHandler"]
