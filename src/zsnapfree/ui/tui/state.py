"""
Summary: Immutable interaction states and the pure transitions between them.
Why: Keep "what changed" apart from drawing so transitions test without a terminal.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace

from zsnapfree.features.snapshots import DestroyOutcome, ReclaimReport, Selection, Snapshot
from zsnapfree.features.snapshots.domain import EMPTY_SELECTION, toggle_selection


@dataclass(slots=True, frozen=True)
class Loading:
    """Waiting for a snapshot listing."""

    previous: "Ready | None" = None


@dataclass(slots=True, frozen=True)
class Ready:
    """Snapshot table with the current selection and its reclaim report.

    ``busy`` is set while a recomputation for ``selection`` is in flight, in
    which case ``report`` still describes an older selection.
    """

    snapshots: tuple[Snapshot, ...]
    selection: Selection
    report: ReclaimReport
    cursor: int = 0
    busy: bool = False
    failures: Mapping[str, str] = field(default_factory=dict)

    @property
    def current(self) -> Snapshot | None:
        if not self.snapshots:
            return None
        return self.snapshots[self.cursor]


@dataclass(slots=True, frozen=True)
class ConfirmingDeletion:
    """Asking the operator to confirm destroying the selection."""

    ready: Ready


@dataclass(slots=True, frozen=True)
class Deleting:
    """Destroy operations in flight for ``ready.selection``."""

    ready: Ready


@dataclass(slots=True, frozen=True)
class ErrorState:
    """Blocking error awaiting retry, acknowledgement, or quit."""

    message: str
    previous: Ready | None = None


@dataclass(slots=True, frozen=True)
class Finished:
    """Terminal state; ``ready`` is the last table shown, if any."""

    ready: Ready | None = None


State = Loading | Ready | ConfirmingDeletion | Deleting | ErrorState | Finished


def _clamp(index: int, length: int) -> int:
    if length <= 0:
        return 0
    return max(0, min(index, length - 1))


def loaded(
    snapshots: Sequence[Snapshot],
    report: ReclaimReport,
    *,
    previous: Ready | None = None,
    outcomes: Sequence[DestroyOutcome] = (),
) -> Ready:
    """Enter ``Ready`` with a fresh listing, keeping the cursor where it was."""

    listing = tuple(snapshots)
    cursor = _clamp(previous.cursor, len(listing)) if previous is not None else 0
    failures = {outcome.name: outcome.reason or "failed" for outcome in outcomes if not outcome.succeeded}
    return Ready(
        snapshots=listing,
        selection=report.selected,
        report=report,
        cursor=cursor,
        failures=failures,
    )


def move_cursor(ready: Ready, delta: int) -> Ready:
    return replace(ready, cursor=_clamp(ready.cursor + delta, len(ready.snapshots)))


def cursor_to(ready: Ready, index: int) -> Ready:
    return replace(ready, cursor=_clamp(index, len(ready.snapshots)))


def toggle_current(ready: Ready) -> Ready:
    """Flip the snapshot under the cursor and advance to the next row."""

    current = ready.current
    if current is None:
        return ready
    return replace(
        ready,
        selection=toggle_selection(ready.selection, current.name),
        cursor=_clamp(ready.cursor + 1, len(ready.snapshots)),
        busy=True,
    )


def clear_selection(ready: Ready) -> Ready:
    if not ready.selection:
        return ready
    return replace(ready, selection=EMPTY_SELECTION, busy=True)


def recomputed(ready: Ready, report: ReclaimReport) -> Ready:
    return replace(ready, report=report, busy=False)


def request_delete(ready: Ready) -> Ready | ConfirmingDeletion:
    if not ready.selection or ready.busy:
        return ready
    return ConfirmingDeletion(ready=ready)


def cancel(confirming: ConfirmingDeletion) -> Ready:
    return confirming.ready


def confirm(confirming: ConfirmingDeletion) -> Deleting:
    return Deleting(ready=confirming.ready)


def failed(message: str, previous: Ready | None = None) -> ErrorState:
    return ErrorState(message=message, previous=previous)


def acknowledge(error: ErrorState) -> Ready | Loading:
    """Dismiss an error, returning to the last table or reloading when there is none.

    A table whose report lags its selection comes back ``busy`` so the caller
    recomputes before a deletion can be requested.
    """

    previous = error.previous
    if previous is None:
        return Loading()
    return replace(previous, busy=previous.report.selected != previous.selection)


def retry(error: ErrorState) -> Loading:
    return Loading(previous=error.previous)


def finish(state: State) -> Finished:
    if isinstance(state, Finished):
        return state
    return Finished(ready=last_ready(state))


def last_ready(state: State) -> Ready | None:
    """Return the most recent ``Ready`` reachable from ``state``."""

    if isinstance(state, Ready):
        return state
    if isinstance(state, (ConfirmingDeletion, Deleting, Finished)):
        return state.ready
    return state.previous


__all__ = [
    "ConfirmingDeletion",
    "Deleting",
    "ErrorState",
    "Finished",
    "Loading",
    "Ready",
    "State",
    "acknowledge",
    "cancel",
    "clear_selection",
    "confirm",
    "cursor_to",
    "failed",
    "finish",
    "last_ready",
    "loaded",
    "move_cursor",
    "recomputed",
    "request_delete",
    "retry",
    "toggle_current",
]
