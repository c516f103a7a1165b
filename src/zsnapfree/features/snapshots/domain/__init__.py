"""Domain models for snapshot reclaim accounting."""

from .errors import DestroyError, ParseError, QueryError, SnapshotError
from .models import (
    EMPTY_SELECTION,
    DestroyOutcome,
    DestroyStatus,
    DryRunUnavailable,
    MarginalReclaim,
    ReclaimReport,
    Selection,
    Snapshot,
    group_by_dataset,
    resolve_names,
    toggle_selection,
)
from .ranges import SnapRange, destroy_spec, snap_ranges

__all__ = [
    "DestroyError",
    "DestroyOutcome",
    "DestroyStatus",
    "DryRunUnavailable",
    "EMPTY_SELECTION",
    "MarginalReclaim",
    "ParseError",
    "QueryError",
    "ReclaimReport",
    "Selection",
    "SnapRange",
    "Snapshot",
    "SnapshotError",
    "destroy_spec",
    "group_by_dataset",
    "resolve_names",
    "snap_ranges",
    "toggle_selection",
]
