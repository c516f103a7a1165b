"""Public surface for the snapshot reclaim feature."""

from .domain import (
    DestroyError,
    DestroyOutcome,
    DestroyStatus,
    DryRunUnavailable,
    MarginalReclaim,
    ParseError,
    QueryError,
    ReclaimReport,
    Selection,
    Snapshot,
    SnapshotError,
)
from .usecases import DeletionExecutor, ReclaimEngine

__all__ = [
    "DeletionExecutor",
    "DestroyError",
    "DestroyOutcome",
    "DestroyStatus",
    "DryRunUnavailable",
    "MarginalReclaim",
    "ParseError",
    "QueryError",
    "ReclaimEngine",
    "ReclaimReport",
    "Selection",
    "Snapshot",
    "SnapshotError",
]
