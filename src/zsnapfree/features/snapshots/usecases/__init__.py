"""Use cases for snapshot reclaim accounting and deletion."""

from .deletion import DeletionExecutor
from .ports import ReclaimEstimator, SnapshotDestroyer, SnapshotLister
from .reclaim_engine import ReclaimEngine

__all__ = [
    "DeletionExecutor",
    "ReclaimEngine",
    "ReclaimEstimator",
    "SnapshotDestroyer",
    "SnapshotLister",
]
