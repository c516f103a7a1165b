"""zsnapfree: see how much space destroying ZFS snapshots would reclaim, then do it."""

__version__ = "0.1.0"
