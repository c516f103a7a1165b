"""Application service façades."""

from .reclaim_service import LoadedSnapshots, ReclaimService

__all__ = ["LoadedSnapshots", "ReclaimService"]
