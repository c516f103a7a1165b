"""Ports for the snapshot reclaim feature."""

from __future__ import annotations

from collections.abc import Collection
from typing import Protocol

from ..domain.models import Snapshot


class SnapshotLister(Protocol):
    """Fetch the current snapshot set from the external tool."""

    def list(self) -> list[Snapshot]:
        """Return snapshots grouped by dataset and ordered by creation.

        Raises:
            QueryError: The tool is unavailable, denied, or failed.
            ParseError: The tool output does not match the listing contract.
        """

        ...


class ReclaimEstimator(Protocol):
    """Ask the external tool what destroying a batch of snapshots would free."""

    def estimate(self, dataset: str, chain: list[Snapshot], names: Collection[str]) -> int:
        """Return bytes freed if exactly ``names`` of ``dataset`` were destroyed together.

        ``chain`` is the dataset's full creation-ordered snapshot chain, used
        to collapse ``names`` into contiguous ranges.
        """

        ...


class SnapshotDestroyer(Protocol):
    """Destroy a single snapshot."""

    def destroy(self, name: str) -> None:
        """Destroy ``name``; raise ``DestroyError`` on failure."""

        ...
