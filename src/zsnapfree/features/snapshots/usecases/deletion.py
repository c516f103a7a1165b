"""Use case destroying a confirmed snapshot selection one snapshot at a time."""

from __future__ import annotations

from collections.abc import Collection, Sequence
from logging import Logger, getLogger

from ..domain.errors import DestroyError
from ..domain.models import DestroyOutcome, Snapshot
from .ports import SnapshotDestroyer


class DeletionExecutor:
    """Destroy each selected snapshot independently and report per-snapshot outcomes."""

    _destroyer: SnapshotDestroyer
    _logger: Logger

    def __init__(self, destroyer: SnapshotDestroyer, *, logger: Logger | None = None) -> None:
        self._destroyer = destroyer
        self._logger = logger or getLogger(__name__)

    def destroy(
        self,
        selection: Collection[str],
        *,
        order: Sequence[Snapshot] | None = None,
    ) -> list[DestroyOutcome]:
        """Destroy every snapshot in ``selection``.

        Args:
            selection: Full snapshot names to destroy.
            order: Optional snapshot listing used to destroy in chain order;
                names missing from it are attempted last, sorted by name.

        Returns:
            One outcome per requested snapshot. A failure never stops the
            remaining attempts; the surviving snapshot data is stale afterwards
            and must be listed again by the caller.
        """

        outcomes: list[DestroyOutcome] = []
        for name in self._ordered(selection, order):
            try:
                self._destroyer.destroy(name)
            except DestroyError as exc:
                self._logger.error(
                    "Failed to destroy %s: %s",
                    name,
                    exc.reason,
                    extra={
                        "snapshot_event": "snapshot.destroy.error",
                        "snapshot_name": name,
                        "error_message": exc.reason,
                    },
                )
                outcomes.append(DestroyOutcome.failed(name, exc.reason))
                continue

            self._logger.info(
                "Destroyed %s",
                name,
                extra={"snapshot_event": "snapshot.destroy.success", "snapshot_name": name},
            )
            outcomes.append(DestroyOutcome.deleted(name))
        return outcomes

    @staticmethod
    def _ordered(selection: Collection[str], order: Sequence[Snapshot] | None) -> list[str]:
        if order is None:
            return sorted(selection)
        listed = [snapshot.name for snapshot in order if snapshot.name in selection]
        seen = set(listed)
        return listed + sorted(name for name in selection if name not in seen)


__all__ = ["DeletionExecutor"]
