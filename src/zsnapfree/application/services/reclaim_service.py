"""Application service wiring zfs adapters into the reclaim use cases."""

from __future__ import annotations

import shlex
from collections.abc import Collection, Sequence
from dataclasses import dataclass
from logging import Logger, getLogger
from typing import final

from zsnapfree.config.settings import Settings, resolve_zfs_binary
from zsnapfree.features.snapshots import (
    DeletionExecutor,
    DestroyOutcome,
    DryRunUnavailable,
    QueryError,
    ReclaimEngine,
    ReclaimReport,
    Selection,
    Snapshot,
)
from zsnapfree.features.snapshots.adapters import ZfsCommandGateway
from zsnapfree.features.snapshots.domain import (
    destroy_spec,
    group_by_dataset,
    resolve_names,
    snap_ranges,
)
from zsnapfree.features.snapshots.usecases import (
    ReclaimEstimator,
    SnapshotDestroyer,
    SnapshotLister,
)


@dataclass(slots=True, frozen=True)
class LoadedSnapshots:
    """Snapshot listing paired with the report for an initial selection."""

    snapshots: tuple[Snapshot, ...]
    report: ReclaimReport

    @property
    def selection(self) -> Selection:
        return self.report.selected


@final
class ReclaimService:
    """Application façade over listing, reclaim accounting, and deletion.

    Dry-run support is detected on the first successful listing and cached
    for the lifetime of the service.
    """

    _settings: Settings
    _lister: SnapshotLister
    _estimator: ReclaimEstimator | None
    _destroyer: SnapshotDestroyer
    _logger: Logger
    _capability: DryRunUnavailable | None
    _detected: bool
    _engine: ReclaimEngine

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        lister: SnapshotLister | None = None,
        estimator: ReclaimEstimator | None = None,
        destroyer: SnapshotDestroyer | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._settings = settings or Settings()
        self._logger = logger or getLogger(__name__)

        if lister is None:
            gateway = ZfsCommandGateway(
                binary=resolve_zfs_binary(self._settings.zfs_binary),
                target=self._settings.target,
                recursive=self._settings.recursive,
            )
            self._lister = gateway
            self._estimator = estimator or gateway
            self._destroyer = destroyer or gateway
        else:
            if destroyer is None:
                raise ValueError("destroyer must be provided together with lister")
            self._lister = lister
            self._estimator = estimator
            self._destroyer = destroyer

        self._capability = None
        self._detected = False
        self._engine = ReclaimEngine(None, logger=self._logger)

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def dry_run_unavailable(self) -> DryRunUnavailable | None:
        """Reason dry-run estimates are not used, or None when they are."""

        return self._capability

    def list_snapshots(self) -> tuple[Snapshot, ...]:
        """Query the current snapshot set; detects dry-run support on first use.

        Raises:
            QueryError: Listing failed.
            ParseError: Listing output was malformed.
        """
        snapshots = tuple(self._lister.list())
        self._logger.info(
            "Found %d snapshots",
            len(snapshots),
            extra={
                "snapshot_event": "snapshot.list.complete",
                "snapshot_count": len(snapshots),
                "dataset_count": len(group_by_dataset(snapshots)),
            },
        )
        if not self._detected and snapshots:
            self._detect_dry_run(snapshots)
        return snapshots

    def recompute(self, snapshots: Sequence[Snapshot], selection: Collection[str]) -> ReclaimReport:
        return self._engine.recompute(snapshots, selection)

    def load(self, requested: Collection[str] = ()) -> LoadedSnapshots:
        """List snapshots and compute the report for the ``requested`` names in one step.

        Requested names may be full ``dataset@snap`` names or unambiguous
        snapshot names; names matching nothing are logged as warnings, not raised.
        """

        snapshots = self.list_snapshots()
        selection, unresolved = resolve_names(snapshots, requested)
        for name in unresolved:
            self._logger.warning("No unique snapshot matches %r; ignoring it", name)
        return LoadedSnapshots(
            snapshots=snapshots,
            report=self.recompute(snapshots, selection),
        )

    def destroy(self, snapshots: Sequence[Snapshot], selection: Collection[str]) -> list[DestroyOutcome]:
        """Destroy ``selection`` snapshot by snapshot; the caller must list again afterwards."""

        executor = DeletionExecutor(self._destroyer, logger=self._logger)
        return executor.destroy(selection, order=snapshots)

    def equivalent_commands(self, snapshots: Sequence[Snapshot], selection: Collection[str]) -> list[str]:
        """Render the ``zfs destroy -nv`` command lines matching ``selection``, one per dataset."""

        commands: list[str] = []
        for dataset, chain in group_by_dataset(snapshots).items():
            ranges = snap_ranges(chain, selection)
            if not ranges:
                continue
            spec = destroy_spec(dataset, ranges)
            commands.append(shlex.join([self._settings.zfs_binary, "destroy", "-nv", spec]))
        return commands

    def _detect_dry_run(self, snapshots: Sequence[Snapshot]) -> None:
        self._detected = True

        if not self._settings.use_dry_run:
            self._capability = DryRunUnavailable("disabled on the command line")
        elif self._estimator is None:
            self._capability = DryRunUnavailable("no dry-run estimator configured")
        else:
            sample = snapshots[0]
            chain = group_by_dataset(snapshots)[sample.dataset]
            try:
                _ = self._estimator.estimate(sample.dataset, chain, {sample.name})
            except QueryError as exc:
                self._capability = DryRunUnavailable(str(exc))

        if self._capability is None:
            self._logger.debug(
                "Dry-run estimates available",
                extra={"snapshot_event": "snapshot.dryrun.available"},
            )
            self._engine = ReclaimEngine(self._estimator, logger=self._logger)
            return

        self._logger.info(
            "Dry-run estimates unavailable (%s); figures are summed snapshot sizes",
            self._capability.reason,
            extra={"snapshot_event": "snapshot.dryrun.unavailable"},
        )


__all__ = ["LoadedSnapshots", "ReclaimService"]
