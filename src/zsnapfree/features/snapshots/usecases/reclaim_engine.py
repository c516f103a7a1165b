"""
Summary: Compute total and marginal reclaimable space for a snapshot selection.
Why: Isolate the two-tier accounting (batch dry-run vs. summed ``used``) from I/O and UI.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from logging import Logger, getLogger

from ..domain.errors import QueryError
from ..domain.models import (
    MarginalReclaim,
    ReclaimReport,
    Selection,
    Snapshot,
    group_by_dataset,
)
from .ports import ReclaimEstimator


class ReclaimEngine:
    """Answer "how much would this selection free?" for a fixed snapshot set.

    With an estimator, every figure comes from the external tool's batch
    dry-run: the total for a selection ``S`` is the tool's answer for ``S``
    and the marginal for an unselected snapshot ``X`` is
    ``estimate(S ∪ {X}) - estimate(S)``, evaluated per dataset because chains
    of different datasets never share blocks.

    Without an estimator, the total is the sum of ``used`` over the selection
    and each marginal is the static ``used`` of the candidate. Both figures
    undercount data shared between adjacent selected snapshots, so every
    marginal in such a report is flagged approximate.

    The engine keeps no state between calls; ``recompute`` depends only on its
    arguments and on the estimator's answers.
    """

    _estimator: ReclaimEstimator | None
    _logger: Logger

    def __init__(
        self,
        estimator: ReclaimEstimator | None = None,
        *,
        logger: Logger | None = None,
    ) -> None:
        self._estimator = estimator
        self._logger = logger or getLogger(__name__)

    def recompute(self, snapshots: Sequence[Snapshot], selection: Collection[str]) -> ReclaimReport:
        """Build the reclaim report for ``selection`` over ``snapshots``.

        Names in ``selection`` that are not part of ``snapshots`` are ignored.
        A failing estimator never fails the recomputation: the report falls
        back to the approximation and is marked degraded.
        """

        known = {snapshot.name for snapshot in snapshots}
        effective: Selection = frozenset(name for name in selection if name in known)

        if self._estimator is None:
            return self._approximate(snapshots, effective, degraded=False)

        try:
            return self._exact(self._estimator, snapshots, effective)
        except QueryError as exc:
            self._logger.warning(
                "Dry-run estimate failed, falling back to summed snapshot sizes: %s",
                exc,
                extra={
                    "snapshot_event": "snapshot.reclaim.degraded",
                    "error_message": str(exc),
                },
            )
            return self._approximate(snapshots, effective, degraded=True)

    def _exact(
        self,
        estimator: ReclaimEstimator,
        snapshots: Sequence[Snapshot],
        selection: Selection,
    ) -> ReclaimReport:
        total = 0
        marginals: dict[str, MarginalReclaim] = {}

        for dataset, chain in group_by_dataset(snapshots).items():
            chosen = frozenset(snapshot.name for snapshot in chain if snapshot.name in selection)
            base = estimator.estimate(dataset, chain, chosen) if chosen else 0
            total += base

            for candidate in chain:
                if candidate.name in chosen:
                    continue
                combined = estimator.estimate(dataset, chain, chosen | {candidate.name})
                if combined < base:
                    self._logger.debug(
                        "Dry-run for %s reported less than the current selection (%d < %d)",
                        candidate.name,
                        combined,
                        base,
                    )
                marginals[candidate.name] = MarginalReclaim(
                    bytes=max(combined - base, 0),
                    approximate=False,
                )

        return ReclaimReport(
            total=total,
            selected=selection,
            marginals=marginals,
            exact=True,
        )

    @staticmethod
    def _approximate(
        snapshots: Sequence[Snapshot],
        selection: Selection,
        *,
        degraded: bool,
    ) -> ReclaimReport:
        total = sum(snapshot.used for snapshot in snapshots if snapshot.name in selection)
        marginals = {
            snapshot.name: MarginalReclaim(bytes=snapshot.used, approximate=True)
            for snapshot in snapshots
            if snapshot.name not in selection
        }
        return ReclaimReport(
            total=total,
            selected=selection,
            marginals=marginals,
            exact=False,
            degraded=degraded,
        )


__all__ = ["ReclaimEngine"]
