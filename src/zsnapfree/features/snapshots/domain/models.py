"""Data structures describing snapshots, selections, and reclaim reports."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum

Selection = frozenset[str]

EMPTY_SELECTION: Selection = frozenset()


@dataclass(slots=True, frozen=True)
class Snapshot:
    """A point-in-time capture of a dataset as reported by the zfs tool."""

    name: str
    used: int
    referenced: int
    creation: int

    @property
    def dataset(self) -> str:
        return self.name.split("@", 1)[0]

    @property
    def short_name(self) -> str:
        return self.name.split("@", 1)[1]


@dataclass(slots=True, frozen=True)
class MarginalReclaim:
    """Additional bytes freed if one more snapshot joins the selection."""

    bytes: int
    approximate: bool


@dataclass(slots=True, frozen=True)
class ReclaimReport:
    """Outcome of recomputing reclaimable space for a selection.

    ``exact`` means the total came from the dry-run primitive. ``degraded``
    means the dry-run primitive was requested but failed, so every figure in
    the report falls back to the static ``used`` approximation.
    """

    total: int
    selected: Selection
    marginals: Mapping[str, MarginalReclaim] = field(default_factory=dict)
    exact: bool = False
    degraded: bool = False

    @classmethod
    def empty(cls) -> "ReclaimReport":
        return cls(total=0, selected=EMPTY_SELECTION)

    @property
    def approximate(self) -> bool:
        return not self.exact

    def marginal_for(self, name: str) -> MarginalReclaim | None:
        return self.marginals.get(name)


class DestroyStatus(str, Enum):
    """Per-snapshot result of a destroy attempt."""

    DELETED = "deleted"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class DestroyOutcome:
    """Capture what happened to one snapshot during deletion."""

    name: str
    status: DestroyStatus
    reason: str | None = None

    @classmethod
    def deleted(cls, name: str) -> "DestroyOutcome":
        return cls(name=name, status=DestroyStatus.DELETED)

    @classmethod
    def failed(cls, name: str, reason: str) -> "DestroyOutcome":
        return cls(name=name, status=DestroyStatus.FAILED, reason=reason)

    @property
    def succeeded(self) -> bool:
        return self.status is DestroyStatus.DELETED


@dataclass(slots=True, frozen=True)
class DryRunUnavailable:
    """Capability-detection result when batch dry-run estimates cannot be used."""

    reason: str


def toggle_selection(selection: Selection, name: str) -> Selection:
    """Return ``selection`` with ``name`` flipped in or out."""

    if name in selection:
        return selection - {name}
    return selection | {name}


def resolve_names(snapshots: Iterable[Snapshot], requested: Iterable[str]) -> tuple[Selection, list[str]]:
    """Match requested names against the listing.

    Full ``dataset@snap`` names match exactly; bare snapshot names match when
    exactly one listed snapshot carries them.

    Returns:
        The matched selection and the requested names that matched nothing
        or matched ambiguously.
    """
    listed = list(snapshots)
    full_names = {snapshot.name for snapshot in listed}
    by_short: dict[str, list[str]] = {}
    for snapshot in listed:
        by_short.setdefault(snapshot.short_name, []).append(snapshot.name)

    matched: set[str] = set()
    unresolved: list[str] = []
    for name in requested:
        if name in full_names:
            matched.add(name)
            continue
        candidates = by_short.get(name.removeprefix("@"), [])
        if len(candidates) == 1:
            matched.add(candidates[0])
        else:
            unresolved.append(name)
    return frozenset(matched), unresolved


def group_by_dataset(snapshots: Iterable[Snapshot]) -> dict[str, list[Snapshot]]:
    """Split snapshots into per-dataset chains, preserving first-seen order."""

    chains: dict[str, list[Snapshot]] = {}
    for snapshot in snapshots:
        chains.setdefault(snapshot.dataset, []).append(snapshot)
    return chains


__all__ = [
    "DestroyOutcome",
    "DestroyStatus",
    "DryRunUnavailable",
    "EMPTY_SELECTION",
    "MarginalReclaim",
    "ReclaimReport",
    "Selection",
    "Snapshot",
    "group_by_dataset",
    "resolve_names",
    "toggle_selection",
]
