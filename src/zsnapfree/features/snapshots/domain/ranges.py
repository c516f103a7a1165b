"""
Summary: Collapse selected snapshots into contiguous ranges for zfs destroy specs.
Why: zfs accepts ``first%last`` ranges, keeping dry-run commands short for long chains.
"""

from __future__ import annotations

from collections.abc import Collection, Sequence
from dataclasses import dataclass
from itertools import groupby

from .models import Snapshot


@dataclass(slots=True, frozen=True)
class SnapRange:
    """A single snapshot or an inclusive run of consecutive snapshots."""

    first: str
    last: str | None = None

    def render(self) -> str:
        if self.last is None:
            return self.first
        return f"{self.first}%{self.last}"


def snap_ranges(chain: Sequence[Snapshot], selection: Collection[str]) -> list[SnapRange]:
    """Group consecutive selected snapshots of one dataset chain.

    Args:
        chain: Snapshots of a single dataset, ordered by creation.
        selection: Full snapshot names marked for deletion.

    Returns:
        Ranges in chain order; runs of length one become single entries.
    """
    ranges: list[SnapRange] = []
    for marked, run in groupby(chain, key=lambda snapshot: snapshot.name in selection):
        if not marked:
            continue
        members = list(run)
        if len(members) == 1:
            ranges.append(SnapRange(members[0].short_name))
        else:
            ranges.append(SnapRange(members[0].short_name, members[-1].short_name))
    return ranges


def destroy_spec(dataset: str, ranges: Sequence[SnapRange]) -> str:
    """Render ``dataset@a,b%d`` as understood by ``zfs destroy``."""

    if not ranges:
        raise ValueError(f"No snapshots selected for {dataset}")
    return f"{dataset}@" + ",".join(snap_range.render() for snap_range in ranges)


__all__ = ["SnapRange", "destroy_spec", "snap_ranges"]
