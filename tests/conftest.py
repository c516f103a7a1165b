"""Shared fakes standing in for the zfs command line tool."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping

import pytest

from zsnapfree.features.snapshots import DestroyError, QueryError, Snapshot


def snap(name: str, used: int = 0, referenced: int = 0, creation: int = 0) -> Snapshot:
    """Build a snapshot with sensible defaults."""

    return Snapshot(name=name, used=used, referenced=referenced, creation=creation)


class FakeZfs:
    """In-memory zfs pool implementing the lister, estimator, and destroyer ports.

    ``estimates`` maps a frozenset of snapshot names to the dry-run answer
    for destroying exactly that set; sets without an entry fall back to the
    sum of ``used``.
    """

    def __init__(
        self,
        snapshots: Iterable[Snapshot],
        *,
        estimates: Mapping[frozenset[str], int] | None = None,
        failing_destroys: Mapping[str, str] | None = None,
    ) -> None:
        self.snapshots: list[Snapshot] = list(snapshots)
        self.estimates = dict(estimates or {})
        self.failing_destroys = dict(failing_destroys or {})
        self.list_error: QueryError | None = None
        self.estimate_error: QueryError | None = None
        self.list_calls = 0
        self.estimate_calls: list[frozenset[str]] = []
        self.destroyed: list[str] = []

    def list(self) -> list[Snapshot]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.snapshots)

    def estimate(self, dataset: str, chain: list[Snapshot], names: Collection[str]) -> int:
        key = frozenset(names)
        self.estimate_calls.append(key)
        if self.estimate_error is not None:
            raise self.estimate_error
        assert all(name.startswith(f"{dataset}@") for name in key)
        if key in self.estimates:
            return self.estimates[key]
        return sum(snapshot.used for snapshot in chain if snapshot.name in key)

    def destroy(self, name: str) -> None:
        if name in self.failing_destroys:
            raise DestroyError(name, self.failing_destroys[name])
        self.destroyed.append(name)
        self.snapshots = [snapshot for snapshot in self.snapshots if snapshot.name != name]


@pytest.fixture
def three_snapshots() -> list[Snapshot]:
    """One dataset with ``used`` of 10, 20 and 30 bytes, oldest first."""

    return [
        snap("tank/data@snap1", used=10, referenced=100, creation=1_700_000_000),
        snap("tank/data@snap2", used=20, referenced=110, creation=1_700_000_100),
        snap("tank/data@snap3", used=30, referenced=120, creation=1_700_000_200),
    ]


@pytest.fixture
def fake_zfs(three_snapshots: list[Snapshot]) -> FakeZfs:
    return FakeZfs(three_snapshots)
