"""Tests for total and marginal reclaim accounting."""

from __future__ import annotations

from itertools import combinations

import pytest

from conftest import FakeZfs, snap

from zsnapfree.features.snapshots import MarginalReclaim, QueryError, ReclaimEngine, Snapshot


def _all_subsets(names: list[str]) -> list[frozenset[str]]:
    return [frozenset(combo) for size in range(len(names) + 1) for combo in combinations(names, size)]


@pytest.fixture
def shared_block_zfs(three_snapshots: list[Snapshot]) -> FakeZfs:
    """Pool where snap1 and snap2 share 5 bytes freed only when both go."""

    s1, s2, s3 = (s.name for s in three_snapshots)
    return FakeZfs(
        three_snapshots,
        estimates={
            frozenset({s1}): 10,
            frozenset({s2}): 20,
            frozenset({s3}): 30,
            frozenset({s1, s2}): 35,
            frozenset({s2, s3}): 50,
            frozenset({s1, s3}): 40,
            frozenset({s1, s2, s3}): 65,
        },
    )


@pytest.mark.parametrize("with_estimator", [False, True])
def test_empty_selection_reclaims_nothing(
    three_snapshots: list[Snapshot],
    fake_zfs: FakeZfs,
    with_estimator: bool,
) -> None:
    engine = ReclaimEngine(fake_zfs if with_estimator else None)

    report = engine.recompute(three_snapshots, frozenset())

    assert report.total == 0
    assert report.selected == frozenset()


def test_approximation_without_dry_run(three_snapshots: list[Snapshot]) -> None:
    """Selecting snap2 without dry-run support sums ``used`` and flags marginals."""

    engine = ReclaimEngine()

    report = engine.recompute(three_snapshots, {"tank/data@snap2"})

    assert report.total == 20
    assert not report.exact
    assert not report.degraded
    assert report.marginal_for("tank/data@snap1") == MarginalReclaim(bytes=10, approximate=True)
    assert report.marginal_for("tank/data@snap3") == MarginalReclaim(bytes=30, approximate=True)
    assert report.marginal_for("tank/data@snap2") is None


def test_dry_run_marginal_accounts_for_shared_blocks(three_snapshots: list[Snapshot]) -> None:
    """With snap2 selected, adding snap1 frees 25 - 20 = 5 bytes, not its ``used`` of 10."""

    s1, s2, _ = (s.name for s in three_snapshots)
    zfs = FakeZfs(three_snapshots, estimates={frozenset({s2}): 20, frozenset({s1, s2}): 25})
    engine = ReclaimEngine(zfs)

    report = engine.recompute(three_snapshots, {s2})

    assert report.exact
    assert report.total == 20
    assert report.marginal_for(s1) == MarginalReclaim(bytes=5, approximate=False)

    after_toggle = engine.recompute(three_snapshots, {s1, s2})
    assert after_toggle.total == 25


def test_dry_run_total_is_reported_verbatim(
    three_snapshots: list[Snapshot],
    shared_block_zfs: FakeZfs,
) -> None:
    engine = ReclaimEngine(shared_block_zfs)
    names = [s.name for s in three_snapshots]

    for subset in _all_subsets(names):
        expected = shared_block_zfs.estimates.get(subset, 0)
        assert engine.recompute(three_snapshots, subset).total == expected


@pytest.mark.parametrize("with_estimator", [False, True])
def test_total_is_monotonic(
    three_snapshots: list[Snapshot],
    shared_block_zfs: FakeZfs,
    with_estimator: bool,
) -> None:
    engine = ReclaimEngine(shared_block_zfs if with_estimator else None)
    subsets = _all_subsets([s.name for s in three_snapshots])
    totals = {subset: engine.recompute(three_snapshots, subset).total for subset in subsets}

    for smaller in subsets:
        for larger in subsets:
            if smaller <= larger:
                assert totals[larger] >= totals[smaller]


def test_recompute_is_idempotent(three_snapshots: list[Snapshot], shared_block_zfs: FakeZfs) -> None:
    engine = ReclaimEngine(shared_block_zfs)
    selection = {"tank/data@snap1", "tank/data@snap3"}

    assert engine.recompute(three_snapshots, selection) == engine.recompute(three_snapshots, selection)


def test_negative_marginals_are_clamped(three_snapshots: list[Snapshot]) -> None:
    s1, s2, _ = (s.name for s in three_snapshots)
    zfs = FakeZfs(three_snapshots, estimates={frozenset({s1}): 50, frozenset({s1, s2}): 40})

    report = ReclaimEngine(zfs).recompute(three_snapshots, {s1})

    assert report.marginal_for(s2) == MarginalReclaim(bytes=0, approximate=False)


def test_estimates_are_evaluated_per_dataset() -> None:
    snapshots = [
        snap("tank/a@1", used=1),
        snap("tank/a@2", used=2),
        snap("tank/b@1", used=4),
    ]
    zfs = FakeZfs(snapshots)

    report = ReclaimEngine(zfs).recompute(snapshots, {"tank/a@1", "tank/b@1"})

    assert report.total == 5
    assert report.marginal_for("tank/a@2") == MarginalReclaim(bytes=2, approximate=False)
    # FakeZfs asserts every estimate stays inside one dataset.
    assert all(len({name.split("@")[0] for name in call}) == 1 for call in zfs.estimate_calls)


def test_unknown_names_are_ignored(three_snapshots: list[Snapshot]) -> None:
    report = ReclaimEngine().recompute(three_snapshots, {"tank/data@snap1", "tank/gone@x"})

    assert report.selected == frozenset({"tank/data@snap1"})
    assert report.total == 10


def test_failing_estimator_degrades_to_approximation(
    three_snapshots: list[Snapshot],
    fake_zfs: FakeZfs,
) -> None:
    fake_zfs.estimate_error = QueryError("permission denied")
    engine = ReclaimEngine(fake_zfs)

    report = engine.recompute(three_snapshots, {"tank/data@snap2"})

    assert report.degraded
    assert not report.exact
    assert report.total == 20
    assert report.marginal_for("tank/data@snap1") == MarginalReclaim(bytes=10, approximate=True)
