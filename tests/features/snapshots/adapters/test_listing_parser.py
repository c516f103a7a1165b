"""Tests for strict parsing of ``zfs list`` and ``zfs destroy -n -p`` output."""

from __future__ import annotations

import pytest

from zsnapfree.features.snapshots import ParseError
from zsnapfree.features.snapshots.adapters import parse_dry_run, parse_snapshot_listing

LISTING = (
    "rpool/ROOT/ubuntu@autozsys_2024-05-01\t1048576\t4294967296\t1714521600\n"
    "rpool/ROOT/ubuntu@autozsys_2024-05-02\t2097152\t4294967296\t1714608000\n"
    "rpool/ROOT/ubuntu/var@autozsys_2024-05-01\t512\t65536\t1714521600\n"
)


def test_parse_listing_reads_all_fields() -> None:
    snapshots = parse_snapshot_listing(LISTING, target="rpool/ROOT/ubuntu", recursive=True)

    assert [s.name for s in snapshots] == [
        "rpool/ROOT/ubuntu@autozsys_2024-05-01",
        "rpool/ROOT/ubuntu@autozsys_2024-05-02",
        "rpool/ROOT/ubuntu/var@autozsys_2024-05-01",
    ]
    first = snapshots[0]
    assert first.used == 1048576
    assert first.referenced == 4294967296
    assert first.creation == 1714521600


def test_parse_listing_ignores_blank_lines() -> None:
    assert parse_snapshot_listing("\n\n") == []


def test_parse_listing_groups_datasets_and_sorts_by_creation() -> None:
    stdout = (
        "a@late\t1\t1\t200\n"
        "b@only\t1\t1\t50\n"
        "a@early\t1\t1\t100\n"
        "a@tie\t1\t1\t200\n"
    )

    snapshots = parse_snapshot_listing(stdout)

    assert [s.name for s in snapshots] == ["a@early", "a@late", "a@tie", "b@only"]


def test_parse_listing_rejects_non_numeric_used() -> None:
    stdout = "pool/fs@a\t1\t1\t1\npool/fs@b\t1.5M\t1\t1\n"

    with pytest.raises(ParseError) as excinfo:
        _ = parse_snapshot_listing(stdout)

    assert excinfo.value.line_number == 2
    assert "used" in str(excinfo.value)


def test_parse_listing_rejects_wrong_field_count() -> None:
    with pytest.raises(ParseError, match="Expected 4 tab-separated fields"):
        _ = parse_snapshot_listing("pool/fs@a\t1\t1\n")


def test_parse_listing_rejects_snapshot_of_other_dataset() -> None:
    stdout = "pool/other@a\t1\t1\t1\n"

    with pytest.raises(ParseError, match="does not belong"):
        _ = parse_snapshot_listing(stdout, target="pool/fs")


def test_parse_listing_rejects_descendants_without_recursion() -> None:
    stdout = "pool/fs/child@a\t1\t1\t1\n"

    with pytest.raises(ParseError):
        _ = parse_snapshot_listing(stdout, target="pool/fs", recursive=False)

    assert len(parse_snapshot_listing(stdout, target="pool/fs", recursive=True)) == 1


def test_parse_listing_rejects_sibling_with_shared_prefix() -> None:
    with pytest.raises(ParseError):
        _ = parse_snapshot_listing("pool/fs2@a\t1\t1\t1\n", target="pool/fs", recursive=True)


@pytest.mark.parametrize("name", ["pool/fs", "pool/fs@", "@snap", "pool/fs@a@b"])
def test_parse_listing_rejects_malformed_names(name: str) -> None:
    with pytest.raises(ParseError, match="Invalid snapshot name"):
        _ = parse_snapshot_listing(f"{name}\t1\t1\t1\n")


def test_parse_listing_rejects_duplicates() -> None:
    with pytest.raises(ParseError, match="Duplicate"):
        _ = parse_snapshot_listing("p@a\t1\t1\t1\np@a\t1\t1\t1\n")


def test_parse_dry_run_reads_reclaim_after_destroy_lines() -> None:
    stdout = "destroy\tpool/fs@a\ndestroy\tpool/fs@b\nreclaim\t3072\n"

    assert parse_dry_run(stdout) == 3072


def test_parse_dry_run_requires_reclaim_line() -> None:
    with pytest.raises(ParseError, match="missing the 'reclaim' line"):
        _ = parse_dry_run("destroy\tpool/fs@a\n")


def test_parse_dry_run_rejects_non_integer_reclaim() -> None:
    with pytest.raises(ParseError):
        _ = parse_dry_run("reclaim\t3K\n")
