"""
Summary: Strict parsers for ``zfs list`` and ``zfs destroy -n -p`` output.
Why: A silently defaulted size would corrupt reclaim figures, so every deviation raises.
"""

from __future__ import annotations

import re
from typing import Final

from ..domain.errors import ParseError
from ..domain.models import Snapshot

LIST_FIELD_COUNT: Final[int] = 4
_INTEGER: Final[re.Pattern[str]] = re.compile(r"[0-9]+")
_RECLAIM_PREFIX: Final[str] = "reclaim\t"


def _parse_int(value: str, field: str, line_number: int, line: str) -> int:
    if not _INTEGER.fullmatch(value):
        raise ParseError(f"Non-numeric {field} field {value!r}", line_number=line_number, line=line)
    return int(value)


def _belongs_to(dataset: str, target: str, *, recursive: bool) -> bool:
    if dataset == target:
        return True
    return recursive and dataset.startswith(f"{target}/")


def parse_snapshot_listing(
    stdout: str,
    *,
    target: str | None = None,
    recursive: bool = False,
) -> list[Snapshot]:
    """Parse ``zfs list -H -p -o name,used,referenced,creation`` output.

    Args:
        stdout: Raw tool output, one tab-delimited snapshot per line.
        target: Dataset the listing was restricted to, if any.
        recursive: Whether descendants of ``target`` are expected.

    Returns:
        Snapshots grouped by dataset in first-seen order and sorted by
        creation within each dataset; ties keep the tool's order.

    Raises:
        ParseError: Any line deviates from the listing contract. Nothing is
            returned for partially valid output.
    """
    parsed: list[Snapshot] = []
    seen: set[str] = set()

    for line_number, raw_line in enumerate(stdout.splitlines(), start=1):
        line = raw_line.rstrip("\r")
        if not line.strip():
            continue

        fields = line.split("\t")
        if len(fields) != LIST_FIELD_COUNT:
            raise ParseError(
                f"Expected {LIST_FIELD_COUNT} tab-separated fields, got {len(fields)}",
                line_number=line_number,
                line=line,
            )

        name, used, referenced, creation = fields
        dataset, separator, short_name = name.partition("@")
        if not separator or not dataset or not short_name or "@" in short_name:
            raise ParseError(f"Invalid snapshot name {name!r}", line_number=line_number, line=line)
        if target is not None and not _belongs_to(dataset, target, recursive=recursive):
            raise ParseError(
                f"Snapshot {name!r} does not belong to {target!r}",
                line_number=line_number,
                line=line,
            )
        if name in seen:
            raise ParseError(f"Duplicate snapshot {name!r}", line_number=line_number, line=line)
        seen.add(name)

        parsed.append(
            Snapshot(
                name=name,
                used=_parse_int(used, "used", line_number, line),
                referenced=_parse_int(referenced, "referenced", line_number, line),
                creation=_parse_int(creation, "creation", line_number, line),
            )
        )

    dataset_order: dict[str, int] = {}
    for snapshot in parsed:
        _ = dataset_order.setdefault(snapshot.dataset, len(dataset_order))

    # sorted() is stable, so equal creation times keep createtxg order
    return sorted(parsed, key=lambda snapshot: (dataset_order[snapshot.dataset], snapshot.creation))


def parse_dry_run(stdout: str) -> int:
    """Return the reclaim bytes from ``zfs destroy -n -p`` output.

    The ``destroy`` lines listing each affected snapshot are skipped.

    Raises:
        ParseError: The ``reclaim`` line is missing or not an integer.
    """
    for line_number, raw_line in enumerate(stdout.splitlines(), start=1):
        line = raw_line.rstrip("\r")
        if line.startswith(_RECLAIM_PREFIX):
            value = line.removeprefix(_RECLAIM_PREFIX).strip()
            return _parse_int(value, "reclaim", line_number, line)

    raise ParseError(f"Dry-run output is missing the 'reclaim' line: {stdout.strip()!r}")


__all__ = ["LIST_FIELD_COUNT", "parse_dry_run", "parse_snapshot_listing"]
