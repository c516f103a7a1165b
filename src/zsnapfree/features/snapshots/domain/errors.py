"""
Summary: Error taxonomy for snapshot listing, estimation, and destruction.
Why: Keep failure categories explicit so callers can pick the right severity.
"""

from __future__ import annotations


class SnapshotError(Exception):
    """Base class for failures raised by the snapshot feature."""


class QueryError(SnapshotError):
    """The external tool could not be queried (missing, denied, or failed)."""


class ParseError(QueryError):
    """The external tool produced output that does not match the contract."""

    def __init__(self, message: str, *, line_number: int | None = None, line: str | None = None) -> None:
        self.line_number = line_number
        self.line = line
        if line_number is not None:
            message = f"{message} (line {line_number}: {line!r})"
        super().__init__(message)


class DestroyError(SnapshotError):
    """A single snapshot could not be destroyed."""

    def __init__(self, name: str, reason: str) -> None:
        self.name = name
        self.reason = reason
        super().__init__(f"Failed to destroy {name}: {reason}")


__all__ = ["DestroyError", "ParseError", "QueryError", "SnapshotError"]
