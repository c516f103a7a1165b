"""Adapters connecting the snapshot use cases to the zfs command-line tool."""

from .parsing import parse_dry_run, parse_snapshot_listing
from .zfs_cli import ZfsCommandGateway

__all__ = ["ZfsCommandGateway", "parse_dry_run", "parse_snapshot_listing"]
