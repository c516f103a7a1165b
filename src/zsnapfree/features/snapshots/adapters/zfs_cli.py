"""zfs command-line adapter implementing the snapshot ports."""

from __future__ import annotations

from collections.abc import Callable, Collection, Sequence
from logging import Logger, getLogger

from zsnapfree.config.settings import DEFAULT_ZFS_BINARY, LIST_PROPERTIES
from zsnapfree.platform.process import CommandResult, run_command

from ..domain.errors import DestroyError, QueryError
from ..domain.models import Snapshot
from ..domain.ranges import destroy_spec, snap_ranges
from ..usecases.ports import ReclaimEstimator, SnapshotDestroyer, SnapshotLister
from .parsing import parse_dry_run, parse_snapshot_listing

CommandRunner = Callable[[Sequence[str]], CommandResult]


class ZfsCommandGateway(SnapshotLister, ReclaimEstimator, SnapshotDestroyer):
    """Drive ``zfs list`` / ``zfs destroy`` through a command runner."""

    _binary: str
    _target: str | None
    _recursive: bool
    _runner: CommandRunner
    _logger: Logger

    def __init__(
        self,
        *,
        binary: str = DEFAULT_ZFS_BINARY,
        target: str | None = None,
        recursive: bool = False,
        runner: CommandRunner | None = None,
        logger: Logger | None = None,
    ) -> None:
        self._binary = binary
        self._target = target
        self._recursive = recursive
        self._runner = runner or run_command
        self._logger = logger or getLogger(__name__)

    def list_command(self) -> list[str]:
        argv = [
            self._binary,
            "list",
            "-H",
            "-p",
            "-t",
            "snapshot",
            "-o",
            ",".join(LIST_PROPERTIES),
            "-s",
            "createtxg",
        ]
        if self._target is not None:
            argv.extend(["-r"] if self._recursive else ["-d", "1"])
            argv.append(self._target)
        return argv

    def list(self) -> list[Snapshot]:
        result = self._run(self.list_command())
        if not result.ok:
            scope = self._target or "all datasets"
            raise QueryError(f"Failed to fetch snapshots for {scope}: {result.error_text()}")

        snapshots = parse_snapshot_listing(
            result.stdout,
            target=self._target,
            recursive=self._recursive,
        )
        self._logger.debug("Parsed %d snapshots from %s", len(snapshots), self._binary)
        return snapshots

    def estimate(self, dataset: str, chain: list[Snapshot], names: Collection[str]) -> int:
        """Ask zfs what destroying ``names`` of ``dataset`` together would free."""

        spec = destroy_spec(dataset, snap_ranges(chain, names))
        result = self._run([self._binary, "destroy", "-n", "-p", spec])
        if not result.ok:
            raise QueryError(f"Failed to dry-run destroy {spec}: {result.error_text()}")
        return parse_dry_run(result.stdout)

    def destroy(self, name: str) -> None:
        try:
            result = self._runner([self._binary, "destroy", name])
        except OSError as exc:
            raise DestroyError(name, str(exc)) from exc
        if not result.ok:
            raise DestroyError(name, result.error_text())

    def _run(self, argv: Sequence[str]) -> CommandResult:
        try:
            return self._runner(argv)
        except OSError as exc:
            raise QueryError(f"Failed to run {argv[0]}: {exc}") from exc


__all__ = ["CommandRunner", "ZfsCommandGateway"]
