"""Tests for logger bootstrap and the zfs command trail in the log file."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from pytest_mock import MockerFixture

from zsnapfree.platform.logging import SnapshotRichHandler, console_for, setup_logger
from zsnapfree.platform.process import run_command


@pytest.fixture
def restore_logger() -> Iterator[None]:
    yield
    _ = setup_logger()


@pytest.mark.usefixtures("restore_logger")
def test_log_file_records_zfs_command_lines(tmp_path: Path, mocker: MockerFixture) -> None:
    log_file = tmp_path / "logs" / "zsnapfree.log"
    logger = setup_logger(log_file=log_file, console_level=logging.ERROR)
    completed = mocker.Mock(returncode=1, stdout="", stderr="permission denied\n")
    _ = mocker.patch("zsnapfree.platform.process.subprocess.run", return_value=completed)

    _ = run_command(["zfs", "destroy", "-n", "-p", "tank/data@snap1"])
    for handler in logger.handlers:
        handler.flush()

    contents = log_file.read_text(encoding="utf-8")
    assert "DEBUG" in contents
    assert "[MainThread]" in contents
    assert "Running command: zfs destroy -n -p tank/data@snap1" in contents
    assert "Command failed (1): permission denied" in contents


@pytest.mark.usefixtures("restore_logger")
def test_setup_replaces_handlers_and_exposes_console() -> None:
    logger = setup_logger(console_level=logging.WARNING)
    logger = setup_logger(console_level=logging.WARNING)

    assert len(logger.handlers) == 1
    handler = logger.handlers[0]
    assert isinstance(handler, SnapshotRichHandler)
    assert handler.level == logging.WARNING
    assert console_for(logger) is handler.console
    assert console_for(logging.getLogger("zsnapfree.unconfigured")) is None
