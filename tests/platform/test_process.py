"""Tests for the subprocess wrapper."""

from pytest_mock import MockerFixture

from zsnapfree.platform.process import CommandResult, run_command


def test_run_command_captures_output(mocker: MockerFixture) -> None:
    completed = mocker.Mock(returncode=2, stdout="", stderr="cannot open 'x'\n")
    _ = mocker.patch("zsnapfree.platform.process.subprocess.run", return_value=completed)

    result = run_command(["zfs", "list", "x"])

    assert result.argv == ("zfs", "list", "x")
    assert not result.ok
    assert result.error_text() == "cannot open 'x'"


def test_error_text_falls_back_to_exit_status() -> None:
    result = CommandResult(argv=("zfs",), returncode=3, stdout="", stderr="  ")

    assert result.error_text() == "exit status 3"
    assert result.command_line == "zfs"
