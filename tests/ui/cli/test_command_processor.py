"""Tests for CLI exit codes."""

from __future__ import annotations

import pytest
from pytest_mock import MockerFixture

from zsnapfree.ui.cli import CommandProcessor, main


@pytest.fixture(autouse=True)
def quiet_logger_setup(mocker: MockerFixture) -> None:
    _ = mocker.patch("zsnapfree.ui.cli.args.parser.setup_logger")


def test_summary_success_returns_normally(mocker: MockerFixture) -> None:
    summary_cls = mocker.patch("zsnapfree.ui.cli.cli.SummaryCommand")
    summary_cls.return_value.execute.return_value = 0

    CommandProcessor.process_command(["--summary", "tank"])

    summary_cls.assert_called_once()


def test_unavailable_tool_exits_1(mocker: MockerFixture) -> None:
    """A zfs binary that cannot run yields exit status 1 and no report."""

    _ = mocker.patch("zsnapfree.config.settings.shutil.which", return_value=None)
    _ = mocker.patch(
        "zsnapfree.platform.process.subprocess.run",
        side_effect=FileNotFoundError("no such file: zfs"),
    )
    show_report = mocker.patch("zsnapfree.ui.display.report.ReportDisplay.show_report")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["--summary", "tank"])

    assert excinfo.value.code == 1
    show_report.assert_not_called()


def test_interactive_is_default(mocker: MockerFixture) -> None:
    interactive_cls = mocker.patch("zsnapfree.ui.cli.cli.InteractiveCommand")
    interactive_cls.return_value.execute.return_value = 0

    CommandProcessor.process_command([])

    interactive_cls.assert_called_once()


def test_keyboard_interrupt_exits_130(mocker: MockerFixture) -> None:
    interactive_cls = mocker.patch("zsnapfree.ui.cli.cli.InteractiveCommand")
    interactive_cls.return_value.execute.side_effect = KeyboardInterrupt

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command([])

    assert excinfo.value.code == 130


def test_unexpected_error_exits_1(mocker: MockerFixture) -> None:
    summary_cls = mocker.patch("zsnapfree.ui.cli.cli.SummaryCommand")
    summary_cls.return_value.execute.side_effect = RuntimeError("boom")

    with pytest.raises(SystemExit) as excinfo:
        CommandProcessor.process_command(["--summary"])

    assert excinfo.value.code == 1


def test_main_returns_zero(mocker: MockerFixture) -> None:
    process = mocker.patch("zsnapfree.ui.cli.cli.CommandProcessor.process_command")

    assert main() == 0
    process.assert_called_once_with()
