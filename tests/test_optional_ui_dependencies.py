"""Regression tests for the optional Rich dependency.

Every command must keep working when Rich is missing: errors fall back
to plain ``Error:`` lines on stderr and logging to a stream handler.
"""

from __future__ import annotations

import logging
import sys
from unittest.mock import MagicMock, patch

import pytest

from cargo_dub.cli import exit_codes
from cargo_dub.cli.app import cli, main
from cargo_dub.cli.console import configure_logging, console
from cargo_dub.core.models import ResolvedExecutable


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)


def test_help_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_console_prints_plain_fallback(
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    console.print("[bold]markup[/bold]", plain="markup")
    assert capsys.readouterr().err == "markup\n"


def test_verbose_logging_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    configure_logging(verbose=True)

    logger = logging.getLogger("cargo_dub")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 1
    assert type(logger.handlers[0]) is logging.StreamHandler


def test_quiet_logging_by_default() -> None:
    configure_logging()
    assert logging.getLogger("cargo_dub").level == logging.WARNING


@patch(
    "cargo_dub.infra.process_runner.subprocess.Popen",
    side_effect=PermissionError(13, "Permission denied"),
)
@patch(
    "cargo_dub.infra.dub_locator.resolve_dub",
    return_value=ResolvedExecutable(path="dub", candidates=("dub",)),
)
def test_error_line_without_rich(
    _mock_resolve: MagicMock,
    _mock_run: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)
    monkeypatch.setattr(sys, "argv", ["cargo-dub", "build"])

    with pytest.raises(SystemExit) as exc_info:
        cli()

    assert exc_info.value.code == exit_codes.GENERAL_ERROR
    assert capsys.readouterr().err == "Error: Permission denied when executing dub\n"


@patch("cargo_dub.infra.process_runner.subprocess.Popen")
@patch(
    "cargo_dub.infra.dub_locator.resolve_dub",
    return_value=ResolvedExecutable(path="dub", candidates=("dub",)),
)
def test_dispatch_works_without_rich(
    _mock_resolve: MagicMock,
    mock_run: MagicMock,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    _hide_rich(monkeypatch)
    mock_run.return_value.wait.return_value = 0
    assert main(["-v", "build"]) == exit_codes.SUCCESS
