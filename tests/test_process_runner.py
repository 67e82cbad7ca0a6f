"""Tests for the process dispatcher (infra/process_runner.py).

All tests mock :class:`subprocess.Popen` — no child process is started.

Coverage:
* Exit code passthrough, including signal termination.
* Inherited standard streams.
* Ctrl+C keeps waiting for the child instead of killing it.
* OS error classification table.
"""

from __future__ import annotations

import errno
from unittest.mock import MagicMock, patch

import pytest

from cargo_dub.core.models import ToolInvocation
from cargo_dub.exceptions import StartFailureError, StartFailureKind
from cargo_dub.infra.process_runner import (
    SubprocessRunner,
    classify_start_failure,
    exit_code_from_returncode,
)

_INVOCATION = ToolInvocation(tokens=("build", "--force"))


class TestExitCodeFromReturncode:
    @pytest.mark.parametrize("code", [0, 1, 2, 42, 255])
    def test_non_negative_passthrough(self, code: int) -> None:
        assert exit_code_from_returncode(code) == code

    def test_signal_termination_defaults_to_one(self) -> None:
        assert exit_code_from_returncode(-9) == 1

    def test_missing_code_defaults_to_one(self) -> None:
        assert exit_code_from_returncode(None) == 1


class TestClassifyStartFailure:
    def test_not_found(self) -> None:
        assert classify_start_failure(FileNotFoundError()) is StartFailureKind.NOT_FOUND

    def test_permission_denied(self) -> None:
        assert (
            classify_start_failure(PermissionError())
            is StartFailureKind.PERMISSION_DENIED
        )

    def test_would_block(self) -> None:
        assert (
            classify_start_failure(BlockingIOError())
            is StartFailureKind.RESOURCE_UNAVAILABLE
        )

    def test_eagain_errno(self) -> None:
        exc = OSError(errno.EAGAIN, "Resource temporarily unavailable")
        assert classify_start_failure(exc) is StartFailureKind.RESOURCE_UNAVAILABLE

    def test_other(self) -> None:
        exc = OSError(errno.E2BIG, "Argument list too long")
        assert classify_start_failure(exc) is StartFailureKind.OTHER


def _child(*wait_results: object) -> MagicMock:
    process = MagicMock()
    process.wait.side_effect = list(wait_results)
    return process


class TestSubprocessRunner:
    @patch("cargo_dub.infra.process_runner.subprocess.Popen")
    def test_streams_are_inherited(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _child(0)
        SubprocessRunner().run("dub", _INVOCATION)

        mock_popen.assert_called_once_with(
            ["dub", "build", "--force"],
            stdin=None,
            stdout=None,
            stderr=None,
        )

    @patch("cargo_dub.infra.process_runner.subprocess.Popen")
    def test_returns_child_exit_code(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _child(2)
        assert SubprocessRunner().run("dub", _INVOCATION) == 2

    @patch("cargo_dub.infra.process_runner.subprocess.Popen")
    def test_signal_killed_child_returns_one(self, mock_popen: MagicMock) -> None:
        mock_popen.return_value = _child(-15)
        assert SubprocessRunner().run("dub", _INVOCATION) == 1

    @patch("cargo_dub.infra.process_runner.subprocess.Popen")
    def test_ctrl_c_waits_for_child_exit_code(self, mock_popen: MagicMock) -> None:
        child = _child(KeyboardInterrupt(), KeyboardInterrupt(), 3)
        mock_popen.return_value = child

        assert SubprocessRunner().run("dub", _INVOCATION) == 3
        assert child.wait.call_count == 3
        child.kill.assert_not_called()
        child.terminate.assert_not_called()
        child.send_signal.assert_not_called()

    @patch(
        "cargo_dub.infra.process_runner.subprocess.Popen",
        side_effect=FileNotFoundError(2, "No such file or directory"),
    )
    def test_not_found_raises_classified_error(self, _mock_popen: MagicMock) -> None:
        with pytest.raises(StartFailureError) as exc_info:
            SubprocessRunner().run("dub", _INVOCATION)
        assert exc_info.value.kind is StartFailureKind.NOT_FOUND
        assert "not found" in str(exc_info.value)

    @patch(
        "cargo_dub.infra.process_runner.subprocess.Popen",
        side_effect=PermissionError(13, "Permission denied"),
    )
    def test_permission_denied_message_differs(self, _mock_popen: MagicMock) -> None:
        with pytest.raises(StartFailureError) as exc_info:
            SubprocessRunner().run("dub", _INVOCATION)
        assert exc_info.value.kind is StartFailureKind.PERMISSION_DENIED
        assert str(exc_info.value) == "Permission denied when executing dub"
        assert "not found" not in str(exc_info.value)

    @patch(
        "cargo_dub.infra.process_runner.subprocess.Popen",
        side_effect=OSError(errno.ENOEXEC, "Exec format error"),
    )
    def test_generic_failure(self, _mock_popen: MagicMock) -> None:
        with pytest.raises(StartFailureError, match="Failed to execute dub"):
            SubprocessRunner().run("dub", _INVOCATION)
