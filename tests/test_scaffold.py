"""Smoke tests — verify package wiring.

These tests prove that:
* The CLI entry point is importable and callable.
* The exception hierarchy is correctly structured.
* Version is accessible.
* Exit codes are defined.
"""

from __future__ import annotations

import pytest

from cargo_dub import __version__
from cargo_dub.cli import exit_codes
from cargo_dub.cli.app import main
from cargo_dub.exceptions import (
    CargoDubError,
    DubNotFoundError,
    ManifestNotFoundError,
    PreconditionError,
    StartFailureError,
    StartFailureKind,
)


# ---------------------------------------------------------------------------
# Version
# ---------------------------------------------------------------------------

class TestVersion:
    def test_version_is_string(self) -> None:
        assert isinstance(__version__, str)

    def test_version_is_semver_like(self) -> None:
        parts = __version__.split(".")
        assert len(parts) == 3
        assert all(part.isdigit() for part in parts)


# ---------------------------------------------------------------------------
# Exception hierarchy
# ---------------------------------------------------------------------------

class TestExceptions:
    @pytest.mark.parametrize(
        "exc_class",
        [DubNotFoundError, PreconditionError, ManifestNotFoundError, StartFailureError],
    )
    def test_all_exceptions_inherit_from_base(
        self, exc_class: type[CargoDubError]
    ) -> None:
        assert issubclass(exc_class, CargoDubError)

    def test_manifest_error_is_precondition(self) -> None:
        assert issubclass(ManifestNotFoundError, PreconditionError)

    def test_hint_is_stored(self) -> None:
        err = CargoDubError("boom", hint="try this")
        assert str(err) == "boom"
        assert err.hint == "try this"

    def test_hint_defaults_to_none(self) -> None:
        assert CargoDubError("boom").hint is None

    def test_manifest_message(self) -> None:
        err = ManifestNotFoundError("dub.sdl")
        assert str(err) == "Source file 'dub.sdl' not found"

    @pytest.mark.parametrize(
        ("kind", "message"),
        [
            (StartFailureKind.NOT_FOUND, "dub executable not found or not accessible"),
            (StartFailureKind.PERMISSION_DENIED, "Permission denied when executing dub"),
            (StartFailureKind.RESOURCE_UNAVAILABLE, "System resources temporarily unavailable"),
            (StartFailureKind.OTHER, "Failed to execute dub"),
        ],
    )
    def test_start_failure_messages(self, kind: StartFailureKind, message: str) -> None:
        err = StartFailureError(kind)
        assert err.kind is kind
        assert str(err) == message

    def test_start_failure_messages_are_distinct(self) -> None:
        messages = {str(StartFailureError(kind)) for kind in StartFailureKind}
        assert len(messages) == len(StartFailureKind)


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------

class TestExitCodes:
    def test_success_is_zero(self) -> None:
        assert exit_codes.SUCCESS == 0

    def test_general_error_is_one(self) -> None:
        assert exit_codes.GENERAL_ERROR == 1

    def test_keyboard_interrupt_is_130(self) -> None:
        assert exit_codes.KEYBOARD_INTERRUPT == 130

    def test_unexpected_error_is_two(self) -> None:
        assert exit_codes.UNEXPECTED_ERROR == 2


# ---------------------------------------------------------------------------
# CLI bootstrap
# ---------------------------------------------------------------------------

class TestCLIBootstrap:
    def test_version_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0

    def test_help_flag(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--help"])
        assert exc_info.value.code == 0

    def test_subcommand_help(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["build", "--help"])
        assert exc_info.value.code == 0
