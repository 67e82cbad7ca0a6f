"""Custom exception hierarchy for cargo-dub.

All exceptions that cross layer boundaries must inherit from
:class:`CargoDubError`.  Raw ``OSError`` instances raised while starting
``dub`` must NEVER propagate beyond the infrastructure layer — they must
be caught and re-raised as a typed subclass defined here.

A child process that runs and exits non-zero is **not** an error: its
exit code is propagated verbatim by the CLI layer.

Hierarchy
---------
CargoDubError
├── DubNotFoundError
├── PreconditionError
│   └── ManifestNotFoundError
└── StartFailureError
"""

from __future__ import annotations

from enum import Enum


class CargoDubError(Exception):
    """Base exception for all cargo-dub errors.

    Every user-visible error condition must map to a subclass of this
    exception so that the CLI error boundary can render a clean
    ``Error: <message>`` line without leaking internal stack traces.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance shown below the error message."""


# --- Executable resolution -------------------------------------------------

class DubNotFoundError(CargoDubError):
    """Raised when no candidate ``dub`` executable passes the liveness probe."""


# --- Preconditions -----------------------------------------------------------

class PreconditionError(CargoDubError):
    """Raised before dispatch when a request cannot be run as given."""


class ManifestNotFoundError(PreconditionError):
    """Raised by ``convert`` when the source manifest is absent."""

    def __init__(self, filename: str) -> None:
        super().__init__(f"Source file '{filename}' not found")
        self.filename: str = filename


# --- Process start -------------------------------------------------------------

class StartFailureKind(Enum):
    """OS-level reason a child process could not be launched."""

    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    RESOURCE_UNAVAILABLE = "resource_unavailable"
    OTHER = "other"


START_FAILURE_MESSAGES: dict[StartFailureKind, str] = {
    StartFailureKind.NOT_FOUND: "dub executable not found or not accessible",
    StartFailureKind.PERMISSION_DENIED: "Permission denied when executing dub",
    StartFailureKind.RESOURCE_UNAVAILABLE: "System resources temporarily unavailable",
    StartFailureKind.OTHER: "Failed to execute dub",
}


class StartFailureError(CargoDubError):
    """Raised when the ``dub`` child process could not even be started."""

    def __init__(self, kind: StartFailureKind) -> None:
        super().__init__(START_FAILURE_MESSAGES[kind])
        self.kind: StartFailureKind = kind
