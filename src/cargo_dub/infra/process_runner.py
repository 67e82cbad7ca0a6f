"""Subprocess-backed implementation of :class:`~cargo_dub.core.protocols.ProcessRunner`.

This module is the **only** place in the codebase that launches the
``dub`` child process.  Start-up ``OSError`` instances are caught here
and re-raised as :class:`~cargo_dub.exceptions.StartFailureError` —
nothing raw escapes the infrastructure boundary.

The child inherits stdin, stdout and stderr so DUB's prompts and
progress output reach the user unbuffered.
"""

from __future__ import annotations

import errno
import logging
import subprocess

from cargo_dub.core.models import ToolInvocation
from cargo_dub.exceptions import StartFailureError, StartFailureKind

logger = logging.getLogger(__name__)

NO_EXIT_CODE: int = 1
"""Exit code used when the child terminated without reporting one."""

# Checked in order; first match wins.
_START_FAILURE_TABLE: tuple[tuple[type[OSError], StartFailureKind], ...] = (
    (FileNotFoundError, StartFailureKind.NOT_FOUND),
    (PermissionError, StartFailureKind.PERMISSION_DENIED),
    (BlockingIOError, StartFailureKind.RESOURCE_UNAVAILABLE),
)


def classify_start_failure(exc: OSError) -> StartFailureKind:
    """Map an ``OSError`` raised while spawning to a :class:`StartFailureKind`."""
    for exc_type, kind in _START_FAILURE_TABLE:
        if isinstance(exc, exc_type):
            return kind
    if exc.errno == errno.EAGAIN:
        return StartFailureKind.RESOURCE_UNAVAILABLE
    return StartFailureKind.OTHER


def exit_code_from_returncode(returncode: int | None) -> int:
    """Normalise a ``Popen.returncode`` into a process exit code.

    Negative values mean the child was killed by a signal (POSIX); like
    a missing code, they become :data:`NO_EXIT_CODE`.
    """
    if returncode is None or returncode < 0:
        return NO_EXIT_CODE
    return returncode


class SubprocessRunner:
    """Concrete :class:`ProcessRunner` backed by :class:`subprocess.Popen`.

    This class satisfies the :class:`~cargo_dub.core.protocols.ProcessRunner`
    protocol structurally — no explicit inheritance required.

    The child shares our process group, so a terminal Ctrl+C reaches it
    directly.  We never kill or signal it ourselves; an interrupt seen
    here only means we keep waiting until the child decides to exit.
    """

    def run(self, executable: str, invocation: ToolInvocation) -> int:
        """Run *executable* with *invocation*, blocking until it exits.

        Raises
        ------
        StartFailureError
            When the OS refuses to start the child.
        """
        try:
            process = subprocess.Popen(
                invocation.command_line(executable),
                stdin=None,
                stdout=None,
                stderr=None,
            )
        except OSError as exc:
            kind = classify_start_failure(exc)
            logger.debug("Could not start %s: %s (%s)", executable, exc, kind.value)
            raise StartFailureError(kind) from exc

        returncode = _wait_through_interrupts(process, executable)
        logger.debug("%s exited with %s", executable, returncode)
        return exit_code_from_returncode(returncode)


def _wait_through_interrupts(process: subprocess.Popen, executable: str) -> int | None:
    while True:
        try:
            return process.wait()
        except KeyboardInterrupt:
            logger.debug("Interrupted; waiting for %s to exit", executable)
