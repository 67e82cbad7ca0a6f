"""Protocols (interfaces) consumed by the core layer.

These define the contracts that infrastructure adapters must satisfy.
Core code depends ONLY on these protocols — never on concrete
implementations — so tests can inject fakes for process execution and
the working directory.
"""

from __future__ import annotations

from typing import Protocol

from cargo_dub.core.models import ToolInvocation


class ProcessRunner(Protocol):
    """Contract for launching the ``dub`` child process."""

    def run(self, executable: str, invocation: ToolInvocation) -> int:
        """Run *executable* with *invocation* and block until it exits.

        Standard input, output and error must be inherited from the
        current process.

        Returns
        -------
        int
            The child's exit code, or ``1`` when the OS reports none.

        Raises
        ------
        StartFailureError
            When the child process could not be started at all.
        """
        ...  # pragma: no cover


class Workspace(Protocol):
    """Read-only view of the directory ``dub`` will run in."""

    def has_file(self, name: str) -> bool:
        """Return ``True`` when *name* exists in the workspace."""
        ...  # pragma: no cover
