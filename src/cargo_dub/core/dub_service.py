"""Core DUB service — orchestrates precondition checks, encoding and dispatch.

This service delegates process execution to a
:class:`~cargo_dub.core.protocols.ProcessRunner` and filesystem checks
to a :class:`~cargo_dub.core.protocols.Workspace`, both injected at
construction time.  It is responsible for:

* Verifying ``convert``'s source manifest before anything is spawned.
* Encoding the request into a :class:`ToolInvocation`.
* Handing the invocation to the runner and returning its exit code.

Guarantees
----------
* Pure orchestration — no subprocess, no ``print()``.
* Exactly one runner call per :meth:`DubService.execute`.
"""

from __future__ import annotations

import logging
import shlex
from collections.abc import Mapping

from cargo_dub.core.encoder import encode
from cargo_dub.core.models import (
    ConvertRequest,
    ResolvedExecutable,
    SubcommandRequest,
    ToolInvocation,
)
from cargo_dub.core.protocols import ProcessRunner, Workspace
from cargo_dub.exceptions import ManifestNotFoundError

logger = logging.getLogger(__name__)


class DubService:
    """Translate requests into ``dub`` invocations and run them.

    Parameters
    ----------
    executable:
        The resolved ``dub`` executable for this run.
    runner:
        Any object satisfying the :class:`ProcessRunner` protocol.
    workspace:
        Any object satisfying the :class:`Workspace` protocol.
    environ:
        Environment used for option fallbacks; ``None`` means
        :data:`os.environ`.
    """

    def __init__(
        self,
        executable: ResolvedExecutable,
        runner: ProcessRunner,
        workspace: Workspace,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self._executable: ResolvedExecutable = executable
        self._runner: ProcessRunner = runner
        self._workspace: Workspace = workspace
        self._environ: Mapping[str, str] | None = environ

    @property
    def executable(self) -> ResolvedExecutable:
        return self._executable

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def build_invocation(self, request: SubcommandRequest) -> ToolInvocation:
        """Check preconditions for *request* and encode it.

        Raises
        ------
        ManifestNotFoundError
            When converting and the source manifest is missing.
        """
        if isinstance(request, ConvertRequest):
            source = request.format.source_manifest
            if not self._workspace.has_file(source):
                raise ManifestNotFoundError(source)
        return encode(request, self._environ)

    def execute(self, request: SubcommandRequest) -> int:
        """Run *request* through ``dub`` and return the child's exit code.

        Raises
        ------
        PreconditionError
            Before any process is spawned.
        StartFailureError
            When the runner cannot launch ``dub``.
        """
        invocation = self.build_invocation(request)
        logger.debug(
            "Running: %s",
            shlex.join(invocation.command_line(self._executable.path)),
        )
        return self._runner.run(self._executable.path, invocation)
