"""Infrastructure layer — external system integration.

This layer wraps all interaction with the ``dub`` binary and the
filesystem.  Every raw ``OSError`` from starting a process must be
caught here and re-raised as a :class:`~cargo_dub.exceptions.CargoDubError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from cargo_dub.infra.dub_locator import DubStatus, detect_dub, resolve_dub
from cargo_dub.infra.process_runner import SubprocessRunner
from cargo_dub.infra.workspace import LocalWorkspace

__all__: list[str] = [
    "DubStatus",
    "LocalWorkspace",
    "SubprocessRunner",
    "detect_dub",
    "resolve_dub",
]
