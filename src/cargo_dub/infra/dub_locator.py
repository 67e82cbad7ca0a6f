"""Infrastructure: ``dub`` executable resolution and platform guidance.

This module is responsible for finding a working ``dub`` binary and
providing platform-specific installation guidance when it is missing.

Rules
-----
* A candidate counts only if ``<candidate> --version`` exits 0; a name
  that exists but fails the probe is treated as absent.
* Probe output is discarded.
* No automatic installation.
* No ``print()`` — callers handle user-facing output.
"""

from __future__ import annotations

import logging
import platform
import subprocess
from collections.abc import Callable
from dataclasses import dataclass

from cargo_dub.core.models import ResolvedExecutable
from cargo_dub.exceptions import DubNotFoundError

logger = logging.getLogger(__name__)

DUB_DOWNLOAD_URL: str = "https://dub.pm"

PROBE_ARGUMENT: str = "--version"


# ---------------------------------------------------------------------------
# Detection result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class DubStatus:
    """Result of a non-raising ``dub`` detection.

    Attributes
    ----------
    found : bool
        Whether any candidate passed the liveness probe.
    executable : ResolvedExecutable | None
        The resolved executable, or ``None``.
    candidates : tuple[str, ...]
        Candidate names tried, in order.
    install_commands : tuple[str, ...]
        Suggested shell commands for installing DUB on the current
        platform.  Empty when DUB is already present.
    """

    found: bool
    executable: ResolvedExecutable | None
    candidates: tuple[str, ...]
    install_commands: tuple[str, ...]


# ---------------------------------------------------------------------------
# Probing
# ---------------------------------------------------------------------------

def candidate_names(system: str | None = None) -> tuple[str, ...]:
    """Return executable names to try, in order, for *system*.

    Windows tries ``dub.exe`` before the bare name; everything else
    tries only ``dub``.
    """
    system = (system if system is not None else platform.system()).lower()
    if system == "windows":
        return ("dub.exe", "dub")
    return ("dub",)


def probe_candidate(candidate: str) -> bool:
    """Return ``True`` when *candidate* starts and exits 0 on ``--version``."""
    try:
        completed = subprocess.run(
            [candidate, PROBE_ARGUMENT],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as exc:
        logger.debug("Probe of %s failed to start: %s", candidate, exc)
        return False
    logger.debug("Probe of %s exited with %s", candidate, completed.returncode)
    return completed.returncode == 0


def resolve_dub(
    probe: Callable[[str], bool] | None = None,
    system: str | None = None,
) -> ResolvedExecutable:
    """Locate a working ``dub`` or raise :class:`DubNotFoundError`.

    The first candidate whose *probe* (default :func:`probe_candidate`)
    succeeds wins.  Callers resolve once per run and pass the result
    along.
    """
    check = probe if probe is not None else probe_candidate
    candidates = candidate_names(system)
    for candidate in candidates:
        if check(candidate):
            logger.debug("Resolved dub executable: %s", candidate)
            return ResolvedExecutable(path=candidate, candidates=candidates)

    install = " or ".join(_platform_install_commands(system))
    raise DubNotFoundError(
        f"dub executable not found. Install DUB from {DUB_DOWNLOAD_URL}",
        hint=f"Install DUB with: {install}",
    )


def detect_dub(
    probe: Callable[[str], bool] | None = None,
    system: str | None = None,
) -> DubStatus:
    """Probe for ``dub`` without raising.

    Returns a :class:`DubStatus` regardless of whether DUB is present —
    the caller decides whether to abort or merely report.
    """
    candidates = candidate_names(system)
    try:
        executable = resolve_dub(probe, system)
    except DubNotFoundError:
        return DubStatus(
            found=False,
            executable=None,
            candidates=candidates,
            install_commands=_platform_install_commands(system),
        )
    return DubStatus(
        found=True,
        executable=executable,
        candidates=candidates,
        install_commands=(),
    )


# ---------------------------------------------------------------------------
# Platform-specific install guidance
# ---------------------------------------------------------------------------

def _platform_install_commands(system: str | None = None) -> tuple[str, ...]:
    """Return install commands appropriate for *system* (default: current OS)."""
    system = (system if system is not None else platform.system()).lower()
    if system == "windows":
        return (
            "winget install dlang.dmd",
            "choco install dmd",
        )
    if system == "linux":
        return (
            "sudo apt install dub",
            "sudo dnf install dub",
            "sudo pacman -S dub",
        )
    if system == "darwin":
        return ("brew install dub",)
    return (f"Download DUB from {DUB_DOWNLOAD_URL}",)
