"""``cargo-dub doctor`` — environment diagnostics command.

Gathers system information and renders a Rich table summarising
whether the runtime environment can dispatch to DUB.

This module lives in the CLI layer — it may import from ``infra``
and ``core``, and it renders via Rich.  It never requires ``dub`` to be
installed; a missing ``dub`` is reported, not raised.
"""

from __future__ import annotations

import os
import platform
import sys

from cargo_dub.cli import exit_codes
from cargo_dub.cli.console import console
from cargo_dub.core.encoder import COMPILER_ENV_VAR
from cargo_dub.infra.dub_locator import DUB_DOWNLOAD_URL, DubStatus, detect_dub
from cargo_dub.version import __version__


# ---------------------------------------------------------------------------
# Diagnostic collectors
# ---------------------------------------------------------------------------

def _python_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the Python version row."""
    version = platform.python_version()
    ok = sys.version_info[:2] >= (3, 10)
    status = "[green]OK[/green]" if ok else "[red]FAIL (>=3.10 required)[/red]"
    return "Python", version, status


def _dub_check(status_obj: DubStatus) -> tuple[str, str, str]:
    """Return (label, value, status) for the dub row."""
    if status_obj.found and status_obj.executable is not None:
        return "dub", status_obj.executable.path, "[green]OK[/green]"
    return "dub", "NOT FOUND", "[red]FAIL[/red]"


def _compiler_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the default-compiler row."""
    value = os.environ.get(COMPILER_ENV_VAR)
    if value is None:
        value = "unset (dub default)"
    elif not value:
        value = "empty (passed as --compiler=)"
    return f"${COMPILER_ENV_VAR}", value, "[green]OK[/green]"


def _os_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the OS row."""
    system_raw = platform.system()
    system_display = {
        "Windows": "Windows",
        "Linux": "Linux",
        "Darwin": "macOS",
    }.get(system_raw, system_raw)
    release = platform.release()
    machine = platform.machine()
    value = f"{system_display} {release} ({machine})"
    return "OS", value, "[green]OK[/green]"


def _cargo_dub_version_check() -> tuple[str, str, str]:
    """Return (label, value, status) for the cargo-dub version row."""
    return "cargo-dub", __version__, "[green]OK[/green]"


def _status_plain(status: str) -> str:
    """Convert rich-markup status to plain text."""
    if "FAIL" in status:
        return "FAIL"
    if "WARN" in status:
        return "WARN"
    if "OK" in status:
        return "OK"
    return status


def _print_plain_doctor_table(checks: list[tuple[str, str, str]]) -> None:
    """Render doctor output without Rich."""
    print("\ncargo-dub doctor", file=sys.stderr)
    print("=" * 56, file=sys.stderr)
    print(f"{'Component':<12} {'Value':<32} {'Status':<8}", file=sys.stderr)
    print("-" * 56, file=sys.stderr)
    for label, value, status in checks:
        plain_status = _status_plain(status)
        print(f"{label:<12} {value:<32} {plain_status:<8}", file=sys.stderr)
    print(file=sys.stderr)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def run_doctor() -> int:
    """Execute all diagnostic checks and render a summary table.

    Returns
    -------
    int
        :data:`exit_codes.SUCCESS` when all checks pass,
        :data:`exit_codes.GENERAL_ERROR` if any check fails.
    """
    dub_status = detect_dub()
    checks = [
        _cargo_dub_version_check(),
        _python_version_check(),
        _dub_check(dub_status),
        _compiler_check(),
        _os_check(),
    ]

    has_failure = any("FAIL" in status for _, _, status in checks)

    rich_available = True
    try:
        from rich.table import Table
    except ModuleNotFoundError:
        rich_available = False

    if rich_available:
        table = Table(
            title="cargo-dub doctor",
            show_header=True,
            header_style="bold cyan",
            border_style="dim",
        )
        table.add_column("Component", style="bold", min_width=12)
        table.add_column("Value", min_width=20)
        table.add_column("Status", justify="center", min_width=8)

        for label, value, status in checks:
            table.add_row(label, value, status)

        console.print()
        console.print(table)
        console.print()
    else:
        _print_plain_doctor_table(checks)

    # Show install guidance when dub is missing.
    if not dub_status.found:
        console.print(
            f"[yellow]dub is not installed.[/yellow] Get it from {DUB_DOWNLOAD_URL}",
            plain=f"dub is not installed. Get it from {DUB_DOWNLOAD_URL}",
        )
        console.print("Or install using one of the following commands:\n")
        for cmd in dub_status.install_commands:
            console.print(f"  [bold]{cmd}[/bold]", plain=f"  {cmd}")
        console.print()

    if has_failure:
        console.print("[bold red]Some checks failed.[/bold red]", plain="Some checks failed.")
        return exit_codes.GENERAL_ERROR

    console.print("[bold green]All checks passed.[/bold green]", plain="All checks passed.")
    return exit_codes.SUCCESS
