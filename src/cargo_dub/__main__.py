"""Allow ``python -m cargo_dub`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m cargo_dub`` behaves identically to the ``cargo-dub``
console script.
"""

from __future__ import annotations

from cargo_dub.cli.app import cli

if __name__ == "__main__":
    cli()
