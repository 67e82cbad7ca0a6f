"""Exit-code constants used by the CLI layer.

Centralised here so that every adapter-local exit path uses a
well-known, tested value.  Exit codes reported by ``dub`` itself are
propagated verbatim and never pass through these constants.
"""

from __future__ import annotations

SUCCESS: int = 0
"""Clean exit — command completed without error."""

GENERAL_ERROR: int = 1
"""A known CargoDubError was caught. User-facing message was displayed."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
