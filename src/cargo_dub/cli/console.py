"""CLI console and logging helpers with optional Rich support.

This module intentionally avoids module-level imports of optional UI
dependencies so every command keeps working when Rich is not
installed.  Everything is written to stderr: stdout belongs to ``dub``.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

from cargo_dub.exceptions import CargoDubError


class RichUnavailableError(CargoDubError):
	"""Raised when an optional Rich component is requested but missing."""


def _load_rich_console_class() -> type[Any]:
	"""Return ``rich.console.Console`` class or raise ``RichUnavailableError``."""
	try:
		from rich.console import Console
	except ModuleNotFoundError as exc:
		raise RichUnavailableError(
			"rich is not installed. Install with: pip install rich",
		) from exc
	return Console


def get_rich_console() -> Any:
	"""Create a Rich console instance targeting stderr."""
	console_class = _load_rich_console_class()
	return console_class(stderr=True)


class _ConsoleProxy:
	"""Minimal ``print``-compatible proxy with Rich fallback."""

	def print(self, *objects: object, plain: str | None = None) -> None:
		"""Render with Rich when available, else plain stderr print.

		*plain* replaces the markup-carrying *objects* on the fallback
		path.
		"""
		try:
			rich_console = get_rich_console()
		except RichUnavailableError:
			if plain is not None:
				print(plain, file=sys.stderr)
			else:
				print(*objects, file=sys.stderr)
			return
		rich_console.print(*objects)


console = _ConsoleProxy()


def _build_log_handler() -> logging.Handler:
	"""Return a ``RichHandler`` on stderr, or a plain stream handler."""
	try:
		from rich.logging import RichHandler
	except ModuleNotFoundError:
		handler: logging.Handler = logging.StreamHandler(sys.stderr)
		handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
		return handler
	return RichHandler(console=get_rich_console(), show_time=False, show_path=False)


def configure_logging(verbose: bool = False) -> None:
	"""Attach a single stderr handler to the ``cargo_dub`` logger.

	Normal runs log at WARNING so nothing interleaves with ``dub``'s own
	output; *verbose* lowers the level to DEBUG.
	"""
	logger = logging.getLogger("cargo_dub")
	for handler in list(logger.handlers):
		logger.removeHandler(handler)
	logger.addHandler(_build_log_handler())
	logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
	logger.propagate = False
