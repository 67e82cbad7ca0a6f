"""Shared pytest fixtures and configuration for the cargo-dub test suite.

Guidelines
----------
* No test may require a real ``dub`` installation.
* Process launching is mocked at the infra boundary.
* Core tests must be pure — no side effects.
* ``$DC`` is cleared for every test so encoding is deterministic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest


@pytest.fixture(autouse=True)
def _clear_compiler_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("DC", raising=False)


@pytest.fixture(autouse=True)
def _reset_cargo_dub_logger() -> Iterator[None]:
    yield
    logger = logging.getLogger("cargo_dub")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
