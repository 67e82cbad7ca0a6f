"""Filesystem-backed implementation of :class:`~cargo_dub.core.protocols.Workspace`."""

from __future__ import annotations

from pathlib import Path


class LocalWorkspace:
    """The directory ``dub`` runs in — the current working directory by default."""

    def __init__(self, root: Path | None = None) -> None:
        self._root: Path = root if root is not None else Path.cwd()

    @property
    def root(self) -> Path:
        return self._root

    def has_file(self, name: str) -> bool:
        return (self._root / name).exists()
