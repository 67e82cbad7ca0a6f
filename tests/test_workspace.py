"""Tests for the filesystem workspace (infra/workspace.py)."""

from __future__ import annotations

from pathlib import Path

import pytest

from cargo_dub.infra.workspace import LocalWorkspace


class TestLocalWorkspace:
    def test_existing_file(self, tmp_path: Path) -> None:
        (tmp_path / "dub.sdl").write_text('name "demo"\n')
        assert LocalWorkspace(tmp_path).has_file("dub.sdl") is True

    def test_missing_file(self, tmp_path: Path) -> None:
        assert LocalWorkspace(tmp_path).has_file("dub.sdl") is False

    def test_defaults_to_cwd(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        monkeypatch.chdir(tmp_path)
        (tmp_path / "dub.json").write_text("{}")
        workspace = LocalWorkspace()
        assert workspace.root.resolve() == tmp_path.resolve()
        assert workspace.has_file("dub.json") is True
