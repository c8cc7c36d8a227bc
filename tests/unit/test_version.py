"""Tests for the version lookup."""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from pathlib import Path

import pytest

from livery import _version
from livery._version import UNKNOWN_VERSION, get_version, version_from_pyproject


def _write_pyproject(tmp_path: Path, body: str) -> Path:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text(body, encoding="utf-8")
    return pyproject


class TestVersionFromPyproject:
    def test_reads_livery_project(self, tmp_path: Path) -> None:
        pyproject = _write_pyproject(tmp_path, '[project]\nname = "livery"\nversion = "1.2.3"\n')
        assert version_from_pyproject(pyproject) == "1.2.3"

    def test_ignores_other_projects(self, tmp_path: Path) -> None:
        pyproject = _write_pyproject(tmp_path, '[project]\nname = "other"\nversion = "9.9.9"\n')
        assert version_from_pyproject(pyproject) is None

    def test_ignores_version_outside_project_table(self, tmp_path: Path) -> None:
        pyproject = _write_pyproject(
            tmp_path,
            '[tool.other]\nversion = "9.9.9"\n\n[project]\nname = "livery"\ndynamic = ["version"]\n',
        )
        assert version_from_pyproject(pyproject) is None

    def test_missing_or_malformed_file(self, tmp_path: Path) -> None:
        assert version_from_pyproject(tmp_path / "pyproject.toml") is None
        assert version_from_pyproject(_write_pyproject(tmp_path, "[project\n")) is None


class TestGetVersion:
    def test_checkout_version_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        pyproject = _write_pyproject(tmp_path, '[project]\nname = "livery"\nversion = "2.0.0"\n')
        monkeypatch.setattr(_version, "_SOURCE_PYPROJECT", pyproject)
        assert get_version() == "2.0.0"

    def test_falls_back_to_metadata(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(_version, "_SOURCE_PYPROJECT", tmp_path / "missing.toml")
        monkeypatch.setattr(_version, "_metadata_version", lambda name: f"{name}-meta")
        assert get_version() == "livery-meta"

    def test_not_installed(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        def not_found(name: str) -> str:
            raise PackageNotFoundError(name)

        monkeypatch.setattr(_version, "_SOURCE_PYPROJECT", tmp_path / "missing.toml")
        monkeypatch.setattr(_version, "_metadata_version", not_found)
        assert get_version() == UNKNOWN_VERSION
