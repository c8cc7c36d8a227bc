"""Version lookup for livery."""

from __future__ import annotations

import tomllib
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path

DIST_NAME = "livery"
UNKNOWN_VERSION = "0+unknown"

_SOURCE_PYPROJECT = Path(__file__).resolve().parents[2] / "pyproject.toml"


def version_from_pyproject(pyproject: Path) -> str | None:
    """
    Read ``[project].version`` from a livery checkout.

    Returns ``None`` when the file is missing, unparseable, or belongs to
    another project (site-packages layouts can put an unrelated
    ``pyproject.toml`` two levels up).
    """
    try:
        data = tomllib.loads(pyproject.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return None

    project = data.get("project")
    if not isinstance(project, dict) or project.get("name") != DIST_NAME:
        return None
    version = project.get("version")
    return version if isinstance(version, str) else None


def get_version() -> str:
    """Version of the running checkout, else of the installed distribution."""
    source_version = version_from_pyproject(_SOURCE_PYPROJECT)
    if source_version is not None:
        return source_version
    try:
        return _metadata_version(DIST_NAME)
    except PackageNotFoundError:
        return UNKNOWN_VERSION
