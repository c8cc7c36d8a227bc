"""
Ready-made fetchers for ``create_resolver``.

Any callable ``fetcher(theme_id)`` works; these cover the two common local
sources: a directory of theme files and an in-memory mapping.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any

from livery.core.errors import LiveryError
from livery.core.loader import SUPPORTED_SUFFIXES, load_theme
from livery.utils import deep_clone

logger = logging.getLogger(__name__)


class ThemeNotFoundError(LiveryError):
    """Raised by a fetcher when no theme exists for an id."""

    def __init__(self, theme_id: str):
        self.theme_id = theme_id
        super().__init__(f'Theme not found: "{theme_id}"')


def _check_theme_id(theme_id: str) -> None:
    # Theme ids become file names here; keep them inside the directory
    if not theme_id or theme_id.startswith(".") or "/" in theme_id or "\\" in theme_id:
        raise ThemeNotFoundError(theme_id)


def file_fetcher(directory: Path | str) -> Callable[[str], Awaitable[dict[str, Any]]]:
    """
    Build a fetcher that reads ``<directory>/<theme_id>.{yaml,yml,json}``.

    File reads run in a worker thread so the event loop is not blocked.

    Example:
        resolver = create_resolver(schema, file_fetcher("themes/"))
    """
    root = Path(directory)

    async def fetch(theme_id: str) -> dict[str, Any]:
        _check_theme_id(theme_id)
        for suffix in SUPPORTED_SUFFIXES:
            candidate = root / f"{theme_id}{suffix}"
            if candidate.is_file():
                logger.debug("Reading theme %s from %s", theme_id, candidate)
                return await asyncio.to_thread(load_theme, candidate)
        raise ThemeNotFoundError(theme_id)

    return fetch


def mapping_fetcher(themes: Mapping[str, Mapping[str, Any]]) -> Callable[[str], dict[str, Any]]:
    """
    Build a fetcher over bundled, in-memory themes.

    Each call returns a copy so cached themes never alias the source.
    """

    def fetch(theme_id: str) -> dict[str, Any]:
        if theme_id not in themes:
            raise ThemeNotFoundError(theme_id)
        return deep_clone(themes[theme_id])

    return fetch
