"""
Theme resolver with caching.

Wraps a caller-supplied fetch function with an LRU cache keyed by theme
id. Fetched data is merged over the schema defaults and validated (coerce
mode by default) before it is cached.

Cache entry lifecycle::

    absent --resolve--> fresh --ttl elapses--> stale
    stale  --resolve, SWR on--> serve stale + one background refetch --> fresh
    stale  --resolve, SWR off--> blocking refetch --> fresh
    any    --invalidate / LRU eviction--> absent

Background refetch failures are logged and swallowed; the stale entry
keeps serving. Failures on a blocking fetch propagate to the caller.

Usage::

    resolver = create_resolver(
        schema,
        fetcher=lambda theme_id: themes_api.get(theme_id),
        cache=CacheConfig(ttl=60),
    )
    theme = await resolver.resolve("acme")
    primary = await resolver.get("acme", "colors.primary")
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import os
import time
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from livery.core.errors import ThemeResolutionError
from livery.core.schema import Schema, SchemaDefinition, build_defaults, create_schema
from livery.utils import deep_merge, get_at_path
from livery.validation.engine import ValidationIssue, ValidationMode, validate_with_mode

from .cache import LRUCache

logger = logging.getLogger(__name__)

Theme = dict[str, Any]
FetchResult = Mapping[str, Any] | None
Fetcher = Callable[[str], FetchResult | Awaitable[FetchResult]]

_DEFAULT_TTL = 300.0  # 5 minutes
_DEFAULT_MAX_SIZE = 100
_FALSY = ("0", "false", "no", "off")


class CacheConfig(BaseModel):
    """
    Resolver cache settings.

    Example:
        CacheConfig(ttl=60, stale_while_revalidate=False, max_size=500)
    """

    model_config = ConfigDict(frozen=True)

    ttl: float = Field(default=_DEFAULT_TTL, ge=0, description="Seconds an entry stays fresh")
    stale_while_revalidate: bool = Field(
        default=True, description="Serve stale entries while refetching in the background"
    )
    max_size: int = Field(default=_DEFAULT_MAX_SIZE, ge=1, description="Maximum cached themes")

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CacheConfig:
        """
        Build a config from ``LIVERY_CACHE_TTL``, ``LIVERY_CACHE_SWR`` and
        ``LIVERY_CACHE_MAX_SIZE``; unset variables keep their defaults.
        """
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {}
        if ttl := env.get("LIVERY_CACHE_TTL"):
            values["ttl"] = ttl
        if swr := env.get("LIVERY_CACHE_SWR"):
            values["stale_while_revalidate"] = swr.strip().lower() not in _FALSY
        if max_size := env.get("LIVERY_CACHE_MAX_SIZE"):
            values["max_size"] = max_size
        return cls.model_validate(values)


@dataclass
class CacheEntry:
    """
    A cached theme.

    ``is_revalidating`` is set while a background refetch for this entry is
    in flight so a second stale read does not start another one.
    """

    data: Theme
    timestamp: float
    is_revalidating: bool = False


class ThemeResolver:
    """
    Fetch-validate-cache orchestrator for one schema.

    Args:
        schema: Schema the fetched data must satisfy
        fetcher: ``fetcher(theme_id)`` returning a (partial) theme mapping,
            or an awaitable of one
        cache: Cache settings (``CacheConfig`` or a mapping of its fields)
        validation_mode: Mode used on fetched data (default: coerce)
        clock: Monotonic time source in seconds
    """

    def __init__(
        self,
        schema: Schema | SchemaDefinition,
        fetcher: Fetcher,
        cache: CacheConfig | Mapping[str, Any] | None = None,
        *,
        validation_mode: ValidationMode | str = ValidationMode.COERCE,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._schema = create_schema(schema)
        self._fetcher = fetcher
        self._config = (
            cache if isinstance(cache, CacheConfig) else CacheConfig.model_validate(cache or {})
        )
        self._mode = ValidationMode(validation_mode)
        self._clock = clock
        self._defaults = build_defaults(self._schema)
        self._cache: LRUCache[str, CacheEntry] = LRUCache(self._config.max_size)
        self._background_tasks: set[asyncio.Task[None]] = set()

    @property
    def schema(self) -> Schema:
        return self._schema

    @property
    def config(self) -> CacheConfig:
        return self._config

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def is_stale(self, entry: CacheEntry) -> bool:
        return self._clock() - entry.timestamp > self._config.ttl

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    async def resolve(self, theme_id: str) -> Theme:
        """
        Resolve a validated theme, using the cache when possible.

        The returned dict is the cached object; treat it as read-only.

        Raises:
            ThemeResolutionError: If fetched data fails validation
            Exception: Whatever the fetcher raises on a blocking fetch
        """
        cached = self._cache.get(theme_id)

        if cached is not None:
            if not self.is_stale(cached):
                logger.debug("Theme cache hit: %s", theme_id)
                return cached.data

            if self._config.stale_while_revalidate:
                logger.debug("Serving stale theme %s while revalidating", theme_id)
                self._revalidate_in_background(theme_id, cached)
                return cached.data

        data = await self._fetch_theme_data(theme_id)
        self._store(theme_id, data)
        return data

    async def get(self, theme_id: str, path: str) -> Any:
        """Resolve a theme and return the value at a dot path (``None`` if absent)."""
        theme = await self.resolve(theme_id)
        return get_at_path(theme, path)

    def invalidate(self, theme_id: str) -> None:
        """Drop one theme from the cache."""
        if self._cache.delete(theme_id):
            logger.debug("Invalidated theme %s", theme_id)

    def clear_cache(self) -> None:
        """Drop every cached theme."""
        self._cache.clear()

    async def wait_for_revalidations(self) -> None:
        """Wait until no background refetch is in flight."""
        while pending := [task for task in self._background_tasks if not task.done()]:
            await asyncio.gather(*pending, return_exceptions=True)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _store(self, theme_id: str, data: Theme) -> None:
        self._cache.set(theme_id, CacheEntry(data=data, timestamp=self._clock()))

    async def _call_fetcher(self, theme_id: str) -> FetchResult:
        result = self._fetcher(theme_id)
        if inspect.isawaitable(result):
            result = await result
        return result

    async def _fetch_theme_data(self, theme_id: str) -> Theme:
        """Fetch, merge over defaults and validate one theme."""
        logger.debug("Fetching theme %s", theme_id)
        raw = await self._call_fetcher(theme_id)

        if raw is not None and not isinstance(raw, Mapping):
            raise ThemeResolutionError(
                theme_id,
                [
                    ValidationIssue(
                        path="<root>",
                        message="fetcher must return a mapping",
                        expected="object",
                        received=raw,
                    )
                ],
            )

        merged = deep_merge(self._defaults, raw)
        result = validate_with_mode(self._schema, merged, self._mode)
        if not result.success or result.data is None:
            raise ThemeResolutionError(theme_id, result.errors)
        return result.data

    def _revalidate_in_background(self, theme_id: str, entry: CacheEntry) -> None:
        if entry.is_revalidating:
            return

        entry.is_revalidating = True
        task = asyncio.create_task(self._revalidate(theme_id, entry))
        self._background_tasks.add(task)
        task.add_done_callback(self._background_tasks.discard)

    async def _revalidate(self, theme_id: str, entry: CacheEntry) -> None:
        try:
            data = await self._fetch_theme_data(theme_id)
        except Exception as e:
            # Stale data keeps serving; never surfaced to the caller
            logger.warning("Background revalidation failed for theme %s: %s", theme_id, e)
        else:
            self._store(theme_id, data)
            logger.debug("Revalidated theme %s", theme_id)
        finally:
            entry.is_revalidating = False


def create_resolver(
    schema: Schema | SchemaDefinition,
    fetcher: Fetcher,
    cache: CacheConfig | Mapping[str, Any] | None = None,
    *,
    validation_mode: ValidationMode | str = ValidationMode.COERCE,
    clock: Callable[[], float] = time.monotonic,
) -> ThemeResolver:
    """
    Create a caching theme resolver.

    Example:
        resolver = create_resolver(
            schema,
            fetcher=load_tenant_theme,
            cache={"ttl": 60, "stale_while_revalidate": True},
        )
    """
    return ThemeResolver(
        schema,
        fetcher,
        cache,
        validation_mode=validation_mode,
        clock=clock,
    )
