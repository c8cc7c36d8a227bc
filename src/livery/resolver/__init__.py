"""
Theme resolution: fetch, validate and cache themes by id.
"""

from .cache import LRUCache
from .fetchers import ThemeNotFoundError, file_fetcher, mapping_fetcher
from .resolver import CacheConfig, CacheEntry, ThemeResolver, create_resolver

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "LRUCache",
    "ThemeResolver",
    "create_resolver",
    "file_fetcher",
    "mapping_fetcher",
    "ThemeNotFoundError",
]
