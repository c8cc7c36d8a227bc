"""Bounded least-recently-used cache."""

from __future__ import annotations

from collections import OrderedDict
from collections.abc import Hashable, Iterator
from typing import Generic, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LRUCache(Generic[K, V]):
    """
    Ordered-dict LRU cache.

    Reading a key marks it most recently used. Inserting a new key into a
    full cache evicts the least recently used one.

    Example:
        cache = LRUCache[str, int](2)
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)  # "a" is evicted
        cache.get("a")     # None
    """

    def __init__(self, max_size: int) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self._max_size = max_size
        self._entries: OrderedDict[K, V] = OrderedDict()

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: K) -> V | None:
        if key not in self._entries:
            return None
        self._entries.move_to_end(key)
        return self._entries[key]

    def peek(self, key: K) -> V | None:
        """Return a value without touching its recency."""
        return self._entries.get(key)

    def set(self, key: K, value: V) -> None:
        if key in self._entries:
            self._entries.move_to_end(key)
        elif len(self._entries) >= self._max_size:
            self._entries.popitem(last=False)
        self._entries[key] = value

    def delete(self, key: K) -> bool:
        if key not in self._entries:
            return False
        del self._entries[key]
        return True

    def clear(self) -> None:
        self._entries.clear()

    def has(self, key: K) -> bool:
        return key in self._entries

    def keys(self) -> list[K]:
        """Keys from least to most recently used."""
        return list(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[K]:
        return iter(self._entries)
