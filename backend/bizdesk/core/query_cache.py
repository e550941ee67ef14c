"""
In-memory read cache keyed by collection name.
Entries are dropped on invalidation, never merged; the next read re-fetches.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")
QueryKey = tuple[Hashable, ...]


class QueryCache:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._entries: dict[QueryKey, Any] = {}
        self._fetch_counts: dict[QueryKey, int] = {}
        self._generations: dict[QueryKey, int] = {}
        self._cleared = 0

    def fetch(self, key: QueryKey, loader: Callable[[], T]) -> T:
        """
        Return the cached value for key, loading it on a miss. Loader errors propagate.
        A load that overlaps an invalidate of its key is returned to the caller
        but not stored.
        """
        with self._lock:
            if key in self._entries:
                return self._entries[key]
            generation = self._generation(key)
        data = loader()
        with self._lock:
            self._fetch_counts[key] = self._fetch_counts.get(key, 0) + 1
            if self._generation(key) == generation:
                self._entries[key] = data
            else:
                logger.debug("Discarded load for %s that raced an invalidation", key)
        return data

    def _generation(self, key: QueryKey) -> tuple[int, ...]:
        # Invalidating any prefix of key changes this, as does clear()
        return (self._cleared, *(self._generations.get(key[:i], 0) for i in range(len(key) + 1)))

    def get(self, key: QueryKey) -> Optional[Any]:
        with self._lock:
            return self._entries.get(key)

    def contains(self, key: QueryKey) -> bool:
        with self._lock:
            return key in self._entries

    def fetch_count(self, key: QueryKey) -> int:
        with self._lock:
            return self._fetch_counts.get(key, 0)

    def invalidate(self, key: QueryKey) -> int:
        """Drop key and every entry it prefixes, e.g. ("users",) drops ("users", 42)."""
        with self._lock:
            stale = [k for k in self._entries if k[: len(key)] == key]
            for k in stale:
                del self._entries[k]
            self._generations[key] = self._generations.get(key, 0) + 1
        if stale:
            logger.debug("Invalidated %d cache entr(y/ies) for %s", len(stale), key)
        return len(stale)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._cleared += 1
