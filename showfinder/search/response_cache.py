"""Bounded LRU cache of raw search responses, shared by concurrent searches."""

from __future__ import annotations

import threading
from collections import OrderedDict
from dataclasses import dataclass

from showfinder.search.types import ServiceResponse

# Shows sorted in folders hit the same few titles repeatedly; 20 entries
# gives the same hit rate as 200 on large episode collections.
DEFAULT_CACHE_SIZE = 20

CacheKey = tuple[str, str]


@dataclass(frozen=True)
class CacheStats:
    size: int
    puts: int
    hits: int
    misses: int
    evictions: int


class ResponseCache:
    """LRU map of ``(show name, language)`` to the service response."""

    def __init__(self, capacity: int = DEFAULT_CACHE_SIZE) -> None:
        if capacity < 1:
            raise ValueError("Cache capacity must be at least 1")
        self.capacity = capacity
        self._entries: OrderedDict[CacheKey, ServiceResponse] = OrderedDict()
        self._lock = threading.Lock()
        self._puts = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @staticmethod
    def key(show_name: str, language: str) -> CacheKey:
        return (show_name, language)

    def get(self, show_name: str, language: str) -> ServiceResponse | None:
        key = self.key(show_name, language)
        with self._lock:
            response = self._entries.get(key)
            if response is None:
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return response

    def put(self, show_name: str, language: str, response: ServiceResponse) -> None:
        key = self.key(show_name, language)
        with self._lock:
            self._entries[key] = response
            self._entries.move_to_end(key)
            self._puts += 1
            while len(self._entries) > self.capacity:
                self._entries.popitem(last=False)
                self._evictions += 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                size=len(self._entries),
                puts=self._puts,
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
            )

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._puts = self._hits = self._misses = self._evictions = 0
