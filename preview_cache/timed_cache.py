"""In-memory expiring cache with a bounded number of entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Generic, Optional, TypeVar

import structlog

from preview_cache.clock import Clock, wall_clock


logger = structlog.get_logger(__name__)

T = TypeVar("T")


@dataclass
class CacheEntry(Generic[T]):
    value: T
    timestamp: float

    def age(self, now_ms: float) -> float:
        return now_ms - self.timestamp

    def is_expired(self, now_ms: float, expiration_ms: float) -> bool:
        return self.age(now_ms) > expiration_ms


class TimedCache(Generic[T]):
    """Key/value store with lazy expiration and oldest-write eviction.

    Entries expire on read once their age is strictly greater than
    ``expiration_ms``. When the cache is full, ``set`` drops the entry with
    the oldest write timestamp; reads do not refresh an entry.
    """

    def __init__(self, expiration_ms: float, max_size: int, now: Clock | None = None) -> None:
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        if expiration_ms < 0:
            raise ValueError("expiration_ms must not be negative")
        self._expiration_ms = expiration_ms
        self._max_size = max_size
        self._now: Clock = now or wall_clock
        self._entries: Dict[str, CacheEntry[T]] = {}

    @property
    def expiration_ms(self) -> float:
        return self._expiration_ms

    @property
    def max_size(self) -> int:
        return self._max_size

    def get(self, key: str) -> Optional[T]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if entry.is_expired(self._now(), self._expiration_ms):
            del self._entries[key]
            return None
        return entry.value

    def set(self, key: str, value: T) -> None:
        self._evict_oldest_if_needed()
        self._entries[key] = CacheEntry(value=value, timestamp=self._now())

    def delete(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def _evict_oldest_if_needed(self) -> None:
        if len(self._entries) < self._max_size:
            return

        oldest_key: Optional[str] = None
        oldest_time = float("inf")
        for key, entry in self._entries.items():
            if entry.timestamp < oldest_time:
                oldest_time = entry.timestamp
                oldest_key = key

        if oldest_key is not None:
            del self._entries[oldest_key]
            logger.debug("cache.evicted", key=oldest_key, max_size=self._max_size)


__all__ = ["CacheEntry", "TimedCache"]
