"""Registry of in-flight async operations used to coalesce duplicate work."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Dict, Generic, List, Optional, TypeVar

import structlog


logger = structlog.get_logger(__name__)

T = TypeVar("T")


class PendingRequestTracker(Generic[T]):
    """Maps a key to the single future currently producing its value.

    Entries remove themselves when their future settles. Callers must pair
    ``has`` and ``set`` without awaiting in between so that at most one
    operation per key is outstanding.
    """

    def __init__(self) -> None:
        self._pending: Dict[str, asyncio.Future[T]] = {}

    def has(self, key: str) -> bool:
        return key in self._pending

    def get(self, key: str) -> Optional[asyncio.Future[T]]:
        return self._pending.get(key)

    def set(self, key: str, awaitable: Awaitable[T]) -> asyncio.Future[T]:
        """Track ``awaitable`` under ``key`` and return the tracked future.

        Coroutines are scheduled on the running loop. The returned future is
        the same object later handed out by ``get``.
        """

        future = asyncio.ensure_future(awaitable)
        self._pending[key] = future
        future.add_done_callback(lambda done: self._settle(key, done))
        return future

    def size(self) -> int:
        return len(self._pending)

    def keys(self) -> List[str]:
        return list(self._pending)

    def _settle(self, key: str, future: asyncio.Future[T]) -> None:
        if self._pending.get(key) is future:
            del self._pending[key]
        if future.cancelled():
            return
        # Mark the exception as retrieved; awaiters still receive it.
        exc = future.exception()
        if exc is not None:
            logger.debug("pending.failed", key=key, error=str(exc))


__all__ = ["PendingRequestTracker"]
