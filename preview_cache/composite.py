"""Preview caches for static cursor images and decoded animations."""

from __future__ import annotations

import asyncio
from functools import lru_cache
from typing import Awaitable, Callable, Iterable, Optional, TypedDict

from preview_cache.clock import Clock, wall_clock
from preview_cache.commands import Invoke, InvokeFetchers
from preview_cache.config import PreviewCacheSettings, get_settings
from preview_cache.pending import PendingRequestTracker
from preview_cache.service import (
    AniPreviewData,
    CursorPreloadInfo,
    CursorPreviewService,
    PreviewFetcher,
)
from preview_cache.timed_cache import TimedCache


class CacheStats(TypedDict):
    size: int
    maxSize: int
    aniSize: int
    aniMaxSize: int


class ExtendedCacheStats(CacheStats):
    pendingRequests: int
    pendingAniRequests: int


class PreviewCache:
    """Static and animated preview caches plus their in-flight request trackers.

    Static previews are keyed by file path, or ``"system:<name>"`` for
    built-in cursors. Animated previews are keyed by file path.
    """

    def __init__(
        self,
        *,
        expiration_ms: float,
        preview_max_size: int,
        ani_max_size: int,
        now: Clock = wall_clock,
        animation_extension: str = ".ani",
    ) -> None:
        self._previews: TimedCache[str] = TimedCache(expiration_ms, preview_max_size, now)
        self._ani_previews: TimedCache[AniPreviewData] = TimedCache(expiration_ms, ani_max_size, now)
        self._pending: PendingRequestTracker[Optional[str]] = PendingRequestTracker()
        self._pending_ani: PendingRequestTracker[AniPreviewData] = PendingRequestTracker()
        self._service = CursorPreviewService(
            preview_cache=self._previews,
            ani_preview_cache=self._ani_previews,
            pending_preview_requests=self._pending,
            pending_ani_requests=self._pending_ani,
            animation_extension=animation_extension,
        )

    # Static previews

    def get_cached_preview(self, key: str) -> Optional[str]:
        return self._previews.get(key)

    def set_cached_preview(self, key: str, data_url: str) -> None:
        self._previews.set(key, data_url)

    def invalidate_preview(self, key: str) -> None:
        self._previews.delete(key)

    def clear_preview_cache(self) -> None:
        """Clear both the static and the animated caches."""

        self._previews.clear()
        self._ani_previews.clear()

    # Animated previews

    def get_cached_ani_preview(self, file_path: str) -> Optional[AniPreviewData]:
        return self._ani_previews.get(file_path)

    def set_cached_ani_preview(self, file_path: str, data: AniPreviewData) -> None:
        self._ani_previews.set(file_path, data)

    # In-flight requests

    def has_pending_request(self, key: str) -> bool:
        return self._pending.has(key)

    def get_pending_request(self, key: str) -> Optional[asyncio.Future[Optional[str]]]:
        return self._pending.get(key)

    def set_pending_request(
        self, key: str, request: Awaitable[Optional[str]]
    ) -> asyncio.Future[Optional[str]]:
        return self._pending.set(key, request)

    def has_pending_ani_request(self, file_path: str) -> bool:
        return self._pending_ani.has(file_path)

    def get_pending_ani_request(self, file_path: str) -> Optional[asyncio.Future[AniPreviewData]]:
        return self._pending_ani.get(file_path)

    def set_pending_ani_request(
        self, file_path: str, request: Awaitable[AniPreviewData]
    ) -> asyncio.Future[AniPreviewData]:
        return self._pending_ani.set(file_path, request)

    # On-demand loading

    async def fetch_preview(
        self, key: str, fetch: Callable[[], Awaitable[str]]
    ) -> Optional[str]:
        """Return the preview for ``key``, fetching it at most once.

        Joins an in-flight request when there is one. A failure of a request
        started here propagates to the caller. Returns ``None`` only when a
        joined preload finished without caching a value.
        """

        cached = self._previews.get(key)
        if cached is not None:
            return cached

        pending = self._pending.get(key)
        if pending is None:

            async def load() -> str:
                data_url = await fetch()
                self._previews.set(key, data_url)
                return data_url

            pending = self._pending.set(key, load())

        result = await asyncio.shield(pending)
        if result is None:
            return self._previews.get(key)
        return result

    async def fetch_ani_preview(
        self, file_path: str, fetch: Callable[[], Awaitable[AniPreviewData]]
    ) -> AniPreviewData:
        cached = self._ani_previews.get(file_path)
        if cached is not None:
            return cached

        pending = self._pending_ani.get(file_path)
        if pending is None:

            async def load() -> AniPreviewData:
                data = await fetch()
                self._ani_previews.set(file_path, data)
                return data

            pending = self._pending_ani.set(file_path, load())

        return await asyncio.shield(pending)

    # Preloading

    def preload_ani_preview(
        self, file_path: str, fetchers: PreviewFetcher
    ) -> Optional[asyncio.Future[AniPreviewData]]:
        return self._service.preload_ani_preview(file_path, fetchers)

    async def preload_batch(
        self, cursors: Iterable[CursorPreloadInfo], fetchers: PreviewFetcher
    ) -> None:
        await self._service.preload_cursor_previews(cursors, fetchers)

    async def preload_cursor_previews(
        self, cursors: Iterable[CursorPreloadInfo], invoke: Invoke
    ) -> None:
        """Preload through the host's ``invoke(command, args)`` function."""

        await self.preload_batch(cursors, InvokeFetchers(invoke))

    # Statistics

    def get_cache_stats(self) -> CacheStats:
        return {
            "size": self._previews.size(),
            "maxSize": self._previews.max_size,
            "aniSize": self._ani_previews.size(),
            "aniMaxSize": self._ani_previews.max_size,
        }

    def get_extended_cache_stats(self) -> ExtendedCacheStats:
        return {
            **self.get_cache_stats(),
            "pendingRequests": self._pending.size(),
            "pendingAniRequests": self._pending_ani.size(),
        }


def create_preview_cache(
    *,
    expiration_ms: float | None = None,
    preview_max_size: int | None = None,
    ani_max_size: int | None = None,
    now: Clock | None = None,
    settings: PreviewCacheSettings | None = None,
) -> PreviewCache:
    """Build an isolated cache; unset arguments come from settings."""

    settings = settings or get_settings()
    return PreviewCache(
        expiration_ms=settings.expiration_ms if expiration_ms is None else expiration_ms,
        preview_max_size=settings.preview_max_size if preview_max_size is None else preview_max_size,
        ani_max_size=settings.ani_max_size if ani_max_size is None else ani_max_size,
        now=now or wall_clock,
        animation_extension=settings.animation_extension,
    )


@lru_cache(maxsize=1)
def get_default_cache() -> PreviewCache:
    return create_preview_cache()


def reset_default_cache() -> None:
    get_default_cache.cache_clear()


__all__ = [
    "CacheStats",
    "ExtendedCacheStats",
    "PreviewCache",
    "create_preview_cache",
    "get_default_cache",
    "reset_default_cache",
]
