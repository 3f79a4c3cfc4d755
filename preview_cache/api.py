"""Module-level access to the process-wide preview cache."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Iterable, Optional

from preview_cache.commands import Invoke
from preview_cache.composite import CacheStats, ExtendedCacheStats, get_default_cache
from preview_cache.service import AniPreviewData, CursorPreloadInfo


def get_cached_preview(key: str) -> Optional[str]:
    return get_default_cache().get_cached_preview(key)


def set_cached_preview(key: str, data_url: str) -> None:
    get_default_cache().set_cached_preview(key, data_url)


def invalidate_preview(key: str) -> None:
    """Drop a static preview, e.g. after the cursor file changed."""

    get_default_cache().invalidate_preview(key)


def clear_preview_cache() -> None:
    get_default_cache().clear_preview_cache()


def get_cache_stats() -> CacheStats:
    return get_default_cache().get_cache_stats()


def get_cached_ani_preview(file_path: str) -> Optional[AniPreviewData]:
    return get_default_cache().get_cached_ani_preview(file_path)


def set_cached_ani_preview(file_path: str, data: AniPreviewData) -> None:
    get_default_cache().set_cached_ani_preview(file_path, data)


def has_pending_request(key: str) -> bool:
    return get_default_cache().has_pending_request(key)


def get_pending_request(key: str) -> Optional[asyncio.Future[Optional[str]]]:
    return get_default_cache().get_pending_request(key)


def set_pending_request(
    key: str, request: Awaitable[Optional[str]]
) -> asyncio.Future[Optional[str]]:
    return get_default_cache().set_pending_request(key, request)


def has_pending_ani_request(file_path: str) -> bool:
    return get_default_cache().has_pending_ani_request(file_path)


def get_pending_ani_request(file_path: str) -> Optional[asyncio.Future[AniPreviewData]]:
    return get_default_cache().get_pending_ani_request(file_path)


def set_pending_ani_request(
    file_path: str, request: Awaitable[AniPreviewData]
) -> asyncio.Future[AniPreviewData]:
    return get_default_cache().set_pending_ani_request(file_path, request)


async def preload_cursor_previews(cursors: Iterable[CursorPreloadInfo], invoke: Invoke) -> None:
    """Preload previews for ``cursors``; returns once static previews settle."""

    await get_default_cache().preload_cursor_previews(cursors, invoke)


def get_extended_cache_stats() -> ExtendedCacheStats:
    return get_default_cache().get_extended_cache_stats()


__all__ = [
    "clear_preview_cache",
    "get_cache_stats",
    "get_cached_ani_preview",
    "get_cached_preview",
    "get_extended_cache_stats",
    "get_pending_ani_request",
    "get_pending_request",
    "has_pending_ani_request",
    "has_pending_request",
    "invalidate_preview",
    "preload_cursor_previews",
    "set_cached_ani_preview",
    "set_cached_preview",
    "set_pending_ani_request",
    "set_pending_request",
]
