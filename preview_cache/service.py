"""Batch preloading of cursor previews into the preview caches."""

from __future__ import annotations

import asyncio
import enum
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Protocol

import structlog

from preview_cache.monitoring import timed
from preview_cache.pending import PendingRequestTracker
from preview_cache.timed_cache import TimedCache


logger = structlog.get_logger(__name__)

SYSTEM_KEY_PREFIX = "system:"

# Decoded animation payload (frames plus timing). Never inspected here.
AniPreviewData = Any


@dataclass(frozen=True)
class CursorPreloadInfo:
    name: str
    image_path: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "CursorPreloadInfo":
        image_path = data.get("image_path", data.get("imagePath"))
        return cls(name=str(data["name"]), image_path=image_path or None)


class PreviewFetcher(Protocol):
    async def fetch_library_cursor_preview(self, file_path: str) -> str: ...

    async def fetch_system_cursor_preview(self, cursor_name: str) -> str: ...

    async def fetch_ani_preview_data(self, file_path: str) -> AniPreviewData: ...


class PreviewKind(str, enum.Enum):
    ANIMATED = "animated"
    LIBRARY = "library"
    SYSTEM = "system"


def classify(cursor: CursorPreloadInfo, animation_extension: str = ".ani") -> PreviewKind:
    path = cursor.image_path
    if path and path.lower().endswith(animation_extension.lower()):
        return PreviewKind.ANIMATED
    if path:
        return PreviewKind.LIBRARY
    return PreviewKind.SYSTEM


def cache_key_for(cursor: CursorPreloadInfo) -> str:
    """Cache key shared by preloads and on-demand lookups."""

    if cursor.image_path:
        return cursor.image_path
    return f"{SYSTEM_KEY_PREFIX}{cursor.name}"


class CursorPreviewService:
    """Starts preview fetches for cursors that are neither cached nor in flight."""

    def __init__(
        self,
        *,
        preview_cache: TimedCache[str],
        ani_preview_cache: TimedCache[AniPreviewData],
        pending_preview_requests: PendingRequestTracker[Optional[str]],
        pending_ani_requests: PendingRequestTracker[AniPreviewData],
        animation_extension: str = ".ani",
    ) -> None:
        self._preview_cache = preview_cache
        self._ani_preview_cache = ani_preview_cache
        self._pending_previews = pending_preview_requests
        self._pending_ani = pending_ani_requests
        self._animation_extension = animation_extension

    def preload_ani_preview(
        self, file_path: str, fetchers: PreviewFetcher
    ) -> Optional[asyncio.Future[AniPreviewData]]:
        """Start decoding an animated cursor in the background.

        Returns the tracked future, or ``None`` when the data is already
        cached or being fetched. Failures only surface to whoever awaits the
        returned future.
        """

        if self._ani_preview_cache.get(file_path) is not None:
            return None
        if self._pending_ani.has(file_path):
            return None

        async def load() -> AniPreviewData:
            data = await fetchers.fetch_ani_preview_data(file_path)
            self._ani_preview_cache.set(file_path, data)
            return data

        return self._pending_ani.set(file_path, load())

    @timed("preload.batch.complete")
    async def preload_cursor_previews(
        self,
        cursors: Iterable[CursorPreloadInfo | Mapping[str, Any]],
        fetchers: PreviewFetcher,
    ) -> None:
        """Preload every cursor; waits for static previews only.

        Animated cursors are decoded in the background and may still be
        running when this returns. A failed static preview is logged and
        left uncached. Plain mappings with ``name`` and ``image_path`` are
        accepted in place of ``CursorPreloadInfo``.
        """

        load_tasks: List[asyncio.Future[None]] = []

        for item in cursors:
            cursor = item if isinstance(item, CursorPreloadInfo) else CursorPreloadInfo.from_mapping(item)
            kind = classify(cursor, self._animation_extension)

            if kind is PreviewKind.ANIMATED:
                assert cursor.image_path is not None
                self.preload_ani_preview(cursor.image_path, fetchers)
                continue

            cache_key = cache_key_for(cursor)
            if self._preview_cache.get(cache_key) is not None:
                continue
            if self._pending_previews.has(cache_key):
                continue

            task = self._pending_previews.set(
                cache_key, self._load_static(cursor, kind, cache_key, fetchers)
            )
            load_tasks.append(task)

        if load_tasks:
            # Tracked tasks must survive cancellation of this batch.
            await asyncio.wait(load_tasks)

    async def _load_static(
        self,
        cursor: CursorPreloadInfo,
        kind: PreviewKind,
        cache_key: str,
        fetchers: PreviewFetcher,
    ) -> None:
        try:
            if kind is PreviewKind.LIBRARY:
                assert cursor.image_path is not None
                data_url = await fetchers.fetch_library_cursor_preview(cursor.image_path)
            else:
                data_url = await fetchers.fetch_system_cursor_preview(cursor.name)
        except Exception as exc:
            logger.warning(
                "preload.failed",
                cursor=cursor.name,
                kind=kind.value,
                key=cache_key,
                error=str(exc),
            )
            return
        self._preview_cache.set(cache_key, data_url)


__all__ = [
    "AniPreviewData",
    "CursorPreloadInfo",
    "CursorPreviewService",
    "PreviewFetcher",
    "PreviewKind",
    "SYSTEM_KEY_PREFIX",
    "cache_key_for",
    "classify",
]
