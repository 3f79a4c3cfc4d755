"""Preview cache package exports."""

from preview_cache.clock import Clock, ManualClock, wall_clock
from preview_cache.commands import InvokeFetchers
from preview_cache.composite import PreviewCache, create_preview_cache, get_default_cache, reset_default_cache
from preview_cache.config import get_settings
from preview_cache.exceptions import PreviewCacheError, PreviewFetchError
from preview_cache.logging import configure_logging
from preview_cache.pending import PendingRequestTracker
from preview_cache.service import CursorPreloadInfo, PreviewFetcher
from preview_cache.timed_cache import TimedCache
from preview_cache import api

__all__ = [
    "Clock",
    "CursorPreloadInfo",
    "InvokeFetchers",
    "ManualClock",
    "PendingRequestTracker",
    "PreviewCache",
    "PreviewCacheError",
    "PreviewFetchError",
    "PreviewFetcher",
    "TimedCache",
    "api",
    "configure_logging",
    "create_preview_cache",
    "get_default_cache",
    "get_settings",
    "reset_default_cache",
    "wall_clock",
]
