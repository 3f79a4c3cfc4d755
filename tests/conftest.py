from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Tuple

import pytest

from preview_cache.clock import ManualClock
from preview_cache.composite import create_preview_cache
from preview_cache.config import get_settings


class RecordingFetchers:
    """Preview fetcher that records calls and can be held open or made to fail."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []
        self.failures: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.ani_data: Dict[str, Any] = {}

    def hold(self, arg: str) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[arg] = gate
        return gate

    async def _run(self, kind: str, arg: str, result: Any) -> Any:
        self.calls.append((kind, arg))
        gate = self.gates.get(arg)
        if gate is not None:
            await gate.wait()
        if arg in self.failures:
            raise self.failures[arg]
        return result

    async def fetch_library_cursor_preview(self, file_path: str) -> str:
        return await self._run("library", file_path, f"data:library:{file_path}")

    async def fetch_system_cursor_preview(self, cursor_name: str) -> str:
        return await self._run("system", cursor_name, f"data:system:{cursor_name}")

    async def fetch_ani_preview_data(self, file_path: str) -> Any:
        data = self.ani_data.get(file_path, {"frames": [file_path], "timing": [100]})
        return await self._run("ani", file_path, data)


@pytest.fixture(autouse=True)
def fresh_settings():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def cache(clock: ManualClock):
    return create_preview_cache(expiration_ms=1000, preview_max_size=3, ani_max_size=2, now=clock)


@pytest.fixture
def fetchers() -> RecordingFetchers:
    return RecordingFetchers()
