"""Injectable time sources for cache bookkeeping."""

from __future__ import annotations

import time
from typing import Callable


Clock = Callable[[], float]


def wall_clock() -> float:
    """Current wall-clock time in milliseconds."""

    return time.time() * 1000


class ManualClock:
    """Clock whose value only moves when told to."""

    def __init__(self, start_ms: float = 0) -> None:
        self.now_ms = start_ms

    def __call__(self) -> float:
        return self.now_ms

    def set(self, now_ms: float) -> None:
        self.now_ms = now_ms

    def advance(self, delta_ms: float) -> float:
        self.now_ms += delta_ms
        return self.now_ms


__all__ = ["Clock", "ManualClock", "wall_clock"]
