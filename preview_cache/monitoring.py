"""Timing helpers for async cache operations."""

from __future__ import annotations

import time
from functools import wraps
from typing import Any, Awaitable, Callable, TypeVar

import structlog


FuncType = TypeVar("FuncType", bound=Callable[..., Awaitable[Any]])


def timed(event: str) -> Callable[[FuncType], FuncType]:
    """Log how long the wrapped coroutine function took under ``event``."""

    def decorator(func: FuncType) -> FuncType:
        @wraps(func)
        async def wrapper(*args, **kwargs):
            logger = structlog.get_logger(func.__module__)
            started = time.perf_counter()
            try:
                result = await func(*args, **kwargs)
            except Exception as exc:
                duration = time.perf_counter() - started
                logger.exception(
                    f"{event}.error",
                    function=func.__name__,
                    duration_seconds=duration,
                    error=str(exc),
                )
                raise
            duration = time.perf_counter() - started
            logger.info(event, function=func.__name__, duration_seconds=duration)
            return result

        return wrapper  # type: ignore[return-value]

    return decorator
