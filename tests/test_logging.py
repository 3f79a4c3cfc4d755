from __future__ import annotations

import io
import json
import logging

import pytest
import structlog

from preview_cache.logging import configure_logging
from preview_cache.monitoring import timed


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    configure_logging(handlers=[logging.StreamHandler(stream)], level="DEBUG")
    yield stream
    structlog.reset_defaults()
    logging.getLogger().handlers.clear()


def _events(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


def _last(stream: io.StringIO, event: str) -> dict:
    return [entry for entry in _events(stream) if entry["event"] == event][-1]


def test_configure_logging_emits_json(log_stream) -> None:
    structlog.get_logger("preview_cache.test").warning("preload.failed", key="system:IBeam")

    event = _last(log_stream, "preload.failed")
    assert event["key"] == "system:IBeam"
    assert event["level"] == "warning"
    assert event["logger"] == "preview_cache.test"
    assert "timestamp" in event


def test_stdlib_records_are_rendered_as_json(log_stream) -> None:
    logging.getLogger("asyncio").debug("Using selector: %s", "EpollSelector")

    event = _last(log_stream, "Using selector: EpollSelector")
    assert event["level"] == "debug"
    assert event["logger"] == "asyncio"


@pytest.mark.asyncio
async def test_timed_logs_duration(log_stream) -> None:
    @timed("sample.complete")
    async def work(value: int) -> int:
        return value * 2

    assert await work(21) == 42

    event = _last(log_stream, "sample.complete")
    assert event["function"] == "work"
    assert event["duration_seconds"] >= 0


@pytest.mark.asyncio
async def test_timed_logs_and_reraises_errors(log_stream) -> None:
    @timed("sample.complete")
    async def broken() -> None:
        raise ValueError("bad input")

    with pytest.raises(ValueError):
        await broken()

    event = _last(log_stream, "sample.complete.error")
    assert event["error"] == "bad input"
    assert "exception" in event
