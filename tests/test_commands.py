from __future__ import annotations

from typing import Any, Dict, List, Tuple

import pytest

from preview_cache.commands import (
    GET_ANI_PREVIEW_DATA,
    GET_LIBRARY_CURSOR_PREVIEW,
    GET_SYSTEM_CURSOR_PREVIEW,
    InvokeFetchers,
)
from preview_cache.exceptions import PreviewCacheError, PreviewFetchError


class FakeInvoke:
    def __init__(self, result: Any = "data:image/png;base64,abc", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    async def __call__(self, command: str, args: Dict[str, Any] | None = None) -> Any:
        self.calls.append((command, dict(args or {})))
        if self.error is not None:
            raise self.error
        return self.result


@pytest.mark.asyncio
async def test_library_preview_uses_file_path_argument() -> None:
    invoke = FakeInvoke()
    fetchers = InvokeFetchers(invoke)

    assert await fetchers.fetch_library_cursor_preview("C:\\custom.cur") == "data:image/png;base64,abc"
    assert invoke.calls == [(GET_LIBRARY_CURSOR_PREVIEW, {"file_path": "C:\\custom.cur"})]


@pytest.mark.asyncio
async def test_system_preview_uses_cursor_name_argument() -> None:
    invoke = FakeInvoke()
    await InvokeFetchers(invoke).fetch_system_cursor_preview("IBeam")
    assert invoke.calls == [(GET_SYSTEM_CURSOR_PREVIEW, {"cursor_name": "IBeam"})]


@pytest.mark.asyncio
async def test_ani_data_is_passed_through_untouched() -> None:
    payload = {"frames": ["f"], "timing": [10], "anything": object()}
    invoke = FakeInvoke(result=payload)

    assert await InvokeFetchers(invoke).fetch_ani_preview_data("wait.ani") is payload
    assert invoke.calls == [(GET_ANI_PREVIEW_DATA, {"file_path": "wait.ani"})]


@pytest.mark.asyncio
async def test_invoke_failure_is_wrapped() -> None:
    original = ConnectionError("backend gone")
    fetchers = InvokeFetchers(FakeInvoke(error=original))

    with pytest.raises(PreviewFetchError) as excinfo:
        await fetchers.fetch_system_cursor_preview("Normal")

    assert excinfo.value.__cause__ is original
    assert excinfo.value.command == GET_SYSTEM_CURSOR_PREVIEW
    assert excinfo.value.command_args == {"cursor_name": "Normal"}
    assert isinstance(excinfo.value, PreviewCacheError)


@pytest.mark.asyncio
async def test_non_string_preview_is_rejected() -> None:
    fetchers = InvokeFetchers(FakeInvoke(result={"not": "a data url"}))

    with pytest.raises(PreviewFetchError, match="expected str"):
        await fetchers.fetch_library_cursor_preview("x.cur")
