"""Adapter from the host's generic ``invoke`` call to typed preview fetchers."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict

from preview_cache.exceptions import PreviewFetchError
from preview_cache.service import AniPreviewData


GET_LIBRARY_CURSOR_PREVIEW = "get_library_cursor_preview"
GET_SYSTEM_CURSOR_PREVIEW = "get_system_cursor_preview"
GET_ANI_PREVIEW_DATA = "get_ani_preview_data"

Invoke = Callable[..., Awaitable[Any]]


class InvokeFetchers:
    """``PreviewFetcher`` backed by named host commands."""

    def __init__(self, invoke: Invoke) -> None:
        self._invoke = invoke

    async def _call(self, command: str, args: Dict[str, Any]) -> Any:
        try:
            return await self._invoke(command, args)
        except Exception as exc:
            raise PreviewFetchError(
                f"{command} failed: {exc}", command=command, args=args
            ) from exc

    async def _call_for_data_url(self, command: str, args: Dict[str, Any]) -> str:
        result = await self._call(command, args)
        if not isinstance(result, str):
            raise PreviewFetchError(
                f"{command} returned {type(result).__name__}, expected str",
                command=command,
                args=args,
            )
        return result

    async def fetch_library_cursor_preview(self, file_path: str) -> str:
        return await self._call_for_data_url(GET_LIBRARY_CURSOR_PREVIEW, {"file_path": file_path})

    async def fetch_system_cursor_preview(self, cursor_name: str) -> str:
        return await self._call_for_data_url(GET_SYSTEM_CURSOR_PREVIEW, {"cursor_name": cursor_name})

    async def fetch_ani_preview_data(self, file_path: str) -> AniPreviewData:
        return await self._call(GET_ANI_PREVIEW_DATA, {"file_path": file_path})


__all__ = [
    "GET_ANI_PREVIEW_DATA",
    "GET_LIBRARY_CURSOR_PREVIEW",
    "GET_SYSTEM_CURSOR_PREVIEW",
    "Invoke",
    "InvokeFetchers",
]
