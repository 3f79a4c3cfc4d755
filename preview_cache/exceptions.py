"""Exceptions raised by the preview cache."""

from __future__ import annotations

from typing import Any, Mapping


class PreviewCacheError(RuntimeError):
    """Base error for preview cache failures."""


class PreviewFetchError(PreviewCacheError):
    """Raised when the host could not produce a preview."""

    def __init__(
        self,
        message: str,
        *,
        command: str | None = None,
        args: Mapping[str, Any] | None = None,
    ):
        super().__init__(message)
        self.command = command
        self.command_args = dict(args or {})
