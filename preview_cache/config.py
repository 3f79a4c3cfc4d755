"""Configuration for preview cache sizing and expiry."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings


ROOT = Path(__file__).resolve().parents[1]

DEFAULT_EXPIRATION_MS = 30 * 60 * 1000
DEFAULT_PREVIEW_MAX_SIZE = 200
DEFAULT_ANI_MAX_SIZE = 100


class PreviewCacheSettings(BaseSettings):
    """Defaults used when a cache is built without explicit arguments."""

    expiration_ms: int = DEFAULT_EXPIRATION_MS
    preview_max_size: int = DEFAULT_PREVIEW_MAX_SIZE
    ani_max_size: int = DEFAULT_ANI_MAX_SIZE
    animation_extension: str = ".ani"
    log_level: str = "INFO"

    @field_validator("expiration_ms")
    @classmethod
    def validate_expiration(cls, value: int) -> int:
        if value < 0:
            raise ValueError("expiration_ms must not be negative")
        return value

    @field_validator("preview_max_size", "ani_max_size")
    @classmethod
    def validate_max_size(cls, value: int) -> int:
        if value < 1:
            raise ValueError("cache sizes must be at least 1")
        return value

    @field_validator("animation_extension")
    @classmethod
    def normalize_extension(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("animation_extension must not be empty")
        return value if value.startswith(".") else f".{value}"

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    model_config = {
        "env_prefix": "PREVIEW_CACHE_",
        "env_file": ROOT / ".env",
        "extra": "ignore",
        "case_sensitive": False,
    }


@lru_cache(maxsize=1)
def get_settings() -> PreviewCacheSettings:
    return PreviewCacheSettings()


__all__ = [
    "DEFAULT_ANI_MAX_SIZE",
    "DEFAULT_EXPIRATION_MS",
    "DEFAULT_PREVIEW_MAX_SIZE",
    "PreviewCacheSettings",
    "get_settings",
]
