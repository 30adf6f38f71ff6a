"""
Runtime configuration.

Uses ``pydantic_settings.BaseSettings`` so every setting can be
overridden with a ``CONSENTLENS_``-prefixed environment variable
(for example ``CONSENTLENS_API_BASE_URL``).  The app entry point
loads a ``.env`` file first.
"""

from __future__ import annotations

import functools

import pydantic
import pydantic_settings


class Settings(pydantic_settings.BaseSettings):
    """Settings for the page scanner, collaborators and scoring service.

    Attributes:
        api_base_url: Base URL of the banner storage / analysis API.
        request_timeout_seconds: Total timeout for every outbound
            HTTP request.
        retry_interval_seconds: Period of the failed-upload sweep.
        highlight_banners: Outline accepted banners on the page.
        snapshot_max_text: Per-node cap on captured ``textContent``.
        snapshot_max_html: Cap on the ``innerHTML`` read for an accepted banner.
        host: Bind address for the scoring service.
        port: Bind port for the scoring service.
    """

    model_config = pydantic_settings.SettingsConfigDict(env_prefix="CONSENTLENS_", extra="ignore")

    api_base_url: str = "http://localhost:3000/api"
    request_timeout_seconds: float = pydantic.Field(default=10.0, gt=0)
    retry_interval_seconds: float = pydantic.Field(default=30 * 60, gt=0)
    highlight_banners: bool = True
    snapshot_max_text: int = pydantic.Field(default=20_000, ge=0)
    snapshot_max_html: int = pydantic.Field(default=50_000, ge=0)
    host: str = "127.0.0.1"
    port: int = 8000

    @pydantic.field_validator("api_base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, read once from the environment."""
    return Settings()
