"""Tests for consentlens.config — environment-driven settings."""

from __future__ import annotations

from collections.abc import Iterator

import pydantic
import pytest

from consentlens import config


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


class TestSettings:
    """Tests for Settings defaults and overrides."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("CONSENTLENS_API_BASE_URL", raising=False)
        settings = config.Settings()
        assert settings.api_base_url == "http://localhost:3000/api"
        assert settings.request_timeout_seconds == 10.0
        assert settings.retry_interval_seconds == 1800
        assert settings.highlight_banners is True

    def test_env_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CONSENTLENS_API_BASE_URL", "https://api.example.com/v1/")
        monkeypatch.setenv("CONSENTLENS_HIGHLIGHT_BANNERS", "false")
        settings = config.get_settings()
        assert settings.api_base_url == "https://api.example.com/v1"
        assert settings.highlight_banners is False

    def test_get_settings_is_cached(self) -> None:
        assert config.get_settings() is config.get_settings()

    def test_rejects_non_positive_timeout(self) -> None:
        with pytest.raises(pydantic.ValidationError):
            config.Settings(request_timeout_seconds=0)
