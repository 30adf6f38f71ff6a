"""Tests for consentlens.utils.errors — error message extraction."""

from __future__ import annotations

import asyncio

from consentlens.utils.errors import get_error_message


class TestGetErrorMessage:
    """Tests for get_error_message()."""

    def test_exception_with_message(self) -> None:
        assert get_error_message(ValueError("something broke")) == "something broke"

    def test_exception_without_message(self) -> None:
        assert get_error_message(ValueError()) == "ValueError"

    def test_timeout_without_message(self) -> None:
        assert get_error_message(asyncio.TimeoutError()) == "TimeoutError"

    def test_custom_exception(self) -> None:
        class CustomError(Exception):
            pass

        assert get_error_message(CustomError("custom")) == "custom"

    def test_non_exception(self) -> None:
        assert get_error_message("just a string") == "Unknown error"
        assert get_error_message(None) == "Unknown error"
