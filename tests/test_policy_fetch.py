"""Tests for consentlens.services.policy_fetch — fetching and reducing policy pages."""

from __future__ import annotations

import asyncio
from unittest import mock

import aiohttp
import pytest

from consentlens.services import policy_fetch

POLICY_HTML = """
<html>
<head><title>Privacy</title><style>p { color: red; }</style></head>
<body>
<header>Site header</header>
<nav>Home | About</nav>
<div class="content">
<h1>Privacy Policy</h1>
<p>We   collect
   minimal data.</p>
<script>var tracking = true;</script>
</div>
<footer>Copyright</footer>
</body>
</html>
"""


def _session(
    status: int = 200,
    body: str = "",
    reason: str = "OK",
    error: BaseException | None = None,
) -> mock.MagicMock:
    response = mock.MagicMock()
    response.status = status
    response.reason = reason
    response.text = mock.AsyncMock(return_value=body)

    context = mock.MagicMock()
    context.__aenter__ = mock.AsyncMock(return_value=response)
    context.__aexit__ = mock.AsyncMock(return_value=False)

    session = mock.MagicMock()
    if error is not None:
        session.get = mock.MagicMock(side_effect=error)
    else:
        session.get = mock.MagicMock(return_value=context)
    return session


class TestExtractMainText:
    """Tests for extract_main_text()."""

    def test_main_content_only(self) -> None:
        assert policy_fetch.extract_main_text(POLICY_HTML) == "Privacy Policy We collect minimal data."

    def test_falls_back_to_body(self) -> None:
        html = "<html><body><header>Top</header><p>Only  the body.</p><footer>Bottom</footer></body></html>"
        assert policy_fetch.extract_main_text(html) == "Only the body."

    def test_first_content_area_wins(self) -> None:
        html = "<body><article>First</article><main>Second</main></body>"
        assert policy_fetch.extract_main_text(html) == "First"

    def test_no_body(self) -> None:
        with pytest.raises(ValueError, match="No body element found"):
            policy_fetch.extract_main_text("<p>fragment</p>")


class TestFetchPolicyText:
    """Tests for fetch_policy_text()."""

    def test_success(self) -> None:
        session = _session(body=POLICY_HTML)
        result = asyncio.run(policy_fetch.fetch_policy_text("https://example.com/privacy", http_session=session))
        assert result.success is True
        assert result.content == "Privacy Policy We collect minimal data."
        assert result.length == len(result.content)
        assert result.error is None

        args, kwargs = session.get.call_args
        assert args == ("https://example.com/privacy",)
        assert "Mozilla/5.0" in kwargs["headers"]["User-Agent"]

    def test_http_error_status(self) -> None:
        session = _session(status=404, reason="Not Found")
        result = asyncio.run(policy_fetch.fetch_policy_text("https://example.com/missing", http_session=session))
        assert result.success is False
        assert result.content == ""
        assert "404" in (result.error or "")

    @pytest.mark.parametrize(
        "error",
        [aiohttp.ClientConnectionError("connection refused"), asyncio.TimeoutError()],
    )
    def test_network_errors(self, error: BaseException) -> None:
        session = _session(error=error)
        result = asyncio.run(policy_fetch.fetch_policy_text("https://example.com/privacy", http_session=session))
        assert result.success is False
        assert result.error

    def test_page_without_body(self) -> None:
        session = _session(body="<p>no body</p>")
        result = asyncio.run(policy_fetch.fetch_policy_text("https://example.com/privacy", http_session=session))
        assert result.success is False
        assert result.error == "No body element found"

    def test_api_shape(self) -> None:
        session = _session(body=POLICY_HTML)
        result = asyncio.run(policy_fetch.fetch_policy_text("https://example.com/privacy", http_session=session))
        assert set(result.model_dump(by_alias=True, exclude_none=True)) == {"success", "url", "content", "length"}
