"""
Remote privacy policy fetching.
Downloads a policy page and reduces it to its main-content text,
ready to be scored verbatim.
"""

from __future__ import annotations

import asyncio
import re

import aiohttp
from bs4 import BeautifulSoup

from consentlens.config import get_settings
from consentlens.models import policy
from consentlens.utils import errors, logger

log = logger.create_logger("Policy-Fetch")

# ============================================================================
# Extraction
# ============================================================================

_FETCH_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    ),
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}

# Page chrome removed before looking for the content area.
_BOILERPLATE_SELECTOR = "script, style, nav, header, footer, .header, .footer, .nav, .navigation"

# First match wins; falls back to <body>.
_MAIN_CONTENT_SELECTOR = "main, .main, .content, .container, .wrapper, article, .article"

_WHITESPACE_RE = re.compile(r"\s+")


def extract_main_text(html: str) -> str:
    """Return the whitespace-collapsed main-content text of *html*.

    Raises:
        ValueError: If the document has no ``<body>``.
    """
    soup = BeautifulSoup(html, "html.parser")
    for element in soup.select(_BOILERPLATE_SELECTOR):
        element.decompose()

    body = soup.body
    if body is None:
        raise ValueError("No body element found")

    main_content = body.select_one(_MAIN_CONTENT_SELECTOR) or body
    return _WHITESPACE_RE.sub(" ", main_content.get_text()).strip()


# ============================================================================
# Fetching
# ============================================================================


async def fetch_policy_text(
    url: str,
    http_session: aiohttp.ClientSession | None = None,
    timeout_seconds: float | None = None,
) -> policy.PolicyFetchResult:
    """Fetch *url* and extract its main-content text.

    Never raises: network errors, timeouts, non-2xx statuses and
    unparsable pages are returned as a failed result.

    Args:
        url: The policy page to fetch.
        http_session: Shared session to reuse; a short-lived one is
            created when omitted.
        timeout_seconds: Total request timeout; defaults to the
            configured request timeout.

    Returns:
        A :class:`PolicyFetchResult`.
    """
    timeout = aiohttp.ClientTimeout(total=timeout_seconds or get_settings().request_timeout_seconds)
    log.info("Fetching privacy policy", {"url": url})

    try:
        if http_session is None:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                html = await _get_html(session, url, timeout)
        else:
            html = await _get_html(http_session, url, timeout)
        content = extract_main_text(html)
    except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as error:
        message = errors.get_error_message(error)
        log.error("Error fetching privacy policy", {"url": url, "error": message})
        return policy.PolicyFetchResult(success=False, url=url, error=message)

    log.success("Privacy policy extracted", {"url": url, "chars": len(content)})
    return policy.PolicyFetchResult(success=True, url=url, content=content, length=len(content))


async def _get_html(session: aiohttp.ClientSession, url: str, timeout: aiohttp.ClientTimeout) -> str:
    async with session.get(url, headers=_FETCH_HEADERS, timeout=timeout) as response:
        if response.status >= 400:
            raise aiohttp.ClientResponseError(
                response.request_info,
                response.history,
                status=response.status,
                message=f"HTTP {response.status}: {response.reason}",
            )
        return await response.text()
