"""
DOM snapshot capture for the banner detector.
Serializes a live Playwright page into a read-only ``DomSnapshot``
reads the markup of accepted banners and applies their cosmetic
outline.
"""

from __future__ import annotations

import pathlib

import pydantic
from playwright import async_api

from consentlens.config import get_settings
from consentlens.consent import constants
from consentlens.models import dom
from consentlens.utils import errors, logger

log = logger.create_logger("DOM-Snapshot")

_SCRIPTS_DIR = pathlib.Path(__file__).parent / "scripts"
_SNAPSHOT_JS = (_SCRIPTS_DIR / "snapshot_dom.js").read_text()
_HIGHLIGHT_JS = (_SCRIPTS_DIR / "highlight_element.js").read_text()
_ELEMENT_HTML_JS = (_SCRIPTS_DIR / "element_html.js").read_text()


async def capture_snapshot(
    page: async_api.Page,
    selector_groups: dict[str, str] | None = None,
    max_text: int | None = None,
) -> dom.DomSnapshot:
    """Serialize the current DOM of *page*.

    Never raises.  A page that cannot be evaluated (closed,
    navigating, crashed) yields an empty snapshot, which the detector
    treats as "no candidates".

    Args:
        page: The Playwright page to read.
        selector_groups: Selector lists the page matches each element
            against, by group name.  Defaults to the production rules.
        max_text: Per-element ``textContent`` cap.

    Returns:
        The captured :class:`DomSnapshot`.
    """
    settings = get_settings()
    options = {
        "maxText": settings.snapshot_max_text if max_text is None else max_text,
        "selectors": constants.DEFAULT_RULES.selector_groups() if selector_groups is None else selector_groups,
    }

    try:
        raw = await page.evaluate(_SNAPSHOT_JS, options)
    except async_api.Error as error:
        log.warn("Snapshot capture failed", {"url": page.url, "error": errors.get_error_message(error)})
        return dom.DomSnapshot.empty(page.url)

    if not isinstance(raw, dict):
        log.warn("Snapshot capture returned no data", {"url": page.url})
        return dom.DomSnapshot.empty(page.url)

    try:
        snapshot = dom.DomSnapshot.model_validate(raw)
    except pydantic.ValidationError as error:
        log.warn("Malformed snapshot discarded", {"url": page.url, "errors": error.error_count()})
        return dom.DomSnapshot.empty(page.url)

    log.debug("Captured DOM snapshot", {"url": snapshot.url, "nodes": len(snapshot.nodes)})
    return snapshot


async def highlight_element(page: async_api.Page, index: int) -> bool:
    """Outline the element with snapshot *index*.  Returns ``False`` if it is gone."""
    try:
        return bool(await page.evaluate(_HIGHLIGHT_JS, index))
    except async_api.Error as error:
        log.debug("Highlight failed", {"index": index, "error": errors.get_error_message(error)})
        return False


async def element_html(page: async_api.Page, index: int, max_html: int | None = None) -> str:
    """Return the ``innerHTML`` of the element with snapshot *index*, or ``""`` if it is gone."""
    cap = get_settings().snapshot_max_html if max_html is None else max_html
    try:
        html = await page.evaluate(_ELEMENT_HTML_JS, {"index": index, "maxHtml": cap})
    except async_api.Error as error:
        log.debug("Reading element HTML failed", {"index": index, "error": errors.get_error_message(error)})
        return ""
    return html if isinstance(html, str) else ""
