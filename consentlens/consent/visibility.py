"""Visibility and banner-position checks for candidate elements."""

from __future__ import annotations

from collections.abc import Sequence

from consentlens.consent import constants
from consentlens.models import dom


def has_cookie_hints(node: dom.DomNode, keywords: Sequence[str] = constants.COOKIE_KEYWORDS) -> bool:
    """``True`` when the text carries a cookie keyword or class/id says ``cookie``."""
    text = node.text.lower()
    if any(keyword in text for keyword in keywords):
        return True
    return "cookie" in node.class_name.lower() or "cookie" in node.element_id.lower()


def is_element_visible(node: dom.DomNode | None, keywords: Sequence[str] = constants.COOKIE_KEYWORDS) -> bool:
    """Return whether *node* should be treated as visible.

    Hidden by CSS (``display: none``, ``visibility: hidden`` or
    near-zero opacity) means not visible.  A zero-size box is only
    visible when the element looks cookie-related, which catches
    banners parked off-screen with a transform.
    """
    if node is None:
        return False

    style = node.style
    if style.display == "none" or style.visibility == "hidden":
        return False
    if style.opacity_value <= constants.MIN_OPACITY:
        return False

    if node.rect.width == 0 or node.rect.height == 0:
        return has_cookie_hints(node, keywords)
    return True


def is_likely_banner_position(
    node: dom.DomNode,
    viewport: dom.Viewport,
    keywords: Sequence[str] = constants.COOKIE_KEYWORDS,
) -> bool:
    """Return whether *node* is positioned the way banners usually are.

    The element must be visible and ``fixed``, ``sticky`` or
    ``absolute``, and its box must look like one of: a top banner,
    a bottom banner, a corner/modal card or a full overlay with a
    high z-index.
    """
    if not is_element_visible(node, keywords):
        return False
    if node.style.position not in constants.BANNER_POSITIONS:
        return False

    rect = node.rect
    is_top_banner = rect.top <= 50 and rect.width > viewport.width * 0.5
    is_bottom_banner = rect.bottom >= viewport.height - 50 and rect.width > viewport.width * 0.5
    is_corner_banner = (250 < rect.width < viewport.width * 0.8) and (80 < rect.height < viewport.height * 0.8)

    z_index = node.style.z_index_value
    is_full_overlay = (
        rect.width > viewport.width * 0.3
        and rect.height > viewport.height * 0.3
        and z_index is not None
        and z_index > 100
    )

    return is_top_banner or is_bottom_banner or is_corner_banner or is_full_overlay
