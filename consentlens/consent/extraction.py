"""Build a :class:`DetectedBanner` record from an accepted candidate."""

from __future__ import annotations

import random
import string
import time
from datetime import UTC, datetime

from consentlens.consent import constants, privacy_links
from consentlens.models import banner, dom
from consentlens.utils import logger, url

log = logger.create_logger("Banner-Extract")

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_banner_id() -> str:
    """Return an id like ``banner_1735689600000_k3j9x0a2b``."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"banner_{int(time.time() * 1000)}_{suffix}"


def generate_selector(node: dom.DomNode) -> str:
    """Short CSS selector for *node*: ``#id``, else ``.firstClass``, else the tag."""
    if node.element_id:
        return f"#{node.element_id}"
    classes = node.class_list
    if classes:
        return f".{classes[0]}"
    return node.tag


def describe(node: dom.DomNode) -> str:
    """``tag#id.firstClass`` description for log lines."""
    element_id = f"#{node.element_id}" if node.element_id else ""
    classes = node.class_list
    first_class = f".{classes[0]}" if classes else ""
    return f"{node.tag}{element_id}{first_class}"


def extract_buttons(node: dom.DomNode, snapshot: dom.DomSnapshot) -> list[banner.BannerButton]:
    """Clickable controls with a non-empty label."""
    buttons: list[banner.BannerButton] = []
    for control in snapshot.select(constants.RECORD_BUTTON_GROUP, node):
        text = control.text.strip() or control.attr("value")
        if not text:
            continue
        buttons.append(
            banner.BannerButton(
                text=text,
                type=control.attr("type") or "button",
                classes=control.class_name,
                element_id=control.element_id,
            )
        )
    return buttons


def extract_policy_links(node: dom.DomNode, snapshot: dom.DomSnapshot) -> list[banner.PolicyLink]:
    """Anchors whose href mentions a policy, privacy, terms or cookie page."""
    links: list[banner.PolicyLink] = []
    for anchor in snapshot.select(constants.RECORD_POLICY_LINK_GROUP, node):
        href = url.resolve_href(snapshot.url, anchor.attr("href"))
        if not href:
            continue
        links.append(
            banner.PolicyLink(
                text=anchor.text.strip(),
                href=href,
                classes=anchor.class_name,
                element_id=anchor.element_id,
            )
        )
    return links


def extract_banner(
    node: dom.DomNode,
    snapshot: dom.DomSnapshot,
    detection_method: banner.DetectionMethod,
    score: float = 0.0,
) -> banner.DetectedBanner:
    """Capture everything about an accepted candidate.

    Args:
        node: The accepted element.
        snapshot: The snapshot it came from.
        detection_method: Which strategy accepted it.
        score: The candidate score at acceptance.

    Returns:
        A frozen :class:`DetectedBanner`.
    """
    found_links = privacy_links.extract_privacy_links(node, snapshot)
    if found_links:
        log.debug(
            "Detected privacy links",
            {"count": len(found_links), "types": [link.type for link in found_links]},
        )
    else:
        log.debug("No privacy links found in banner", {"element": describe(node)})

    return banner.DetectedBanner(
        id=generate_banner_id(),
        url=snapshot.url,
        domain=snapshot.domain,
        timestamp=datetime.now(UTC).isoformat(),
        detection_method=detection_method,
        text_content=node.text.strip(),
        buttons=extract_buttons(node, snapshot),
        policy_links=extract_policy_links(node, snapshot),
        privacy_links=found_links,
        position=banner.BannerPosition(
            top=node.rect.top,
            left=node.rect.left,
            width=node.rect.width,
            height=node.rect.height,
        ),
        styling=banner.BannerStyling(
            position=node.style.position,
            z_index=node.style.z_index,
            background_color=node.style.background_color,
        ),
        selector=generate_selector(node),
        classes=node.class_name,
        element_id=node.element_id,
        score=score,
    )
