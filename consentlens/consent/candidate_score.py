"""Heuristic cookie-banner likelihood scoring.

Additive signals from text, buttons, links and class/id hints,
followed by size penalties.  Every contribution is recorded under a
signal name on the returned :class:`BannerScore` so a decision can be
explained from the logs.
"""

from __future__ import annotations

from consentlens.analysis import indicators
from consentlens.consent import constants
from consentlens.models import banner, dom
from consentlens.utils import url

# Signal weights
KEYWORD_WEIGHT = 1.5
ACCEPT_BUTTON_POINTS = 3.0
DECLINE_BUTTON_POINTS = 2.0
BOTH_BUTTONS_POINTS = 1.0
POLICY_LINK_POINTS = 1.0
INDICATOR_WEIGHT = 0.5
CMP_POINTS = 2.0
PHRASE_WEIGHT = 0.5

# Size penalties
HUGE_AREA_RATIO = 0.8
LARGE_AREA_RATIO = 0.6
HUGE_AREA_PENALTY = -2.0
LARGE_AREA_PENALTY = -1.0
MIN_WIDTH = 200
MIN_HEIGHT = 50
SMALL_ELEMENT_PENALTY = -1.0


def is_accept_button(node: dom.DomNode) -> bool:
    """Text, class or id of *node* suggests an accept/agree control."""
    if constants.ACCEPT_TEXT_RE.search(node.text.lower()):
        return True
    attrs = f"{node.class_name} {node.element_id}".lower()
    return any(term in attrs for term in constants.ACCEPT_ATTR_TERMS)


def is_decline_button(node: dom.DomNode) -> bool:
    """Text, class or id of *node* suggests a decline/reject control."""
    if constants.DECLINE_TEXT_RE.search(node.text.lower()):
        return True
    attrs = f"{node.class_name} {node.element_id}".lower()
    return any(term in attrs for term in constants.DECLINE_ATTR_TERMS)


def is_policy_link(node: dom.DomNode, page_url: str = "") -> bool:
    """Anchor text or resolved href points at a policy page."""
    text = node.text.lower()
    href = url.resolve_href(page_url, node.attr("href")).lower()
    return indicators.contains_any(text, constants.POLICY_LINK_TEXT_TERMS) or indicators.contains_any(
        href, constants.POLICY_LINK_HREF_TERMS
    )


def calculate_banner_score(
    node: dom.DomNode,
    snapshot: dom.DomSnapshot,
    rules: constants.DetectionRules = constants.DEFAULT_RULES,
) -> banner.BannerScore:
    """Score how much *node* looks like a cookie banner.

    Args:
        node: The candidate element.
        snapshot: The snapshot *node* belongs to; used for its
            descendants and the viewport size.
        rules: Keyword and pattern tables to score with.

    Returns:
        The total score and the per-signal contributions.
    """
    signals: dict[str, float] = {}
    text = indicators.normalize_text(node.text)
    class_name = node.class_name.lower()
    element_id = node.element_id.lower()

    # ── Cookie keywords ─────────────────────────────────────
    keywords = indicators.matching_phrases(text, rules.cookie_keywords)
    if keywords:
        signals["keywords"] = len(keywords) * KEYWORD_WEIGHT

    # ── Accept / decline buttons ────────────────────────────
    buttons = snapshot.select(constants.SCORING_BUTTON_GROUP, node)
    has_accept = any(is_accept_button(b) for b in buttons)
    has_decline = any(is_decline_button(b) for b in buttons)
    if has_accept:
        signals["acceptButton"] = ACCEPT_BUTTON_POINTS
    if has_decline:
        signals["declineButton"] = DECLINE_BUTTON_POINTS
    if has_accept and has_decline:
        signals["bothButtons"] = BOTH_BUTTONS_POINTS

    # ── Policy links ────────────────────────────────────────
    links = snapshot.select(constants.LINK_GROUP, node)
    if any(is_policy_link(link, snapshot.url) for link in links):
        signals["policyLink"] = POLICY_LINK_POINTS

    # ── Class / id hints ────────────────────────────────────
    indicator_hits = [i for i in rules.banner_indicators if i in class_name or i in element_id]
    if indicator_hits:
        signals["classIdIndicators"] = len(indicator_hits) * INDICATOR_WEIGHT

    if any(name in class_name or name in element_id for name in rules.cmp_names):
        signals["cmp"] = CMP_POINTS

    # ── Canonical banner phrases ────────────────────────────
    phrases = indicators.matching_phrases(text, rules.banner_phrases)
    if phrases:
        signals["phrases"] = len(phrases) * PHRASE_WEIGHT

    # ── Size penalties ──────────────────────────────────────
    viewport_area = snapshot.viewport.area
    area_ratio = node.rect.area / viewport_area if viewport_area > 0 else 0.0
    if area_ratio > HUGE_AREA_RATIO:
        signals["hugeArea"] = HUGE_AREA_PENALTY
    elif area_ratio > LARGE_AREA_RATIO:
        signals["largeArea"] = LARGE_AREA_PENALTY

    if node.rect.width < MIN_WIDTH or node.rect.height < MIN_HEIGHT:
        signals["smallElement"] = SMALL_ELEMENT_PENALTY

    return banner.BannerScore(score=sum(signals.values()), signals=signals)
