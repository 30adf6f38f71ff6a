"""Privacy-link extraction and categorization.

A link inside a banner is privacy-related when its text names a
policy, when its href, title or aria-label mentions one, or when it
is an action phrase ("learn more", "settings") that sits in privacy
context: nearby text, its own title/label, or a privacy-flavoured
ancestor within a few levels.
"""

from __future__ import annotations

import re

from consentlens.consent import constants
from consentlens.models import banner, dom
from consentlens.utils import url

SURROUNDING_TEXT_CHARS = 50
CONTAINER_SEARCH_DEPTH = 5

# ── Patterns ────────────────────────────────────────────────

DIRECT_POLICY_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"privacy\s*policy",
        r"privacy\s*notice",
        r"privacy\s*statement",
        r"data\s*protection",
        r"data\s*privacy",
        r"gdpr",
        r"ccpa",
        r"cookie\s*policy",
        r"cookie\s*notice",
        r"terms\s*of\s*service",
        r"terms\s*and\s*conditions",
        r"legal\s*notice",
        r"legal\s*information",
    )
)

# Only count as privacy links when the context says so.
ACTION_PHRASE_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"click\s*here",
        r"learn\s*more",
        r"read\s*more",
        r"find\s*out\s*more",
        r"see\s*more",
        r"view\s*more",
        r"details",
        r"more\s*info",
        r"full\s*details",
        r"\bhere\b",
        r"this\s*link",
        r"manage\s*cookies",
        r"cookie\s*settings",
        r"privacy\s*settings",
        r"consent\s*management",
        r"preferences",
        r"settings",
        r"customize",
        r"configure",
        r"opt\s*out",
        r"opt\s*in",
        r"accept\s*all",
        r"reject\s*all",
        r"accept\s*selected",
        r"save\s*preferences",
        r"continue",
        r"proceed",
        r"\bok\b",
        r"got\s*it",
        r"understand",
        r"agree",
        r"disagree",
    )
)

PRIVACY_TERM_RE = re.compile(r"privacy|gdpr|ccpa|cookie|terms|legal|policy|notice|statement", re.IGNORECASE)
PRIVACY_CONTEXT_RE = re.compile(r"privacy|gdpr|ccpa|cookie|consent|terms|legal|policy|notice|statement", re.IGNORECASE)
PRIVACY_CONTAINER_RE = re.compile(r"privacy|gdpr|ccpa|cookie|consent|policy|notice|legal", re.IGNORECASE)
GENERIC_LINK_RE = re.compile(r"click\s*here|\bhere\b|learn\s*more|read\s*more|more\s*info|details", re.IGNORECASE)

# (type, pattern) in priority order. Policy names match text or href.
_POLICY_NAME_TYPES: tuple[tuple[banner.PrivacyLinkType, re.Pattern[str]], ...] = (
    ("privacy_policy", re.compile(r"privacy\s*policy")),
    ("cookie_policy", re.compile(r"cookie\s*policy")),
    ("terms_of_service", re.compile(r"terms")),
    ("gdpr_info", re.compile(r"gdpr")),
    ("legal_notice", re.compile(r"legal")),
)
# Action types match link text only.
_ACTION_TYPES: tuple[tuple[banner.PrivacyLinkType, re.Pattern[str]], ...] = (
    ("cookie_settings", re.compile(r"manage\s*cookies|cookie\s*settings|privacy\s*settings|consent\s*management")),
    ("preferences", re.compile(r"preferences|settings|customize|configure")),
    ("opt_out_in", re.compile(r"opt\s*out|opt\s*in")),
    ("generic_action", re.compile(r"click\s*here|\bhere\b|learn\s*more|read\s*more|more\s*info|details")),
    ("consent_button", re.compile(r"accept\s*all|reject\s*all|accept\s*selected|save\s*preferences")),
    ("action_button", re.compile(r"continue|proceed|\bok\b|got\s*it|understand|agree|disagree")),
)


def categorize_privacy_link(text: str, href: str) -> banner.PrivacyLinkType:
    """Tag a link by what it most likely leads to.

    Policy names win over settings/action phrases, which win over
    generic phrases and button-style labels; anything else is
    ``other_policy``.
    """
    lower_text = text.lower()
    lower_href = href.lower()

    for link_type, pattern in _POLICY_NAME_TYPES:
        if pattern.search(lower_text) or pattern.search(lower_href):
            return link_type

    for link_type, pattern in _ACTION_TYPES:
        if pattern.search(lower_text):
            return link_type

    return "other_policy"


def get_surrounding_text(node: dom.DomNode, snapshot: dom.DomSnapshot, max_chars: int = SURROUNDING_TEXT_CHARS) -> str:
    """Parent text plus both element siblings, cut to *max_chars*."""
    text = ""
    parent = snapshot.parent_of(node)
    if parent is not None:
        text += parent.text

    previous, following = snapshot.siblings(node)
    if previous is not None:
        text += " " + previous.text
    if following is not None:
        text += " " + following.text

    return text[:max_chars]


def is_in_privacy_container(node: dom.DomNode, snapshot: dom.DomSnapshot, max_depth: int = CONTAINER_SEARCH_DEPTH) -> bool:
    """``True`` when an ancestor within *max_depth* levels signals privacy."""
    for ancestor in snapshot.ancestors(node, limit=max_depth):
        if (
            PRIVACY_CONTAINER_RE.search(ancestor.class_name)
            or PRIVACY_CONTAINER_RE.search(ancestor.element_id)
            or PRIVACY_CONTAINER_RE.search(ancestor.text)
        ):
            return True
    return False


def classify_link(link: dom.DomNode, snapshot: dom.DomSnapshot) -> banner.PrivacyLink | None:
    """Build a :class:`PrivacyLink` for *link*, or ``None`` if it is not one."""
    text = link.text.strip()
    href = url.resolve_href(snapshot.url, link.attr("href"))
    title = link.attr("title").strip()
    aria_label = link.attr("aria-label").strip()

    names_policy = any(p.search(text) for p in DIRECT_POLICY_PATTERNS)
    href_mentions = bool(PRIVACY_TERM_RE.search(href))
    title_mentions = bool(PRIVACY_TERM_RE.search(title))
    aria_mentions = bool(PRIVACY_TERM_RE.search(aria_label))

    surrounding = get_surrounding_text(link, snapshot)
    has_privacy_context = bool(PRIVACY_CONTEXT_RE.search(surrounding)) or title_mentions or aria_mentions
    is_action_phrase = any(p.search(text) for p in ACTION_PHRASE_PATTERNS)
    in_container = is_in_privacy_container(link, snapshot)
    is_generic = bool(GENERIC_LINK_RE.search(text))

    accepted = (
        names_policy
        or href_mentions
        or title_mentions
        or aria_mentions
        or (is_action_phrase and (has_privacy_context or in_container))
    )
    if not accepted:
        return None

    return banner.PrivacyLink(
        text=text,
        href=href,
        title=title,
        aria_label=aria_label,
        type=categorize_privacy_link(text, href),
        classes=link.class_name,
        element_id=link.element_id,
        surrounding_text=surrounding,
        context=banner.LinkContext(
            has_privacy_context=has_privacy_context,
            is_in_privacy_container=in_container,
            is_generic_link=is_generic,
        ),
    )


def extract_privacy_links(node: dom.DomNode, snapshot: dom.DomSnapshot) -> list[banner.PrivacyLink]:
    """Return the privacy-related links among *node*'s anchors, in document order."""
    links = snapshot.select(constants.LINK_GROUP, node)
    return [privacy_link for link in links if (privacy_link := classify_link(link, snapshot)) is not None]
