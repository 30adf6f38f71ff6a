"""Static tables for cookie-banner detection.

Every keyword list, selector list, threshold and timing the detector
uses lives here so the rule set can be reviewed and versioned in one
place.  :class:`DetectionRules` bundles them for injection into the
scorer and detector; :data:`DEFAULT_RULES` is the production set.
"""

from __future__ import annotations

import dataclasses
import re

# ── Text signals ────────────────────────────────────────────

COOKIE_KEYWORDS: tuple[str, ...] = (
    "cookie",
    "cookies",
    "consent",
    "privacy",
    "gdpr",
    "ccpa",
    "tracking",
    "analytics",
    "we use cookies",
    "this site uses",
    "accept cookies",
    "cookie policy",
    "privacy policy",
)

BANNER_PHRASES: tuple[str, ...] = (
    "we use cookies",
    "this site uses cookies",
    "by continuing to use",
    "by clicking accept",
    "to improve your experience",
    "necessary cookies",
    "analytics cookies",
    "marketing cookies",
)

# Substrings of class/id that hint at a banner container.
BANNER_INDICATORS: tuple[str, ...] = ("cookie", "consent", "privacy", "gdpr", "banner", "notice")

# Consent Management Platform names seen in class/id attributes.
CMP_NAMES: tuple[str, ...] = ("onetrust", "cookiebot", "quantcast", "didomi", "trustarc")

# ── Known banner selectors ──────────────────────────────────

KNOWN_BANNER_SELECTORS: tuple[str, ...] = (
    # Generic cookie banners
    '[class*="cookie-banner" i]',
    '[class*="cookie-consent" i]',
    '[class*="cookie-notice" i]',
    '[class*="cookie-bar" i]',
    '[id*="cookie-banner" i]',
    '[id*="cookie-consent" i]',
    '[id*="cookie-notice" i]',
    '[id*="cookie-bar" i]',
    # GDPR / privacy
    '[class*="gdpr" i]',
    '[class*="privacy-banner" i]',
    '[class*="consent-banner" i]',
    '[id*="gdpr" i]',
    '[id*="privacy-banner" i]',
    '[id*="consent-banner" i]',
    # OneTrust
    '[id*="onetrust"]',
    '[class*="onetrust"]',
    ".onetrust-banner-container",
    "#onetrust-consent-sdk",
    # Cookiebot
    '[id*="cookiebot"]',
    '[class*="cookiebot"]',
    '[id*="CybotCookiebotDialog"]',
    # Quantcast
    '[id*="quantcast"]',
    '[class*="quantcast"]',
    ".qc-cmp-ui",
    # Didomi
    '[id*="didomi"]',
    '[class*="didomi"]',
    # TrustArc
    '[id*="trustarcbar"]',
    '[class*="trustarc"]',
    # CookieFirst / cookieconsent and friends
    '[id*="cookiefirst"]',
    ".cookiealert",
    ".cookie-alert",
    ".cc-banner",
    "#cookieconsent",
    ".cookieconsent",
)

# ── Buttons and links ───────────────────────────────────────

# Controls considered when scoring a candidate.
SCORING_BUTTON_SELECTOR = 'button, a[role="button"], input[type="button"], input[type="submit"], [role="button"]'

# Controls captured on the extracted record.
RECORD_BUTTON_SELECTOR = 'button, input[type="button"], input[type="submit"], .btn, [role="button"]'

RECORD_POLICY_LINK_SELECTOR = 'a[href*="policy"], a[href*="privacy"], a[href*="terms"], a[href*="cookie"]'

LINK_SELECTOR = "a[href]"

# Selector groups the page matches every element against.  Each
# snapshot node lists the names of the groups it matched.
KNOWN_BANNER_GROUP = "knownBanner"
SCORING_BUTTON_GROUP = "scoringButton"
RECORD_BUTTON_GROUP = "recordButton"
RECORD_POLICY_LINK_GROUP = "recordPolicyLink"
LINK_GROUP = "link"

ACCEPT_TEXT_RE = re.compile(r"accept|agree|allow|\bok\b|got it|understand")
DECLINE_TEXT_RE = re.compile(r"decline|reject|deny|refuse")
ACCEPT_ATTR_TERMS: tuple[str, ...] = ("accept",)
DECLINE_ATTR_TERMS: tuple[str, ...] = ("decline", "reject")

POLICY_LINK_TEXT_TERMS: tuple[str, ...] = ("privacy", "cookie", "policy", "terms")
POLICY_LINK_HREF_TERMS: tuple[str, ...] = ("privacy", "cookie", "policy")

# ── Position strategy ───────────────────────────────────────

CANDIDATE_TAGS: frozenset[str] = frozenset(["div", "section", "aside", "header", "footer"])
BANNER_POSITIONS: frozenset[str] = frozenset(["fixed", "sticky", "absolute"])

# ── Thresholds ──────────────────────────────────────────────

KNOWN_SELECTOR_THRESHOLD = 2.0
POSITION_CONTENT_THRESHOLD = 5.0

# Opacity at or below this counts as invisible.
MIN_OPACITY = 0.01

# ── Timing ──────────────────────────────────────────────────

SCAN_DELAYS_MS: tuple[int, ...] = (0, 500, 1000, 1500, 2000, 3000, 5000, 8000)
MUTATION_DEBOUNCE_MS = 500

# ── Record keeping ──────────────────────────────────────────

DEDUP_TEXT_WINDOW = 100
MAX_LOCAL_RECORDS = 50
MAX_FAILED_UPLOADS = 20


@dataclasses.dataclass(frozen=True)
class DetectionRules:
    """Immutable bundle of the tables one detector instance runs with."""

    cookie_keywords: tuple[str, ...] = COOKIE_KEYWORDS
    banner_phrases: tuple[str, ...] = BANNER_PHRASES
    banner_indicators: tuple[str, ...] = BANNER_INDICATORS
    cmp_names: tuple[str, ...] = CMP_NAMES
    known_selectors: tuple[str, ...] = KNOWN_BANNER_SELECTORS
    candidate_tags: frozenset[str] = CANDIDATE_TAGS
    known_selector_threshold: float = KNOWN_SELECTOR_THRESHOLD
    position_content_threshold: float = POSITION_CONTENT_THRESHOLD
    dedup_text_window: int = DEDUP_TEXT_WINDOW
    max_local_records: int = MAX_LOCAL_RECORDS

    def selector_groups(self) -> dict[str, str]:
        """Selector lists sent to the page, keyed by group name."""
        return {
            KNOWN_BANNER_GROUP: ", ".join(self.known_selectors),
            SCORING_BUTTON_GROUP: SCORING_BUTTON_SELECTOR,
            RECORD_BUTTON_GROUP: RECORD_BUTTON_SELECTOR,
            RECORD_POLICY_LINK_GROUP: RECORD_POLICY_LINK_SELECTOR,
            LINK_GROUP: LINK_SELECTOR,
        }


DEFAULT_RULES = DetectionRules()
