"""Cookie-banner detector.

One :class:`BannerDetector` lives for one page load.  Each
:meth:`~BannerDetector.scan` runs two strategies over a fresh
snapshot:

1. **Known selectors**: elements matching CMP and generic
   cookie/consent selectors, accepted at a low score threshold.
2. **Position and content**: container elements placed like a
   banner (fixed/sticky/absolute top, bottom, corner or overlay),
   accepted only at a higher threshold.

Element identity is the snapshot node index, which is stable for the
page load.  An element is scored at most once per detector and
accepted at most once; accepted records are de-duplicated against the
ledger before being returned.
"""

from __future__ import annotations

from consentlens.consent import candidate_score, constants, dedup, extraction, visibility
from consentlens.models import banner, dom
from consentlens.utils import logger

log = logger.create_logger("Banner-Detect")


class BannerDetector:
    """Scan-scoped banner detection state for one page load.

    Args:
        rules: Keyword, selector and threshold tables.
        ledger: Record store used for de-duplication.  A fresh one
            is created when omitted.
    """

    def __init__(
        self,
        rules: constants.DetectionRules = constants.DEFAULT_RULES,
        ledger: dedup.BannerLedger | None = None,
    ) -> None:
        self.rules = rules
        if ledger is None:
            ledger = dedup.BannerLedger(rules.max_local_records, rules.dedup_text_window)
        self.ledger = ledger
        self.examined: set[int] = set()
        self.detected: set[int] = set()
        self._elements: dict[str, int] = {}

    def element_index(self, banner_id: str) -> int | None:
        """Snapshot index of the element a returned record was built from."""
        return self._elements.get(banner_id)

    # ── Public API ──────────────────────────────────────────

    def scan(self, snapshot: dom.DomSnapshot) -> list[banner.DetectedBanner]:
        """Run both strategies and return the new, non-duplicate records."""
        if not snapshot.nodes:
            log.debug("Empty snapshot, nothing to scan", {"url": snapshot.url})
            return []

        found = self.scan_known_selectors(snapshot)
        found.extend(self.scan_position_content(snapshot))
        return found

    def scan_known_selectors(self, snapshot: dom.DomSnapshot) -> list[banner.DetectedBanner]:
        """Score visible elements that match a known banner selector."""
        matches = snapshot.select(constants.KNOWN_BANNER_GROUP)
        log.debug("Known selector matches", {"count": len(matches)})

        found: list[banner.DetectedBanner] = []
        for node in matches:
            if node.index in self.examined or not visibility.is_element_visible(node, self.rules.cookie_keywords):
                continue
            self.examined.add(node.index)

            result = candidate_score.calculate_banner_score(node, snapshot, self.rules)
            log.debug(
                "Checking known selector element",
                {"element": extraction.describe(node), "score": result.score},
            )
            if result.score >= self.rules.known_selector_threshold:
                record = self._accept(node, snapshot, "known-selector", result)
                if record is not None:
                    found.append(record)
        return found

    def scan_position_content(self, snapshot: dom.DomSnapshot) -> list[banner.DetectedBanner]:
        """Score container elements positioned like a banner."""
        found: list[banner.DetectedBanner] = []
        for node in snapshot.nodes:
            if node.tag not in self.rules.candidate_tags or node.index in self.examined:
                continue
            if not visibility.is_likely_banner_position(node, snapshot.viewport, self.rules.cookie_keywords):
                continue
            self.examined.add(node.index)

            result = candidate_score.calculate_banner_score(node, snapshot, self.rules)
            log.debug(
                "Checking positioned element",
                {"element": extraction.describe(node), "score": result.score, "text": node.text[:100]},
            )
            if result.score >= self.rules.position_content_threshold:
                record = self._accept(node, snapshot, "position-content", result)
                if record is not None:
                    found.append(record)
        return found

    # ── Acceptance ──────────────────────────────────────────

    def _accept(
        self,
        node: dom.DomNode,
        snapshot: dom.DomSnapshot,
        method: banner.DetectionMethod,
        result: banner.BannerScore,
    ) -> banner.DetectedBanner | None:
        if node.index in self.detected:
            return None
        self.detected.add(node.index)

        record = extraction.extract_banner(node, snapshot, method, result.score)
        if not self.ledger.add(record):
            log.info("Duplicate cookie banner detected, skipping", {"domain": record.domain, "method": method})
            return None

        self._elements[record.id] = node.index
        log.success(
            "Cookie banner detected",
            {
                "method": method,
                "element": extraction.describe(node),
                "score": result.score,
                "signals": result.signals,
                "privacyLinks": len(record.privacy_links),
            },
        )
        return record
