"""Tests for consentlens.consent.detector — the two-strategy banner scan."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from consentlens.consent import constants, dedup, detector
from consentlens.models import dom

if TYPE_CHECKING:
    from conftest import SnapshotBuilder

TOP = {"top": 0, "left": 0, "width": 1280, "height": 120}
BOTTOM = {"top": 680, "left": 0, "width": 1280, "height": 120}


def _find(snapshot: dom.DomSnapshot, element_id: str) -> dom.DomNode:
    return next(n for n in snapshot.nodes if n.element_id == element_id)


class TestPositionContentStrategy:
    """Tests for banners found by position and content."""

    def test_detects_fixed_banner(self, cookie_banner: dom.DomSnapshot) -> None:
        scanner = detector.BannerDetector()
        (record,) = scanner.scan(cookie_banner)
        assert record.detection_method == "position-content"
        assert record.score == 16.5
        assert record.score >= constants.POSITION_CONTENT_THRESHOLD
        assert scanner.element_index(record.id) == _find(cookie_banner, "banner").index

    def test_each_element_scored_once(self, cookie_banner: dom.DomSnapshot) -> None:
        scanner = detector.BannerDetector()
        assert len(scanner.scan(cookie_banner)) == 1
        assert scanner.scan(cookie_banner) == []
        assert _find(cookie_banner, "banner").index in scanner.examined

    def test_below_threshold_not_accepted(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(
            builder.element(
                "div",
                "Subscribe to our newsletter",
                builder.element("button", "OK"),
                element_id="promo",
                style={"position": "fixed"},
                rect=TOP,
            )
        )
        scanner = detector.BannerDetector()
        assert scanner.scan(snapshot) == []
        assert _find(snapshot, "promo").index in scanner.examined

    def test_static_elements_ignored(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(
            builder.element(
                "div",
                "We use cookies to improve your experience.",
                builder.element("button", "Accept"),
                element_id="inline",
                rect=TOP,
            )
        )
        scanner = detector.BannerDetector()
        assert scanner.scan(snapshot) == []
        assert scanner.examined == set()

    def test_only_container_tags_considered(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(
            builder.element(
                "dialog",
                "We use cookies to improve your experience.",
                builder.element("button", "Accept"),
                style={"position": "fixed"},
                rect=TOP,
            )
        )
        assert detector.BannerDetector().scan(snapshot) == []


class TestKnownSelectorStrategy:
    """Tests for banners found by known CMP selectors."""

    def test_detects_cmp_container_regardless_of_position(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(builder.element("div", "We use cookies", element_id="onetrust-banner-sdk"))
        (record,) = detector.BannerDetector().scan(snapshot)
        assert record.detection_method == "known-selector"
        assert record.selector == "#onetrust-banner-sdk"

    def test_low_score_not_accepted(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(builder.element("div", "Hello", element_id="low", class_name="cookie-banner"))
        scanner = detector.BannerDetector()
        assert scanner.scan(snapshot) == []
        assert _find(snapshot, "low").index in scanner.examined

    def test_hidden_match_is_not_examined(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(
            builder.element("div", "We use cookies", element_id="cookieconsent", style={"display": "none"})
        )
        scanner = detector.BannerDetector()
        assert scanner.scan(snapshot) == []
        assert scanner.examined == set()

    def test_known_selector_runs_first(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(
            builder.element(
                "div",
                "We use cookies to improve your experience.",
                builder.element("button", "Accept"),
                class_name="cc-banner",
                style={"position": "fixed"},
                rect=TOP,
            )
        )
        (record,) = detector.BannerDetector().scan(snapshot)
        assert record.detection_method == "known-selector"


class TestDeduplication:
    """Tests for duplicate suppression across candidates."""

    def test_similar_banners_keep_first(self, builder: SnapshotBuilder) -> None:
        snapshot = builder.build(
            builder.element(
                "div",
                "We use cookies to improve your experience.",
                builder.element("button", "Accept"),
                element_id="first",
                style={"position": "fixed"},
                rect=TOP,
            ),
            builder.element(
                "div",
                "We use cookies to improve your experience!",
                builder.element("button", "Accept"),
                element_id="second",
                style={"position": "fixed"},
                rect=BOTTOM,
            ),
        )
        scanner = detector.BannerDetector()
        (record,) = scanner.scan(snapshot)
        assert record.element_id == "first"
        assert _find(snapshot, "second").index in scanner.detected
        assert len(scanner.ledger) == 1

    def test_shared_ledger_spans_detectors(self, cookie_banner: dom.DomSnapshot) -> None:
        ledger = dedup.BannerLedger()
        first = detector.BannerDetector(ledger=ledger)
        assert first.ledger is ledger
        assert len(first.scan(cookie_banner)) == 1
        assert detector.BannerDetector(ledger=ledger).scan(cookie_banner) == []


class TestEmptyInput:
    """Tests for degenerate snapshots."""

    def test_empty_snapshot(self) -> None:
        assert detector.BannerDetector().scan(dom.DomSnapshot.empty("https://example.com/")) == []

    @pytest.mark.parametrize("viewport", [(0, 0), (1, 1)])
    def test_degenerate_viewport_never_raises(self, cookie_banner: dom.DomSnapshot, viewport: tuple[int, int]) -> None:
        snapshot = cookie_banner.model_copy(update={"viewport": dom.Viewport(width=viewport[0], height=viewport[1])})
        detector.BannerDetector().scan(snapshot)
