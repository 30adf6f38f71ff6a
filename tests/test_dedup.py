"""Tests for consentlens.consent.dedup — duplicate banner suppression."""

from __future__ import annotations

from consentlens.consent import dedup
from consentlens.models import banner


def _record(text: str, domain: str = "example.com", record_id: str = "banner_1_a") -> banner.DetectedBanner:
    return banner.DetectedBanner(
        id=record_id,
        url=f"https://{domain}/",
        domain=domain,
        timestamp="2026-01-01T00:00:00+00:00",
        detection_method="position-content",
        text_content=text,
    )


class TestIsDuplicate:
    """Tests for is_duplicate()."""

    def test_same_domain_similar_length(self) -> None:
        assert dedup.is_duplicate(_record("a" * 150), [_record("b" * 100)])

    def test_length_window_is_exclusive(self) -> None:
        assert not dedup.is_duplicate(_record("a" * 200), [_record("b" * 100)])

    def test_other_domain(self) -> None:
        assert not dedup.is_duplicate(_record("a" * 100, "other.com"), [_record("a" * 100)])

    def test_empty_text_never_duplicates(self) -> None:
        assert not dedup.is_duplicate(_record(""), [_record("")])
        assert not dedup.is_duplicate(_record("short"), [_record("")])

    def test_no_existing(self) -> None:
        assert not dedup.is_duplicate(_record("text"), [])


class TestBannerLedger:
    """Tests for BannerLedger."""

    def test_keeps_first_of_duplicates(self) -> None:
        ledger = dedup.BannerLedger()
        first = _record("We use cookies.", record_id="first")
        assert ledger.add(first)
        assert not ledger.add(_record("We use cookies!", record_id="second"))
        assert ledger.records == [first]

    def test_bounded_to_most_recent(self) -> None:
        ledger = dedup.BannerLedger(max_records=3)
        for i in range(5):
            assert ledger.add(_record("x", domain=f"site{i}.com", record_id=f"r{i}"))
        assert len(ledger) == 3
        assert [r.id for r in ledger.records] == ["r2", "r3", "r4"]

    def test_replace_swaps_record_with_same_id(self) -> None:
        ledger = dedup.BannerLedger()
        ledger.add(_record("We use cookies.", record_id="first"))
        ledger.add(_record("Other site", domain="other.com", record_id="second"))
        updated = _record("We use cookies.", record_id="first").model_copy(update={"html_content": "<p>x</p>"})
        ledger.replace(updated)
        assert [r.id for r in ledger.records] == ["first", "second"]
        assert ledger.records[0].html_content == "<p>x</p>"
