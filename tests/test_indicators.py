"""Tests for consentlens.analysis.indicators — phrase table matching."""

from __future__ import annotations

import pytest

from consentlens.analysis import indicators


class TestNormalizeText:
    """Tests for normalize_text()."""

    def test_lowercases_and_collapses_whitespace(self) -> None:
        assert indicators.normalize_text("We  Collect\n\tData") == "we collect data"

    @pytest.mark.parametrize("value", [None, 42, b"bytes", ["a"], {"a": 1}])
    def test_non_strings_normalize_to_empty(self, value: object) -> None:
        assert indicators.normalize_text(value) == ""

    def test_non_ascii_text_is_kept(self) -> None:
        assert indicators.normalize_text("Datenschutzerklärung ÜBER") == "datenschutzerklärung über"


class TestMatchCategories:
    """Tests for match_categories()."""

    TABLE = {
        "first": ("alpha", "beta"),
        "second": ("gamma",),
        "third": ("delta",),
    }

    def test_returns_categories_in_table_order(self) -> None:
        assert indicators.match_categories("delta and alpha", self.TABLE) == ["first", "third"]

    def test_one_hit_per_category(self) -> None:
        assert indicators.match_categories("alpha beta", self.TABLE) == ["first"]

    def test_no_match(self) -> None:
        assert indicators.match_categories("nothing here", self.TABLE) == []


class TestMatchingPhrases:
    """Tests for matching_phrases()."""

    def test_distinct_phrases_in_input_order(self) -> None:
        found = indicators.matching_phrases("cookies and more cookies", ["cookies", "cookie", "cookies"])
        assert found == ["cookies", "cookie"]

    def test_empty_text(self) -> None:
        assert indicators.matching_phrases("", ["cookie"]) == []


class TestContains:
    """Tests for contains_any() and contains_all()."""

    def test_contains_any(self) -> None:
        assert indicators.contains_any("we sell data", ("rent", "sell"))
        assert not indicators.contains_any("we keep data", ("rent", "sell"))

    def test_contains_all(self) -> None:
        assert indicators.contains_all("collect for a purpose", ("collect", "purpose"))
        assert not indicators.contains_all("collect only", ("collect", "purpose"))

    def test_contains_all_with_no_phrases(self) -> None:
        assert indicators.contains_all("anything", ())
