"""Tests for consentlens.consent.visibility — visibility and banner position."""

from __future__ import annotations

import pytest

from consentlens.consent import visibility
from consentlens.models import dom

VIEWPORT = dom.Viewport(width=1280, height=800)


def _node(
    text: str = "",
    *,
    style: dict[str, str] | None = None,
    rect: tuple[float, float, float, float] = (0, 0, 300, 100),
    class_name: str = "",
) -> dom.DomNode:
    top, left, width, height = rect
    return dom.DomNode.model_validate(
        {
            "index": 0,
            "tag": "div",
            "text": text,
            "className": class_name,
            "style": style or {},
            "rect": {"top": top, "left": left, "width": width, "height": height},
        }
    )


class TestIsElementVisible:
    """Tests for is_element_visible()."""

    def test_plain_box_is_visible(self) -> None:
        assert visibility.is_element_visible(_node())

    def test_none(self) -> None:
        assert not visibility.is_element_visible(None)

    @pytest.mark.parametrize(
        "style",
        [
            {"display": "none"},
            {"visibility": "hidden"},
            {"opacity": "0"},
            {"opacity": "0.005"},
            {"opacity": "0.01"},
        ],
    )
    def test_hidden_by_css(self, style: dict[str, str]) -> None:
        assert not visibility.is_element_visible(_node("We use cookies", style=style))

    def test_zero_size_cookie_element_counts_as_visible(self) -> None:
        assert visibility.is_element_visible(_node("We use cookies", rect=(0, 0, 0, 0)))
        assert visibility.is_element_visible(_node(rect=(0, 0, 0, 0), class_name="cookie-wrap"))

    def test_zero_size_plain_element_is_hidden(self) -> None:
        assert not visibility.is_element_visible(_node("Newsletter", rect=(0, 0, 1280, 0)))


class TestIsLikelyBannerPosition:
    """Tests for is_likely_banner_position()."""

    @pytest.mark.parametrize(
        ("position", "rect"),
        [
            ("fixed", (0, 0, 1280, 120)),
            ("sticky", (720, 0, 1280, 80)),
            ("absolute", (500, 900, 300, 200)),
        ],
        ids=["top", "bottom", "corner"],
    )
    def test_banner_shapes(self, position: str, rect: tuple[float, float, float, float]) -> None:
        assert visibility.is_likely_banner_position(_node(style={"position": position}, rect=rect), VIEWPORT)

    def test_static_element_rejected(self) -> None:
        node = _node(style={"position": "static"}, rect=(0, 0, 1280, 120))
        assert not visibility.is_likely_banner_position(node, VIEWPORT)

    def test_hidden_element_rejected(self) -> None:
        node = _node(style={"position": "fixed", "display": "none"}, rect=(0, 0, 1280, 120))
        assert not visibility.is_likely_banner_position(node, VIEWPORT)

    def test_full_overlay_needs_high_z_index(self) -> None:
        rect = (100, 100, 1100, 600)
        high = _node(style={"position": "fixed", "zIndex": "9999"}, rect=rect)
        auto = _node(style={"position": "fixed", "zIndex": "auto"}, rect=rect)
        assert visibility.is_likely_banner_position(high, VIEWPORT)
        assert not visibility.is_likely_banner_position(auto, VIEWPORT)

    def test_small_floating_widget_rejected(self) -> None:
        node = _node(style={"position": "fixed"}, rect=(300, 1200, 60, 60))
        assert not visibility.is_likely_banner_position(node, VIEWPORT)
