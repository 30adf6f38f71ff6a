"""Shared fixtures for the test suite."""

from __future__ import annotations

from typing import Any

import bs4
import pytest

from consentlens.consent import constants
from consentlens.models import dom

# ── Snapshot Builder ────────────────────────────────────────────


class SnapshotBuilder:
    """Builds ``DomSnapshot`` objects from nested element dicts.

    Each element's ``text`` is its own text followed by the text of
    its descendants, the way ``textContent`` reads.  Selector group
    matches are computed by BeautifulSoup's CSS engine over an
    equivalent tree, standing in for ``element.matches`` in the page.
    """

    def element(
        self,
        tag: str,
        text: str = "",
        *children: dict[str, Any],
        element_id: str = "",
        class_name: str = "",
        attributes: dict[str, str] | None = None,
        style: dict[str, str] | None = None,
        rect: dict[str, float] | None = None,
    ) -> dict[str, Any]:
        return {
            "tag": tag,
            "own_text": text,
            "children": list(children),
            "elementId": element_id,
            "className": class_name,
            "attributes": attributes or {},
            "style": style or {},
            "rect": rect if rect is not None else {"top": 0, "left": 0, "width": 100, "height": 30},
        }

    def build(
        self,
        *roots: dict[str, Any],
        url: str = "https://example.com/",
        viewport: tuple[float, float] = (1280, 800),
    ) -> dom.DomSnapshot:
        nodes: list[dict[str, Any]] = []
        soup = bs4.BeautifulSoup("", "html.parser")
        tags: dict[int, int] = {}

        def visit(element: dict[str, Any], parent: int | None, container: bs4.Tag | bs4.BeautifulSoup) -> str:
            index = len(nodes)
            tag = soup.new_tag(element["tag"], attrs=_tag_attributes(element))
            container.append(tag)
            tags[id(tag)] = index
            node: dict[str, Any] = {
                "index": index,
                "tag": element["tag"],
                "elementId": element["elementId"],
                "className": element["className"],
                "attributes": element["attributes"],
                "style": element["style"],
                "rect": element["rect"],
                "parent": parent,
                "children": [],
            }
            nodes.append(node)
            texts = [element["own_text"]] if element["own_text"] else []
            if element["own_text"]:
                tag.append(element["own_text"])
            for child in element["children"]:
                node["children"].append(len(nodes))
                child_text = visit(child, index, tag)
                if child_text:
                    texts.append(child_text)
            node["text"] = " ".join(texts)
            return node["text"]

        width, height = viewport
        body = self.element("body", "", *roots, rect={"top": 0, "left": 0, "width": width, "height": height})
        visit(body, None, soup)

        for node in nodes:
            node["selectorMatches"] = []
        for group, selector in constants.DEFAULT_RULES.selector_groups().items():
            for matched in soup.select(selector):
                nodes[tags[id(matched)]]["selectorMatches"].append(group)

        return dom.DomSnapshot.model_validate(
            {"url": url, "viewport": {"width": width, "height": height}, "nodes": nodes}
        )

    @staticmethod
    def find(snapshot: dom.DomSnapshot, element_id: str) -> dom.DomNode:
        """Return the node with *element_id*."""
        return next(node for node in snapshot.nodes if node.element_id == element_id)


def _tag_attributes(element: dict[str, Any]) -> dict[str, str]:
    attributes = dict(element["attributes"])
    if element["elementId"]:
        attributes["id"] = element["elementId"]
    if element["className"]:
        attributes["class"] = element["className"]
    return attributes


@pytest.fixture()
def builder() -> SnapshotBuilder:
    return SnapshotBuilder()


@pytest.fixture()
def cookie_banner(builder: SnapshotBuilder) -> dom.DomSnapshot:
    """A fixed top banner with accept and reject buttons and a policy link."""
    return builder.build(
        builder.element(
            "div",
            "We use cookies to improve your experience.",
            builder.element("a", "Privacy Policy", element_id="policy", attributes={"href": "/privacy"}),
            builder.element("button", "Accept All", element_id="accept", class_name="btn btn-primary"),
            builder.element("button", "Reject All", element_id="reject", class_name="btn"),
            element_id="banner",
            class_name="notice-bar",
            style={"position": "fixed", "zIndex": "1000", "backgroundColor": "rgb(255, 255, 255)"},
            rect={"top": 0, "left": 0, "width": 1280, "height": 120},
        )
    )
