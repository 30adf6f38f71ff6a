"""Pydantic models for the read-only DOM snapshot consumed by the detector.

A :class:`DomSnapshot` is a flat list of :class:`DomNode` entries that
reference each other by ``index``.  Indexes are assigned page-side and
stay stable for the lifetime of one page load, so they double as the
opaque element identity used for scan-scoped memoization.

Malformed or missing attributes never raise: strings coerce to ``""``
and geometry to ``0``.
"""

from __future__ import annotations

from collections.abc import Iterator

import pydantic
from pydantic import alias_generators

from consentlens.utils import url


def _coerce_str(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)):
        return str(value)
    return ""


def _coerce_float(value: object) -> float:
    if isinstance(value, bool) or value is None:
        return 0.0
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if number != number or number in (float("inf"), float("-inf")):
        return 0.0
    return number


class _SnapshotModel(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(
        alias_generator=alias_generators.to_camel,
        populate_by_name=True,
        frozen=True,
    )


class ComputedStyle(_SnapshotModel):
    """The subset of ``getComputedStyle`` the detector reads."""

    display: str = ""
    visibility: str = ""
    opacity: str = "1"
    position: str = ""
    z_index: str = ""
    background_color: str = ""

    @pydantic.field_validator("*", mode="before")
    @classmethod
    def _strings(cls, value: object) -> str:
        return _coerce_str(value)

    @property
    def opacity_value(self) -> float:
        """Numeric opacity; unparsable values count as fully opaque."""
        try:
            return float(self.opacity)
        except ValueError:
            return 1.0

    @property
    def z_index_value(self) -> int | None:
        """Integer z-index, or ``None`` for ``auto`` and junk."""
        try:
            return int(self.z_index)
        except ValueError:
            return None


class BoundingBox(_SnapshotModel):
    """Viewport-relative ``getBoundingClientRect`` geometry."""

    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @pydantic.field_validator("*", mode="before")
    @classmethod
    def _numbers(cls, value: object) -> float:
        return _coerce_float(value)

    @property
    def bottom(self) -> float:
        return self.top + self.height

    @property
    def area(self) -> float:
        return self.width * self.height


class Viewport(_SnapshotModel):
    """Inner window size at snapshot time."""

    width: float = 0.0
    height: float = 0.0

    @pydantic.field_validator("*", mode="before")
    @classmethod
    def _numbers(cls, value: object) -> float:
        return _coerce_float(value)

    @property
    def area(self) -> float:
        return self.width * self.height


class DomNode(_SnapshotModel):
    """One element of the page."""

    index: int
    tag: str = ""
    element_id: str = ""
    class_name: str = ""
    text: str = ""
    selector_matches: frozenset[str] = frozenset()
    attributes: dict[str, str] = pydantic.Field(default_factory=dict)
    style: ComputedStyle = pydantic.Field(default_factory=ComputedStyle)
    rect: BoundingBox = pydantic.Field(default_factory=BoundingBox)
    parent: int | None = None
    children: tuple[int, ...] = ()

    @pydantic.field_validator("tag", "element_id", "class_name", "text", mode="before")
    @classmethod
    def _strings(cls, value: object) -> str:
        return _coerce_str(value)

    @pydantic.field_validator("tag")
    @classmethod
    def _lower_tag(cls, value: str) -> str:
        return value.lower()

    @pydantic.field_validator("attributes", mode="before")
    @classmethod
    def _attributes(cls, value: object) -> dict[str, str]:
        if not isinstance(value, dict):
            return {}
        return {str(k).lower(): _coerce_str(v) for k, v in value.items() if v is not None}

    @pydantic.field_validator("style", "rect", mode="before")
    @classmethod
    def _nested(cls, value: object) -> object:
        return value if isinstance(value, (dict, ComputedStyle, BoundingBox)) else {}

    @pydantic.field_validator("selector_matches", mode="before")
    @classmethod
    def _group_names(cls, value: object) -> frozenset[str]:
        if not isinstance(value, (list, tuple, set, frozenset)):
            return frozenset()
        return frozenset(v for v in value if isinstance(v, str))

    @pydantic.field_validator("parent", mode="before")
    @classmethod
    def _parent_index(cls, value: object) -> int | None:
        return value if isinstance(value, int) and not isinstance(value, bool) else None

    @pydantic.field_validator("children", mode="before")
    @classmethod
    def _child_indexes(cls, value: object) -> tuple[int, ...]:
        if not isinstance(value, (list, tuple)):
            return ()
        return tuple(v for v in value if isinstance(v, int) and not isinstance(v, bool))

    def attr(self, name: str) -> str:
        """Return attribute *name* or ``""``."""
        return self.attributes.get(name.lower(), "")

    @property
    def class_list(self) -> list[str]:
        return [c for c in self.class_name.split() if c]


class DomSnapshot(_SnapshotModel):
    """A serialized, read-only view of one page."""

    url: str = ""
    viewport: Viewport = pydantic.Field(default_factory=Viewport)
    nodes: tuple[DomNode, ...] = ()

    _by_index: dict[int, DomNode] = pydantic.PrivateAttr(default_factory=dict)

    @pydantic.field_validator("url", mode="before")
    @classmethod
    def _url(cls, value: object) -> str:
        return _coerce_str(value)

    @pydantic.field_validator("nodes", mode="before")
    @classmethod
    def _drop_malformed_nodes(cls, value: object) -> object:
        if not isinstance(value, (list, tuple)):
            return ()
        return [n for n in value if isinstance(n, DomNode) or (isinstance(n, dict) and isinstance(n.get("index"), int))]

    def model_post_init(self, _context: object) -> None:
        self._by_index = {node.index: node for node in self.nodes}

    @classmethod
    def empty(cls, page_url: str = "") -> DomSnapshot:
        """Return a snapshot with no elements."""
        return cls(url=page_url)

    @property
    def domain(self) -> str:
        return url.extract_domain(self.url)

    def get(self, index: int | None) -> DomNode | None:
        """Look up a node by index."""
        if index is None:
            return None
        return self._by_index.get(index)

    def parent_of(self, node: DomNode) -> DomNode | None:
        return self.get(node.parent)

    def ancestors(self, node: DomNode, limit: int | None = None) -> Iterator[DomNode]:
        """Yield ancestors nearest-first, at most *limit* of them."""
        current = self.parent_of(node)
        depth = 0
        seen: set[int] = set()
        while current is not None and (limit is None or depth < limit) and current.index not in seen:
            seen.add(current.index)
            yield current
            current = self.parent_of(current)
            depth += 1

    def descendants(self, node: DomNode) -> Iterator[DomNode]:
        """Yield descendants in document order."""
        stack = list(reversed(node.children))
        seen: set[int] = {node.index}
        while stack:
            child = self.get(stack.pop())
            if child is None or child.index in seen:
                continue
            seen.add(child.index)
            yield child
            stack.extend(reversed(child.children))

    def select(self, group: str, root: DomNode | None = None) -> list[DomNode]:
        """Return the nodes the page matched against selector *group*.

        With *root*, only its descendants are searched (like
        ``element.querySelectorAll``); otherwise the whole snapshot,
        in document order.
        """
        candidates = self.descendants(root) if root is not None else iter(self.nodes)
        return [node for node in candidates if group in node.selector_matches]

    def siblings(self, node: DomNode) -> tuple[DomNode | None, DomNode | None]:
        """Return the previous and next element siblings of *node*."""
        parent = self.parent_of(node)
        if parent is None:
            return None, None
        children = parent.children
        try:
            position = children.index(node.index)
        except ValueError:
            return None, None
        previous = self.get(children[position - 1]) if position > 0 else None
        following = self.get(children[position + 1]) if position + 1 < len(children) else None
        return previous, following


class AddedElement(_SnapshotModel):
    """Summary of an element a ``MutationObserver`` saw being added."""

    tag: str = ""
    element_id: str = ""
    class_name: str = ""
    text: str = ""

    @pydantic.field_validator("*", mode="before")
    @classmethod
    def _strings(cls, value: object) -> str:
        return _coerce_str(value)
