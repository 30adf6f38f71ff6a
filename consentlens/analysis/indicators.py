"""Text indicator matching.

One generic matcher over declarative ``category -> phrases`` tables,
shared by the banner candidate scorer and every policy factor.
Matching is plain substring containment on normalized text, so the
rule tables stay auditable: a category fires when any of its phrases
occurs in the text.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping, Sequence

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_text(content: object) -> str:
    """Lower-case *content* and collapse whitespace runs to one space.

    Anything that is not a string normalizes to ``""`` so that every
    downstream matcher is total over its input.
    """
    if not isinstance(content, str):
        return ""
    return _WHITESPACE_RE.sub(" ", content.lower())


def match_categories(text: str, table: Mapping[str, Sequence[str]]) -> list[str]:
    """Return the categories of *table* with at least one phrase in *text*.

    Categories come back in table order.  Scanning a category stops at
    its first matching phrase.
    """
    return [category for category, phrases in table.items() if any(phrase in text for phrase in phrases)]


def matching_phrases(text: str, phrases: Iterable[str]) -> list[str]:
    """Return the distinct *phrases* that occur in *text*, in input order."""
    found: list[str] = []
    for phrase in phrases:
        if phrase in text and phrase not in found:
            found.append(phrase)
    return found


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """``True`` when at least one of *phrases* occurs in *text*."""
    return any(phrase in text for phrase in phrases)


def contains_all(text: str, phrases: Iterable[str]) -> bool:
    """``True`` when every one of *phrases* occurs in *text*."""
    return all(phrase in text for phrase in phrases)
