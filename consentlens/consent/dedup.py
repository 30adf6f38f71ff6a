"""Duplicate suppression for detected banners.

Two records are the same banner when they come from the same domain
and their text lengths are within a small window of each other.
Records with empty text never count as duplicates.
"""

from __future__ import annotations

from collections.abc import Iterable

from consentlens.consent import constants
from consentlens.models import banner


def is_duplicate(
    candidate: banner.DetectedBanner,
    existing: Iterable[banner.DetectedBanner],
    window: int = constants.DEDUP_TEXT_WINDOW,
) -> bool:
    """``True`` when *candidate* matches any record in *existing*."""
    candidate_length = len(candidate.text_content)
    if candidate_length == 0:
        return False
    return any(
        record.domain == candidate.domain
        and len(record.text_content) > 0
        and abs(len(record.text_content) - candidate_length) < window
        for record in existing
    )


class BannerLedger:
    """Most recent accepted records, bounded to *max_records*.

    Stands in for the local record store: a record is only added
    (and handed on) when it is not a duplicate of one already kept.
    """

    def __init__(
        self,
        max_records: int = constants.MAX_LOCAL_RECORDS,
        window: int = constants.DEDUP_TEXT_WINDOW,
    ) -> None:
        self._max_records = max_records
        self._window = window
        self._records: list[banner.DetectedBanner] = []

    def __len__(self) -> int:
        return len(self._records)

    @property
    def records(self) -> list[banner.DetectedBanner]:
        """Kept records, oldest first."""
        return list(self._records)

    def is_duplicate(self, candidate: banner.DetectedBanner) -> bool:
        return is_duplicate(candidate, self._records, self._window)

    def add(self, candidate: banner.DetectedBanner) -> bool:
        """Keep *candidate* unless it is a duplicate.

        Returns:
            ``True`` when the record was added.
        """
        if self.is_duplicate(candidate):
            return False
        self._records.append(candidate)
        if len(self._records) > self._max_records:
            del self._records[: len(self._records) - self._max_records]
        return True

    def replace(self, record: banner.DetectedBanner) -> None:
        """Swap the kept record that has the same id for *record*."""
        self._records = [record if kept.id == record.id else kept for kept in self._records]
