"""Letter grades and recommendations for policy scores."""

from __future__ import annotations

from collections.abc import Mapping

from consentlens.analysis.scoring import factors
from consentlens.models import policy

# Inclusive lower bounds, best grade first.
_GRADE_THRESHOLDS: tuple[tuple[int, policy.LetterGrade], ...] = (
    (90, "A"),
    (75, "B"),
    (60, "C"),
    (45, "D"),
    (30, "E"),
)


def letter_grade(total_score: int) -> policy.LetterGrade:
    """Map a 0-100 total to a letter grade.

    A >= 90, B >= 75, C >= 60, D >= 45, E >= 30, anything
    lower is an F.
    """
    for threshold, grade in _GRADE_THRESHOLDS:
        if total_score >= threshold:
            return grade
    return "F"


def generate_recommendations(breakdown: Mapping[str, int]) -> list[str]:
    """Build recommendations for every factor scoring under its threshold.

    Factors missing from *breakdown* count as zero.  Output follows
    factor declaration order; an empty list means every factor met
    its threshold.

    Args:
        breakdown: Factor key to awarded points.

    Returns:
        Fixed recommendation strings, one per weak factor.
    """
    return [
        factor.recommendation
        for factor in factors.FACTORS
        if breakdown.get(factor.key, 0) < factor.recommendation_threshold
    ]
