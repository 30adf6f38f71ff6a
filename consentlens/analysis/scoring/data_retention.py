"""Data retention and deletion scoring."""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-DataRetention")

FACTOR = factors.DATA_RETENTION


def calculate(text: str) -> policy.FactorResult:
    """Score retention limits and deletion practices (max 10, base 3).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with positive/negative findings.
    """
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    if indicators.contains_any(text, policy_patterns.INDEFINITE_RETENTION_PHRASES):
        points -= 6
        negative.append("Indefinite data retention")

    if indicators.contains_any(text, policy_patterns.POST_DELETION_PHRASES):
        points -= 4
        negative.append("Data retained after account deletion")

    if indicators.contains_any(text, policy_patterns.RETENTION_TERMS):
        points += 3
        positive.append("Data retention policy mentioned")

    if indicators.contains_any(text, policy_patterns.TIMEFRAME_UNITS):
        points += 2
        positive.append("Specific retention timeframes")

    if indicators.contains_all(text, policy_patterns.DELETION_PROCESS_TERMS):
        points += 3
        positive.append("Deletion process described")

    if indicators.contains_all(text, policy_patterns.AUTOMATIC_DELETION_TERMS):
        points += 2
        positive.append("Automatic deletion mentioned")

    score = FACTOR.clamp(points)
    log.debug("Data retention score", {"score": score, "adjustment": points})

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(positive=positive, negative=negative),
    )
