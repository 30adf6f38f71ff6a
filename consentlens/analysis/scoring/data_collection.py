"""Data collection scoring.

Evaluates what kinds of data a policy says it collects, penalising
sensitive, behavioural, location and blanket collection and
rewarding minimisation, anonymisation and stated purposes.
"""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-DataCollection")

FACTOR = factors.DATA_COLLECTION


def calculate(text: str) -> policy.FactorResult:
    """Score data collection practices (max 20, base 8).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with the matched data categories in
        ``details.collected``.
    """
    collected = indicators.match_categories(text, policy_patterns.DATA_COLLECTION_INDICATORS)
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    # ── Penalties ───────────────────────────────────────────
    if "extensiveCollection" in collected:
        points -= 8
        negative.append("Extensive/blanket data collection")

    if "sensitiveData" in collected:
        points -= 6
        negative.append("Sensitive data collection detected")

    if "behavioralData" in collected:
        points -= 4
        negative.append("Behavioral data collection")

    if "locationData" in collected:
        points -= 3
        negative.append("Location data collection")

    if indicators.contains_any(text, policy_patterns.BROAD_COLLECTION_PHRASES):
        points -= 5
        negative.append("Broad/blanket data collection language")

    # ── Positive factors ────────────────────────────────────
    if "minimalCollection" in collected:
        points += 8
        positive.append("Minimal data collection mentioned")

    if "anonymized" in collected:
        points += 6
        positive.append("Data anonymization practices mentioned")

    if indicators.contains_all(text, policy_patterns.COLLECTION_PURPOSE_TERMS):
        points += 3
        positive.append("Clear purpose for data collection")

    # ── Scope ───────────────────────────────────────────────
    if len(collected) > policy_patterns.MAX_COLLECTED_CATEGORIES:
        points -= 4
        negative.append("Extensive data collection detected")

    score = FACTOR.clamp(points)
    log.debug("Data collection score", {"score": score, "adjustment": points, "collected": collected})

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(collected=collected, positive=positive, negative=negative),
    )
