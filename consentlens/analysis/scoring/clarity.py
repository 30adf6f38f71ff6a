"""Clarity and transparency scoring.

Rewards plain-language commitments, worked examples, reachable
contacts, a documented update process and visible structure.
Penalises heavy legalese and open-ended discretion phrases.
"""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-Clarity")

FACTOR = factors.CLARITY


def calculate(text: str) -> policy.FactorResult:
    """Score how readable and transparent the policy is (max 15, base 6).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with positive/negative findings.
    """
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    if indicators.contains_any(text, policy_patterns.PLAIN_LANGUAGE_PHRASES):
        points += 3
        positive.append("Clear language commitment")

    if indicators.contains_any(text, policy_patterns.EXAMPLE_PHRASES):
        points += 2
        positive.append("Examples provided")

    if policy_patterns.CONTACT_TERM in text and indicators.contains_any(text, policy_patterns.CONTACT_CHANNEL_TERMS):
        points += 3
        positive.append("Contact information provided")

    if indicators.contains_all(text, policy_patterns.POLICY_UPDATE_TERMS):
        points += 2
        positive.append("Policy update process mentioned")

    if indicators.contains_any(text, policy_patterns.STRUCTURE_TERMS):
        points += 2
        positive.append("Structured policy format")

    complex_terms = indicators.matching_phrases(text, policy_patterns.COMPLEX_LEGAL_TERMS)
    if len(complex_terms) > policy_patterns.MAX_COMPLEX_TERMS:
        points -= 2
        negative.append("Complex legal language detected")

    if indicators.contains_any(text, policy_patterns.VAGUE_PHRASES):
        points -= 3
        negative.append("Vague and broad language")

    score = FACTOR.clamp(points)
    log.debug("Clarity score", {"score": score, "adjustment": points, "complexTerms": len(complex_terms)})

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(positive=positive, negative=negative),
    )
