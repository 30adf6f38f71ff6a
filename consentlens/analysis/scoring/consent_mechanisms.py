"""Consent and opt-out mechanism scoring.

Implied consent and buried or slow opt-outs are the dark patterns
this factor penalises hardest.
"""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-Consent")

FACTOR = factors.CONSENT_MECHANISMS


def calculate(text: str) -> policy.FactorResult:
    """Score how consent is collected and withdrawn (max 15, base 4).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with positive/negative findings.
    """
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    # ── Dark patterns ───────────────────────────────────────
    if indicators.contains_all(text, policy_patterns.IMPLIED_CONSENT_TERMS):
        points -= 6
        negative.append("Implied consent practices")

    if indicators.contains_any(text, policy_patterns.HIDDEN_OPT_OUT_PHRASES):
        points -= 4
        negative.append("Difficult opt-out mechanisms")

    if indicators.contains_all(text, policy_patterns.SLOW_OPT_OUT_TERMS):
        points -= 3
        negative.append("Slow opt-out processing")

    # ── Good practice ───────────────────────────────────────
    if indicators.contains_all(text, policy_patterns.EXPLICIT_CONSENT_TERMS):
        points += 4
        positive.append("Explicit consent required")

    if indicators.contains_any(text, policy_patterns.OPT_OUT_PHRASES):
        points += 4
        positive.append("Opt-out mechanisms available")

    if indicators.contains_any(text, policy_patterns.GRANULAR_CONSENT_TERMS):
        points += 3
        positive.append("Granular consent options")

    if indicators.contains_all(text, policy_patterns.EASY_WITHDRAWAL_TERMS):
        points += 2
        positive.append("Easy consent withdrawal")

    if indicators.contains_all(text, policy_patterns.OPT_IN_DEFAULT_TERMS):
        points += 2
        positive.append("Opt-in default settings")

    score = FACTOR.clamp(points)
    log.debug("Consent mechanisms score", {"score": score, "adjustment": points})

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(positive=positive, negative=negative),
    )
