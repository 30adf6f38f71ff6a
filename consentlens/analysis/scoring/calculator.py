"""Privacy policy score calculator — orchestrator.

Normalizes the policy text, runs each factor module in declaration
order, sums the clamped factor scores into a 0–100 total and attaches
a letter grade plus recommendations for the weak factors.

Scoring is total: ``None``, non-strings and empty text all score as
an empty policy rather than raising.
"""

from __future__ import annotations

from collections.abc import Callable

from consentlens.analysis import indicators
from consentlens.analysis.scoring import (
    clarity,
    consent_mechanisms,
    data_collection,
    data_retention,
    data_security,
    data_sharing,
    factors,
    grading,
    user_rights,
)
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("PolicyScore")

# Factor key -> scoring function, in declaration order.
_CALCULATORS: dict[str, Callable[[str], policy.FactorResult]] = {
    factors.DATA_COLLECTION.key: data_collection.calculate,
    factors.DATA_SHARING.key: data_sharing.calculate,
    factors.USER_RIGHTS.key: user_rights.calculate,
    factors.DATA_SECURITY.key: data_security.calculate,
    factors.CLARITY.key: clarity.calculate,
    factors.DATA_RETENTION.key: data_retention.calculate,
    factors.CONSENT_MECHANISMS.key: consent_mechanisms.calculate,
}


# ── Public API ──────────────────────────────────────────────


def score_privacy_policy(content: object) -> policy.PolicyScoreResult:
    """Score privacy policy text against the rubric.

    Args:
        content: Main-content policy text.  Anything that is not a
            string is scored as empty text.

    Returns:
        A :class:`PolicyScoreResult` with the total, grade,
        per-factor breakdown and details, and recommendations.
    """
    text = indicators.normalize_text(content)
    log.info("Scoring privacy policy", {"length": len(text)})

    breakdown: dict[str, int] = {}
    details: dict[str, policy.FactorDetails] = {}
    for factor in factors.FACTORS:
        result = _CALCULATORS[factor.key](text)
        breakdown[factor.key] = result.score
        details[factor.key] = result.details

    total_score = sum(breakdown.values())
    grade = grading.letter_grade(total_score)
    recommendations = grading.generate_recommendations(breakdown)

    log.success(
        "Privacy policy scored",
        {"totalScore": total_score, "grade": grade, **breakdown},
    )
    for key, factor_details in details.items():
        if factor_details.negative:
            log.debug(f"Score detail [{key}]", {"points": breakdown[key], "negative": factor_details.negative})

    return policy.PolicyScoreResult(
        total_score=total_score,
        letter_grade=grade,
        breakdown=breakdown,
        details=details,
        recommendations=recommendations,
    )
