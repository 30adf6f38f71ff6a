"""User rights and control scoring."""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-UserRights")

FACTOR = factors.USER_RIGHTS

# Points per right, in table order.
_RIGHT_POINTS: dict[str, tuple[int, str]] = {
    "access": (3, "Right to access data"),
    "modify": (3, "Right to modify data"),
    "delete": (4, "Right to delete data"),
    "portability": (2, "Data portability rights"),
    "optOut": (3, "Opt-out rights"),
}


def calculate(text: str) -> policy.FactorResult:
    """Score the rights a policy grants and how hard they are to use (max 15, base 3).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with the rights found in ``details.rights``.
    """
    rights = indicators.match_categories(text, policy_patterns.USER_RIGHTS_INDICATORS)
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    if indicators.contains_any(text, policy_patterns.RIGHTS_LIMITATION_PHRASES):
        points -= 4
        negative.append("Limited deletion rights")

    if indicators.contains_all(text, policy_patterns.SLOW_PROCESSING_TERMS):
        points -= 2
        negative.append("Slow processing of requests")

    if indicators.contains_any(text, policy_patterns.DIFFICULT_ACCESS_PHRASES):
        points -= 3
        negative.append("Difficult to exercise rights")

    for right in rights:
        right_points, description = _RIGHT_POINTS[right]
        points += right_points
        positive.append(description)

    if indicators.contains_all(text, policy_patterns.RIGHTS_REQUEST_TERMS):
        points += 2
        positive.append("Clear process for exercising rights")

    if len(rights) < policy_patterns.MIN_RIGHTS:
        points -= 2
        negative.append("Limited user rights provided")

    score = FACTOR.clamp(points)
    log.debug("User rights score", {"score": score, "adjustment": points, "rights": rights})

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(rights=rights, positive=positive, negative=negative),
    )
