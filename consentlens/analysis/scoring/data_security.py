"""Data security scoring."""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-DataSecurity")

FACTOR = factors.DATA_SECURITY

_MEASURE_POINTS: dict[str, tuple[int, str]] = {
    "encryption": (3, "Encryption mentioned"),
    "accessControl": (2, "Access controls mentioned"),
    "monitoring": (2, "Security monitoring mentioned"),
    "training": (1, "Employee training mentioned"),
    "incident": (2, "Incident response plan mentioned"),
}


def calculate(text: str) -> policy.FactorResult:
    """Score described security measures (max 10, base 3).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with the measures found in ``details.measures``.
    """
    measures = indicators.match_categories(text, policy_patterns.SECURITY_MEASURE_INDICATORS)
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    for measure in measures:
        measure_points, description = _MEASURE_POINTS[measure]
        points += measure_points
        positive.append(description)

    if not measures:
        points -= 2
        negative.append("No security measures mentioned")

    score = FACTOR.clamp(points)
    log.debug("Data security score", {"score": score, "measures": measures})

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(measures=measures, positive=positive, negative=negative),
    )
