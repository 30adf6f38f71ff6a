"""Data sharing and third-party scoring.

Policies that never mention third parties get a flat bonus.
Otherwise the score weighs unrestricted or commercial sharing and
large partner counts against named parties, consent requirements
and minimal sharing.
"""

from __future__ import annotations

from consentlens.analysis import indicators, policy_patterns
from consentlens.analysis.scoring import factors
from consentlens.models import policy
from consentlens.utils import logger

log = logger.create_logger("Score-DataSharing")

FACTOR = factors.DATA_SHARING


def count_partners(text: str) -> int | None:
    """Return the largest "N partners/companies/vendors" count in *text*.

    Partner-name extraction is best-effort; only the count feeds the
    score.  Returns ``None`` when no count is stated.
    """
    counts = [int(m.group(1)) for m in policy_patterns.PARTNER_COUNT_RE.finditer(text)]
    return max(counts) if counts else None


def calculate(text: str) -> policy.FactorResult:
    """Score third-party data sharing (max 15, base 5).

    Args:
        text: Normalized policy text.

    Returns:
        FactorResult with the third-party terms found in
        ``details.third_parties``.
    """
    third_parties = indicators.matching_phrases(text, policy_patterns.THIRD_PARTY_TERMS)
    positive: list[str] = []
    negative: list[str] = []
    points = 0

    if not third_parties:
        points += 8
        positive.append("No third-party sharing mentioned")
        score = FACTOR.clamp(points)
        log.debug("Data sharing score", {"score": score, "thirdParties": 0})
        return policy.FactorResult(
            score=score,
            max_points=FACTOR.max_points,
            details=policy.FactorDetails(third_parties=third_parties, positive=positive, negative=negative),
        )

    # ── Unrestricted / commercial sharing ───────────────────
    if indicators.contains_any(text, policy_patterns.UNRESTRICTED_SHARING_PHRASES):
        points -= 8
        negative.append("Broad third-party sharing without restrictions")

    if indicators.contains_any(text, policy_patterns.DATA_SELLING_TERMS):
        points -= 8
        negative.append("Data selling practices detected")

    # ── Partner volume ──────────────────────────────────────
    partner_count = count_partners(text)
    if partner_count is not None:
        if partner_count > policy_patterns.MANY_PARTNERS:
            points -= 6
            negative.append(f"Sharing with {partner_count} partners")
        elif partner_count > policy_patterns.SEVERAL_PARTNERS:
            points -= 3
            negative.append(f"Sharing with {partner_count} partners")

    # ── Safeguards ──────────────────────────────────────────
    if indicators.contains_any(text, policy_patterns.SPECIFIC_PARTY_TERMS):
        points += 5
        positive.append("Specific third parties mentioned")

    if indicators.contains_all(text, policy_patterns.SHARING_CONSENT_TERMS):
        points += 4
        positive.append("Consent required for third-party sharing")

    if indicators.contains_all(text, policy_patterns.MINIMAL_SHARING_TERMS):
        points += 3
        positive.append("Minimal data sharing practices")

    if indicators.contains_any(text, policy_patterns.SHARING_DISCRETION_PHRASES):
        points -= 4
        negative.append("Broad sharing discretion")

    score = FACTOR.clamp(points)
    log.debug(
        "Data sharing score",
        {"score": score, "adjustment": points, "thirdParties": len(third_parties), "partnerCount": partner_count},
    )

    return policy.FactorResult(
        score=score,
        max_points=FACTOR.max_points,
        details=policy.FactorDetails(third_parties=third_parties, positive=positive, negative=negative),
    )
