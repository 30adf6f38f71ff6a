"""Static configuration of the seven policy factors.

Declaration order is significant: it is the order factors are scored,
reported in the breakdown and turned into recommendations.

Base scores sit deliberately below each factor's midpoint.  A policy
that says nothing about a topic should land on a mediocre-to-poor
score rather than a neutral one.
"""

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class FactorSpec:
    """Point range and recommendation rule for one factor."""

    key: str
    label: str
    max_points: int
    base_score: int
    recommendation_threshold: int
    recommendation: str

    def clamp(self, raw_adjustment: int) -> int:
        """Apply the base score to *raw_adjustment* and clamp to ``[0, max_points]``."""
        return max(0, min(self.max_points, raw_adjustment + self.base_score))


DATA_COLLECTION = FactorSpec(
    key="dataCollection",
    label="Data Collection",
    max_points=20,
    base_score=8,
    recommendation_threshold=12,
    recommendation="Improve data collection transparency and minimize data collection",
)
DATA_SHARING = FactorSpec(
    key="dataSharing",
    label="Data Sharing",
    max_points=15,
    base_score=5,
    recommendation_threshold=8,
    recommendation="Provide clearer information about third-party data sharing and limit sharing scope",
)
USER_RIGHTS = FactorSpec(
    key="userRights",
    label="User Rights",
    max_points=15,
    base_score=3,
    recommendation_threshold=8,
    recommendation="Enhance user rights and provide clear processes for data access/modification",
)
DATA_SECURITY = FactorSpec(
    key="dataSecurity",
    label="Data Security",
    max_points=10,
    base_score=3,
    recommendation_threshold=6,
    recommendation="Strengthen data security measures and provide more security details",
)
CLARITY = FactorSpec(
    key="clarity",
    label="Clarity",
    max_points=15,
    base_score=6,
    recommendation_threshold=8,
    recommendation="Improve policy clarity and use more accessible language",
)
DATA_RETENTION = FactorSpec(
    key="dataRetention",
    label="Data Retention",
    max_points=10,
    base_score=3,
    recommendation_threshold=6,
    recommendation="Provide clearer data retention policies and deletion processes",
)
CONSENT_MECHANISMS = FactorSpec(
    key="consentMechanisms",
    label="Consent Mechanisms",
    max_points=15,
    base_score=4,
    recommendation_threshold=8,
    recommendation="Improve consent mechanisms and provide better opt-out options",
)

FACTORS: tuple[FactorSpec, ...] = (
    DATA_COLLECTION,
    DATA_SHARING,
    USER_RIGHTS,
    DATA_SECURITY,
    CLARITY,
    DATA_RETENTION,
    CONSENT_MECHANISMS,
)

FACTOR_KEYS: tuple[str, ...] = tuple(f.key for f in FACTORS)


def get_factor(key: str) -> FactorSpec:
    """Look up a factor by its breakdown key.

    Raises:
        ValueError: If *key* is not a known factor.
    """
    for factor in FACTORS:
        if factor.key == key:
            return factor
    raise ValueError(f"Unknown policy factor {key!r}. Valid factors: {', '.join(FACTOR_KEYS)}")
