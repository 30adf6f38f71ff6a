"""Pydantic models for privacy-policy scoring results."""

from __future__ import annotations

from typing import Literal

import pydantic
from pydantic import alias_generators


LetterGrade = Literal["A", "B", "C", "D", "E", "F"]


class FactorDetails(pydantic.BaseModel):
    """Explanation of one factor's score.

    Only the indicator list relevant to the factor is populated
    (``collected`` for data collection, ``third_parties`` for sharing,
    ``rights`` for user rights, ``measures`` for security); the rest
    stay ``None`` and are dropped by :meth:`to_api`.
    """

    model_config = pydantic.ConfigDict(alias_generator=alias_generators.to_camel, populate_by_name=True, frozen=True)

    collected: list[str] | None = None
    third_parties: list[str] | None = None
    rights: list[str] | None = None
    measures: list[str] | None = None
    positive: list[str] = pydantic.Field(default_factory=list)
    negative: list[str] = pydantic.Field(default_factory=list)

    def to_api(self) -> dict[str, list[str]]:
        return self.model_dump(by_alias=True, exclude_none=True)


class FactorResult(pydantic.BaseModel):
    """Score for an individual policy factor."""

    model_config = pydantic.ConfigDict(alias_generator=alias_generators.to_camel, populate_by_name=True, frozen=True)

    score: int = 0
    max_points: int = 0
    details: FactorDetails = pydantic.Field(default_factory=FactorDetails)


class PolicyScoreResult(pydantic.BaseModel):
    """Complete rubric score for one privacy policy."""

    model_config = pydantic.ConfigDict(alias_generator=alias_generators.to_camel, populate_by_name=True, frozen=True)

    total_score: int = 0
    letter_grade: LetterGrade = "F"
    breakdown: dict[str, int] = pydantic.Field(default_factory=dict)
    details: dict[str, FactorDetails] = pydantic.Field(default_factory=dict)
    recommendations: list[str] = pydantic.Field(default_factory=list)

    def to_api(self) -> dict[str, object]:
        """Serialize to the camelCase JSON shape served by the API."""
        data = self.model_dump(by_alias=True, exclude={"details"})
        data["details"] = {name: detail.to_api() for name, detail in self.details.items()}
        return data


class PolicyFetchResult(pydantic.BaseModel):
    """Main-content text fetched from a remote policy page."""

    model_config = pydantic.ConfigDict(alias_generator=alias_generators.to_camel, populate_by_name=True, frozen=True)

    success: bool
    url: str
    content: str = ""
    length: int = 0
    error: str | None = None
