"""Pydantic models for detected cookie banners and their links."""

from __future__ import annotations

from typing import Literal

import pydantic
from pydantic import alias_generators


DetectionMethod = Literal["known-selector", "position-content"]

PrivacyLinkType = Literal[
    "privacy_policy",
    "cookie_policy",
    "terms_of_service",
    "gdpr_info",
    "legal_notice",
    "cookie_settings",
    "preferences",
    "opt_out_in",
    "generic_action",
    "consent_button",
    "action_button",
    "other_policy",
]


class _RecordModel(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(
        alias_generator=alias_generators.to_camel,
        populate_by_name=True,
        frozen=True,
    )


class BannerScore(_RecordModel):
    """Heuristic cookie-banner likelihood of one candidate.

    ``signals`` maps each contributing signal to its point delta so
    that a score can be explained after the fact.
    """

    score: float = 0.0
    signals: dict[str, float] = pydantic.Field(default_factory=dict)


class BannerButton(_RecordModel):
    """A clickable control found inside a banner."""

    text: str
    type: str = "button"
    classes: str = ""
    element_id: str = pydantic.Field(default="", alias="id")


class PolicyLink(_RecordModel):
    """An anchor whose href points at a policy-like page."""

    text: str
    href: str
    classes: str = ""
    element_id: str = pydantic.Field(default="", alias="id")


class LinkContext(_RecordModel):
    """Why a link was judged privacy-related."""

    has_privacy_context: bool = False
    is_in_privacy_container: bool = False
    is_generic_link: bool = False


class PrivacyLink(_RecordModel):
    """A privacy-related link extracted from a banner."""

    text: str
    href: str
    title: str = ""
    aria_label: str = ""
    type: PrivacyLinkType = "other_policy"
    classes: str = ""
    element_id: str = pydantic.Field(default="", alias="id")
    surrounding_text: str = ""
    context: LinkContext = pydantic.Field(default_factory=LinkContext)


class BannerPosition(_RecordModel):
    top: float = 0.0
    left: float = 0.0
    width: float = 0.0
    height: float = 0.0


class BannerStyling(_RecordModel):
    position: str = ""
    z_index: str = ""
    background_color: str = ""


class DetectedBanner(_RecordModel):
    """Everything captured about an accepted banner candidate.

    Created once per unique candidate and never mutated; serialize
    with ``model_dump(by_alias=True)`` for the storage API.
    """

    id: str
    url: str
    domain: str
    timestamp: str
    detection_method: DetectionMethod
    text_content: str = ""
    html_content: str = ""
    buttons: list[BannerButton] = pydantic.Field(default_factory=list)
    policy_links: list[PolicyLink] = pydantic.Field(default_factory=list)
    privacy_links: list[PrivacyLink] = pydantic.Field(default_factory=list)
    position: BannerPosition = pydantic.Field(default_factory=BannerPosition)
    styling: BannerStyling = pydantic.Field(default_factory=BannerStyling)
    selector: str = ""
    classes: str = ""
    element_id: str = ""
    score: float = 0.0

    def best_policy_link(self) -> PrivacyLink | None:
        """Return the first privacy- or cookie-policy link, if any."""
        for link in self.privacy_links:
            if link.type in ("privacy_policy", "cookie_policy"):
                return link
        return None


class FailedUpload(_RecordModel):
    """A banner whose submission to the storage API failed."""

    banner: DetectedBanner
    failed_at: str
    error: str = ""


class SubmissionResult(_RecordModel):
    """Outcome of handing a banner to the storage API."""

    success: bool
    banner_id: str | None = None
    error: str | None = None
