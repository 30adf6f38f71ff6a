"""
Phrase tables for the privacy-policy rubric.

Every factor scorer reads its indicator phrases from here, so the
rule set can be audited (and versioned) in one place.  All phrases
are lower-case and matched as substrings of normalized policy text.

Bump ``RUBRIC_VERSION`` whenever a phrase, threshold or weight that
affects scores changes.
"""

from __future__ import annotations

import re

RUBRIC_VERSION = "1.0"

# ============================================================================
# Data Collection
# ============================================================================

DATA_COLLECTION_INDICATORS: dict[str, tuple[str, ...]] = {
    "personalInfo": ("personal information", "personal data", "name", "email", "address", "phone"),
    "sensitiveData": ("health", "medical", "financial", "credit card", "ssn", "social security", "biometric"),
    "locationData": ("location", "gps", "ip address", "geolocation", "precise geolocation"),
    "behavioralData": ("browsing history", "search history", "click data", "behavioral", "messages", "posts", "likes"),
    "minimalCollection": ("minimal", "necessary", "essential", "required only"),
    "anonymized": ("anonymized", "anonymous", "de-identified", "pseudonymized"),
    "extensiveCollection": ("any other data", "everything", "all data", "comprehensive", "extensive"),
}

BROAD_COLLECTION_PHRASES = ("any other", "everything", "all data")
COLLECTION_PURPOSE_TERMS = ("collect", "purpose")

# More collected categories than this counts as broad collection scope.
MAX_COLLECTED_CATEGORIES = 4

# ============================================================================
# Data Sharing
# ============================================================================

THIRD_PARTY_TERMS = ("third party", "third-party", "partner", "vendor", "service provider", "affiliate")
UNRESTRICTED_SHARING_PHRASES = ("any third party", "business purposes")
DATA_SELLING_TERMS = ("sell", "rent")
SPECIFIC_PARTY_TERMS = ("specific", "named", "list")
SHARING_CONSENT_TERMS = ("consent", "third party")
MINIMAL_SHARING_TERMS = ("minimal", "share")
SHARING_DISCRETION_PHRASES = ("as required", "deem necessary")

# "with 300 partners", "12 companies", "45 vendors"
PARTNER_COUNT_RE = re.compile(r"(\d+)\s*(?:compan(?:y|ies)|partners?|vendors?)")

MANY_PARTNERS = 20
SEVERAL_PARTNERS = 10

# ============================================================================
# User Rights
# ============================================================================

USER_RIGHTS_INDICATORS: dict[str, tuple[str, ...]] = {
    "access": ("access", "view", "see", "obtain"),
    "modify": ("modify", "update", "correct", "edit"),
    "delete": ("delete", "remove", "erase", "forget"),
    "portability": ("portable", "export", "download", "transfer"),
    "optOut": ("opt out", "opt-out", "unsubscribe", "withdraw"),
}

RIGHTS_LIMITATION_PHRASES = ("may be retained", "business reasons", "legal reasons")
SLOW_PROCESSING_TERMS = ("up to", "days", "process")
DIFFICULT_ACCESS_PHRASES = ("not easily accessible", "difficult", "complicated")
RIGHTS_REQUEST_TERMS = ("contact", "request")

MIN_RIGHTS = 3

# ============================================================================
# Data Security
# ============================================================================

SECURITY_MEASURE_INDICATORS: dict[str, tuple[str, ...]] = {
    "encryption": ("encrypt", "encryption", "ssl", "tls", "secure"),
    "accessControl": ("access control", "authentication", "authorization", "password"),
    "monitoring": ("monitor", "audit", "log", "detect"),
    "training": ("training", "employee", "staff", "personnel"),
    "incident": ("incident", "breach", "notification", "response"),
}

# ============================================================================
# Clarity
# ============================================================================

PLAIN_LANGUAGE_PHRASES = ("clear", "plain language", "understandable")
EXAMPLE_PHRASES = ("example", "such as", "including")
CONTACT_TERM = "contact"
CONTACT_CHANNEL_TERMS = ("email", "phone", "address")
POLICY_UPDATE_TERMS = ("update", "policy")
STRUCTURE_TERMS = ("section", "part", "chapter")
COMPLEX_LEGAL_TERMS = ("notwithstanding", "hereby", "aforementioned", "pursuant to")
VAGUE_PHRASES = ("deem necessary", "as required", "any other")

MAX_COMPLEX_TERMS = 2

# ============================================================================
# Data Retention
# ============================================================================

INDEFINITE_RETENTION_PHRASES = ("indefinitely", "as long as", "deem necessary")
POST_DELETION_PHRASES = ("even after you delete", "retained after deletion")
RETENTION_TERMS = ("retain", "retention", "keep")
TIMEFRAME_UNITS = ("days", "weeks", "months", "years")
DELETION_PROCESS_TERMS = ("delete", "process")
AUTOMATIC_DELETION_TERMS = ("automatic", "delete")

# ============================================================================
# Consent Mechanisms
# ============================================================================

IMPLIED_CONSENT_TERMS = ("implied", "consent")
HIDDEN_OPT_OUT_PHRASES = ("not easily accessible", "difficult to find")
SLOW_OPT_OUT_TERMS = SLOW_PROCESSING_TERMS
EXPLICIT_CONSENT_TERMS = ("consent", "required")
OPT_OUT_PHRASES = ("opt out", "opt-out", "withdraw")
GRANULAR_CONSENT_TERMS = ("granular", "specific", "category")
EASY_WITHDRAWAL_TERMS = ("easy", "withdraw")
OPT_IN_DEFAULT_TERMS = ("default", "opt in")
