"""Privacy policy scoring package.

Decomposes the policy rubric into focused modules, one per scoring
factor.  The public API is :func:`score_privacy_policy`.
"""

from __future__ import annotations

from consentlens.analysis.scoring.calculator import score_privacy_policy

__all__ = ["score_privacy_policy"]
