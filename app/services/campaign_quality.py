"""Overall quality status of a campaign from schema validity and brand score."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from app.schemas.campaign import QualityStatus
from app.schemas.lookpost import ValidationResult
from app.services.campaign_filters.facets import effective_compliance_score

EXCELLENT_SCORE = 80
GOOD_SCORE = 60
REVIEW_SCORE = 50


def assess_campaign_quality(campaign: Mapping[str, Any], result: ValidationResult) -> QualityStatus:
    """Combine the validation outcome with the campaign's compliance score.

    A campaign only counts as excellent when its stored JSON needed no
    corrections.
    """
    if not result.valid:
        return "invalid"

    score = effective_compliance_score(campaign)
    if not result.corrected and score >= EXCELLENT_SCORE:
        return "excellent"
    if score >= GOOD_SCORE:
        return "good"
    if score >= REVIEW_SCORE:
        return "needs_review"
    return "attention"
