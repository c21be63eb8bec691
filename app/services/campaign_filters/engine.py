"""Filter and sort campaign collections."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any, TypeVar

from app.schemas.filters import FilterState, SortSpec
from app.services.campaign_filters.facets import (
    campaign_audiences,
    campaign_budgets,
    campaign_colors,
    campaign_has_adjustments,
    campaign_occasions,
    campaign_styles,
    effective_compliance_score,
    search_corpus,
    to_timestamp,
)

CampaignT = TypeVar("CampaignT", bound=Mapping[str, Any])

FacetExtractor = Callable[[Mapping[str, Any]], list[str]]


def apply_filters(campaigns: Sequence[CampaignT], filters: FilterState) -> list[CampaignT]:
    """Return the campaigns matching every active criterion, sorted.

    Criteria combine with AND; values selected within one facet combine with
    OR. Unset criteria are ignored. The input sequence is not modified.
    """
    filtered = list(campaigns)

    search_term = filters.text_search.strip().lower()
    if search_term:
        filtered = [
            campaign
            for campaign in filtered
            if any(search_term in value.lower() for value in search_corpus(campaign))
        ]

    start = to_timestamp(filters.date_range.start)
    end = to_timestamp(filters.date_range.end)
    if start is not None or end is not None:
        filtered = [
            campaign
            for campaign in filtered
            if _within(to_timestamp(campaign.get("created_at")) or 0, start, end)
        ]

    if filters.compliance_score is not None:
        low = filters.compliance_score.min
        high = filters.compliance_score.max
        filtered = [
            campaign
            for campaign in filtered
            if low <= effective_compliance_score(campaign) <= high
        ]

    facet_filters: tuple[tuple[list[str], FacetExtractor], ...] = (
        (filters.colors, campaign_colors),
        (filters.styles, campaign_styles),
        (filters.budget, campaign_budgets),
        (filters.occasion, campaign_occasions),
        (filters.audience, campaign_audiences),
    )
    for selected, extractor in facet_filters:
        if selected:
            filtered = _filter_facet(filtered, selected, extractor)

    if filters.has_adjustments:
        include_with = "with" in filters.has_adjustments
        include_without = "without" in filters.has_adjustments
        filtered = [
            campaign
            for campaign in filtered
            if (include_with and campaign_has_adjustments(campaign))
            or (include_without and not campaign_has_adjustments(campaign))
        ]

    return sort_campaigns(filtered, filters.sort)


def sort_campaigns(campaigns: Sequence[CampaignT], sort: SortSpec) -> list[CampaignT]:
    """Stable sort; campaigns with equal keys keep their relative order."""
    key = _SORT_KEYS.get(sort.sort_by, _created_at_key)
    return sorted(campaigns, key=key, reverse=sort.direction == "desc")


def _filter_facet(
    campaigns: list[CampaignT],
    selected: list[str],
    extractor: FacetExtractor,
) -> list[CampaignT]:
    wanted = {value.lower() for value in selected}
    matches: list[CampaignT] = []
    for campaign in campaigns:
        values = {value.lower() for value in extractor(campaign)}
        if values & wanted:
            matches.append(campaign)
    return matches


def _within(value: float, start: float | None, end: float | None) -> bool:
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def _text_key(field: str) -> Callable[[Mapping[str, Any]], str]:
    def key(campaign: Mapping[str, Any]) -> str:
        value = campaign.get(field)
        return value.casefold() if isinstance(value, str) else ""

    return key


def _timestamp_key(field: str) -> Callable[[Mapping[str, Any]], float]:
    def key(campaign: Mapping[str, Any]) -> float:
        return to_timestamp(campaign.get(field)) or 0.0

    return key


_created_at_key = _timestamp_key("created_at")

_SORT_KEYS: dict[str, Callable[[Mapping[str, Any]], Any]] = {
    "title": _text_key("title"),
    "brand_compliance_score": effective_compliance_score,
    "status": _text_key("status"),
    "published_at": _timestamp_key("published_at"),
    "scheduled_at": _timestamp_key("scheduled_at"),
    "created_at": _created_at_key,
}
