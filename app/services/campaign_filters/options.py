"""Derive filter choices and usage counts from a campaign collection."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from app.schemas.filters import FilterOption, FilterOptions
from app.services.campaign_filters.facets import (
    campaign_audiences,
    campaign_budgets,
    campaign_colors,
    campaign_has_adjustments,
    campaign_occasions,
    campaign_styles,
)

WITH_ADJUSTMENTS_LABEL = "With adjustments"
WITHOUT_ADJUSTMENTS_LABEL = "Without adjustments"


class _OptionCounter:
    """Case-insensitive value counter that keeps the first spelling as label."""

    def __init__(self) -> None:
        self._options: dict[str, FilterOption] = {}

    def add(self, values: Iterable[str]) -> None:
        for value in values:
            key = value.lower()
            existing = self._options.get(key)
            if existing is not None:
                existing.count += 1
            else:
                self._options[key] = FilterOption(value=value, label=value, count=1)

    def to_list(self) -> list[FilterOption]:
        return sorted(self._options.values(), key=lambda option: -option.count)


def extract_filter_options(campaigns: Sequence[Mapping[str, Any]]) -> FilterOptions:
    """Collect distinct facet values with counts, most used first."""
    colors = _OptionCounter()
    styles = _OptionCounter()
    budget = _OptionCounter()
    occasion = _OptionCounter()
    audience = _OptionCounter()
    with_adjustments = 0
    without_adjustments = 0

    for campaign in campaigns:
        colors.add(campaign_colors(campaign))
        styles.add(campaign_styles(campaign))
        budget.add(campaign_budgets(campaign))
        occasion.add(campaign_occasions(campaign))
        audience.add(campaign_audiences(campaign))

        if campaign_has_adjustments(campaign):
            with_adjustments += 1
        else:
            without_adjustments += 1

    return FilterOptions(
        colors=colors.to_list(),
        styles=styles.to_list(),
        budget=budget.to_list(),
        occasion=occasion.to_list(),
        audience=audience.to_list(),
        has_adjustments=[
            FilterOption(value="with", label=WITH_ADJUSTMENTS_LABEL, count=with_adjustments),
            FilterOption(
                value="without",
                label=WITHOUT_ADJUSTMENTS_LABEL,
                count=without_adjustments,
            ),
        ],
    )
