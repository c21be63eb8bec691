"""Facet extraction over heterogeneous campaign records.

Campaigns carry the same facet in several places depending on which app
version produced them (`palette_hex`, `product.colors`, the image analysis,
and the legacy `lookpost_schema` blob). Each extractor merges all sources,
splits comma/ampersand separated strings, trims, and de-duplicates
case-insensitively keeping the first spelling seen.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from app.services.lookpost.fields import (
    campaign_input,
    campaign_product,
    image_analysis,
    instagram_caption,
    legacy_schema,
)

_LIST_SEPARATOR_RE = re.compile(r"[,&]")


def normalize_list(value: Any) -> list[str]:
    """Turn a list or a delimited string into trimmed, non-empty strings."""
    if not value:
        return []
    if isinstance(value, str):
        items: Iterable[Any] = _LIST_SEPARATOR_RE.split(value)
    elif isinstance(value, list | tuple):
        items = value
    else:
        return []

    normalized: list[str] = []
    for item in items:
        text = item.strip() if isinstance(item, str) else str(item).strip()
        if text:
            normalized.append(text)
    return normalized


def dedupe_insensitive(values: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for value in values:
        key = value.lower()
        if key not in seen:
            seen.add(key)
            result.append(value)
    return result


def campaign_colors(campaign: Mapping[str, Any]) -> list[str]:
    return dedupe_insensitive(
        [
            *normalize_list(campaign.get("palette_hex")),
            *normalize_list(campaign_product(campaign).get("colors")),
            *normalize_list(image_analysis(campaign).get("colors")),
            *normalize_list(legacy_schema(campaign).get("dominant_colors")),
        ]
    )


def campaign_styles(campaign: Mapping[str, Any]) -> list[str]:
    return dedupe_insensitive(
        [
            *normalize_list(image_analysis(campaign).get("styleAesthetic")),
            *normalize_list(campaign_product(campaign).get("style")),
            *normalize_list(legacy_schema(campaign).get("style_aesthetic")),
        ]
    )


def campaign_budgets(campaign: Mapping[str, Any]) -> list[str]:
    return dedupe_insensitive(
        [
            *normalize_list(campaign_input(campaign).get("budget_hint")),
            *normalize_list(legacy_schema(campaign).get("budget_category")),
        ]
    )


def campaign_occasions(campaign: Mapping[str, Any]) -> list[str]:
    return dedupe_insensitive(
        [
            *normalize_list(campaign_input(campaign).get("occasion")),
            *normalize_list(legacy_schema(campaign).get("occasion_event")),
        ]
    )


def campaign_audiences(campaign: Mapping[str, Any]) -> list[str]:
    return dedupe_insensitive(
        [
            *normalize_list(campaign_input(campaign).get("audience")),
            *normalize_list(legacy_schema(campaign).get("target_audience")),
        ]
    )


def effective_compliance_score(campaign: Mapping[str, Any]) -> float:
    """Current score, else the original score, else 0."""
    for key in ("brand_compliance_score", "brand_compliance_original_score"):
        value = campaign.get(key)
        if isinstance(value, int | float) and not isinstance(value, bool):
            return value
    return 0


def campaign_has_adjustments(campaign: Mapping[str, Any]) -> bool:
    direct = campaign.get("brand_compliance_adjustments")
    legacy = legacy_schema(campaign).get("brand_compliance_adjustments")
    return _non_empty(direct) or _non_empty(legacy)


def search_corpus(campaign: Mapping[str, Any]) -> list[str]:
    """Text fields matched by the free-text search."""
    values = [
        campaign.get("title"),
        campaign.get("short_description"),
        campaign.get("long_description"),
        campaign.get("prompt"),
        instagram_caption(campaign),
        legacy_schema(campaign).get("prompt"),
    ]
    return [value for value in values if isinstance(value, str)]


def to_datetime(value: Any) -> datetime | None:
    """Parse a datetime or ISO-8601 string; anything else is None."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()
    if text.endswith("Z"):
        text = f"{text[:-1]}+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_timestamp(value: Any) -> float | None:
    """Parse a datetime or ISO-8601 string into epoch seconds (naive = UTC)."""
    moment = to_datetime(value)
    if moment is None:
        return None

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    try:
        return moment.timestamp()
    except (OverflowError, ValueError):
        return None


def _non_empty(value: Any) -> bool:
    if isinstance(value, list | tuple | str):
        return len(value) > 0
    return False
