"""Filter state helpers: defaults, validation, presets and active counts."""

from __future__ import annotations

import calendar
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Literal, get_args

from app.schemas.filters import (
    AdjustmentPresence,
    DatePreset,
    DateRange,
    FilterState,
    SortDirection,
    SortField,
    SortSpec,
)
from app.services.campaign_filters.facets import to_datetime, to_timestamp

FilterKey = Literal[
    "text_search",
    "date_range",
    "compliance_score",
    "colors",
    "styles",
    "budget",
    "occasion",
    "audience",
    "has_adjustments",
    "sort",
]

_LIST_KEYS: tuple[str, ...] = ("colors", "styles", "budget", "occasion", "audience")
_SCORE_FLOOR = 0
_SCORE_CEILING = 100


@dataclass(frozen=True, slots=True)
class ComplianceBand:
    """Named compliance score band offered as a quick filter."""

    min: int
    max: int
    label: str
    color: str


COMPLIANCE_RANGES: tuple[ComplianceBand, ...] = (
    ComplianceBand(min=90, max=100, label="excellent", color="green"),
    ComplianceBand(min=70, max=89, label="good", color="blue"),
    ComplianceBand(min=50, max=69, label="regular", color="yellow"),
    ComplianceBand(min=0, max=49, label="needs_improvement", color="red"),
)


def default_filter_state() -> FilterState:
    return FilterState()


def reset_filters() -> FilterState:
    """Return a fresh default state that shares nothing with earlier states."""
    return default_filter_state()


def is_valid_filter(payload: Mapping[str, Any]) -> bool:
    """Check range invariants of an untrusted filter payload."""
    score = payload.get("compliance_score")
    if score is not None and not _valid_score_range(score):
        return False

    date_range = payload.get("date_range")
    if isinstance(date_range, Mapping):
        start = to_timestamp(date_range.get("start"))
        end = to_timestamp(date_range.get("end"))
        if start is not None and end is not None and start > end:
            return False

    return True


def sanitize_filter_payload(payload: Any) -> FilterState:
    """Build a FilterState from stored JSON, dropping anything invalid.

    An invalid compliance range resets to None and an inverted date range
    resets to empty, mirroring how a saved state is re-checked before use.
    """
    if not isinstance(payload, Mapping):
        return default_filter_state()

    clean: dict[str, Any] = {}

    text_search = payload.get("text_search")
    if isinstance(text_search, str):
        clean["text_search"] = text_search

    clean["date_range"] = _sanitize_date_range(payload.get("date_range"))

    score = payload.get("compliance_score")
    clean["compliance_score"] = (
        {"min": score["min"], "max": score["max"]} if _valid_score_range(score) else None
    )

    for key in _LIST_KEYS:
        clean[key] = _string_list(payload.get(key))

    allowed_presence = set(get_args(AdjustmentPresence))
    clean["has_adjustments"] = [
        value for value in _string_list(payload.get("has_adjustments")) if value in allowed_presence
    ]

    clean["sort"] = _sanitize_sort(payload.get("sort"))
    return FilterState.model_validate(clean)


def count_active_filters(state: FilterState) -> int:
    """Count criteria that narrow or reorder the default campaign list."""
    count = 0
    if state.text_search.strip():
        count += 1
    if state.date_range.start is not None or state.date_range.end is not None:
        count += 1
    if state.compliance_score is not None and (
        state.compliance_score.min > _SCORE_FLOOR or state.compliance_score.max < _SCORE_CEILING
    ):
        count += 1
    for selected in (
        state.colors,
        state.styles,
        state.budget,
        state.occasion,
        state.audience,
        state.has_adjustments,
    ):
        if selected:
            count += 1
    if state.sort != SortSpec():
        count += 1
    return count


def clear_filter(state: FilterState, key: FilterKey) -> FilterState:
    """Return a copy of `state` with one criterion back at its default."""
    defaults = default_filter_state()
    return state.model_copy(update={key: getattr(defaults, key)}, deep=True)


def resolve_date_preset(preset: DatePreset | None, now: datetime) -> DateRange | None:
    """Translate a named preset into a concrete window relative to `now`.

    Returns None for `custom` (the caller supplies explicit dates) and for an
    absent preset.
    """
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if preset == "today":
        start, end = midnight, midnight + timedelta(days=1)
    elif preset == "yesterday":
        start, end = midnight - timedelta(days=1), midnight
    elif preset == "last7days":
        start, end = now - timedelta(days=7), now
    elif preset == "last30days":
        start, end = now - timedelta(days=30), now
    elif preset == "thisMonth":
        start, end = _month_bounds(midnight.year, midnight.month, now)
    elif preset == "lastMonth":
        year, month = (midnight.year - 1, 12) if midnight.month == 1 else (midnight.year, midnight.month - 1)
        start, end = _month_bounds(year, month, now)
    else:
        return None

    return DateRange(start=start, end=end, preset=preset)


def _month_bounds(year: int, month: int, now: datetime) -> tuple[datetime, datetime]:
    # Bounds carry the tzinfo of `now`, naive or aware.
    last_day = calendar.monthrange(year, month)[1]
    start = datetime(year, month, 1, tzinfo=now.tzinfo)
    end = datetime(year, month, last_day, 23, 59, 59, 999999, tzinfo=now.tzinfo)
    return start, end


def _valid_score_range(value: Any) -> bool:
    if not isinstance(value, Mapping):
        return False
    low = value.get("min")
    high = value.get("max")
    if not _is_number(low) or not _is_number(high):
        return False
    return _SCORE_FLOOR <= low <= high <= _SCORE_CEILING


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool) and value == value


def _sanitize_date_range(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}

    start = _bound(value.get("start"))
    end = _bound(value.get("end"))
    if start is not None and end is not None and to_timestamp(start) > to_timestamp(end):
        return {}

    preset = value.get("preset")
    clean: dict[str, Any] = {"start": start, "end": end}
    if preset in get_args(DatePreset):
        clean["preset"] = preset
    return clean


def _bound(value: Any) -> datetime | None:
    # Keep only bounds that convert to an epoch timestamp.
    moment = to_datetime(value)
    if moment is None or to_timestamp(moment) is None:
        return None
    return moment


def _sanitize_sort(value: Any) -> dict[str, Any]:
    if not isinstance(value, Mapping):
        return {}
    clean: dict[str, Any] = {}
    if value.get("sort_by") in get_args(SortField):
        clean["sort_by"] = value["sort_by"]
    if value.get("direction") in get_args(SortDirection):
        clean["direction"] = value["direction"]
    return clean


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


__all__ = [
    "COMPLIANCE_RANGES",
    "ComplianceBand",
    "FilterKey",
    "clear_filter",
    "count_active_filters",
    "default_filter_state",
    "is_valid_filter",
    "reset_filters",
    "resolve_date_preset",
    "sanitize_filter_payload",
]
