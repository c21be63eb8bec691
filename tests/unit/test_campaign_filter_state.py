"""Unit tests for filter state helpers."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from app.schemas.filters import ComplianceScoreRange, DateRange, FilterState, SortSpec
from app.services.campaign_filters.state import (
    COMPLIANCE_RANGES,
    clear_filter,
    count_active_filters,
    default_filter_state,
    is_valid_filter,
    reset_filters,
    resolve_date_preset,
    sanitize_filter_payload,
)


def test_default_state_has_no_active_filters() -> None:
    state = default_filter_state()

    assert count_active_filters(state) == 0
    assert state.sort == SortSpec(sort_by="created_at", direction="desc")


def test_reset_returns_independent_defaults() -> None:
    first = reset_filters()
    first.colors.append("red")

    assert reset_filters().colors == []


def test_count_active_filters_counts_each_criterion_once() -> None:
    state = FilterState(
        text_search="linen",
        colors=["red", "blue"],
        styles=["boho"],
        compliance_score=ComplianceScoreRange(min=70, max=100),
        has_adjustments=["with"],
        sort=SortSpec(sort_by="title", direction="asc"),
    )

    assert count_active_filters(state) == 6


def test_full_compliance_range_and_blank_search_are_inactive() -> None:
    state = FilterState(
        text_search="   ",
        compliance_score=ComplianceScoreRange(min=0, max=100),
    )

    assert count_active_filters(state) == 0


def test_clear_filter_restores_one_default() -> None:
    state = FilterState(text_search="linen", colors=["red"])

    cleared = clear_filter(state, "colors")

    assert cleared.colors == []
    assert cleared.text_search == "linen"
    assert state.colors == ["red"]


def test_schema_rejects_inverted_ranges() -> None:
    with pytest.raises(ValidationError):
        ComplianceScoreRange(min=80, max=20)
    with pytest.raises(ValidationError):
        ComplianceScoreRange(min=-1, max=20)
    with pytest.raises(ValidationError):
        DateRange(
            start=datetime(2025, 2, 1, tzinfo=timezone.utc),
            end=datetime(2025, 1, 1, tzinfo=timezone.utc),
        )


def test_is_valid_filter_checks_untrusted_payloads() -> None:
    assert is_valid_filter({})
    assert is_valid_filter({"compliance_score": {"min": 0, "max": 100}})
    assert not is_valid_filter({"compliance_score": {"min": 90, "max": 10}})
    assert not is_valid_filter({"compliance_score": {"min": "a", "max": 10}})
    assert not is_valid_filter(
        {"date_range": {"start": "2025-02-01T00:00:00Z", "end": "2025-01-01T00:00:00Z"}}
    )


def test_sanitize_drops_invalid_parts_and_keeps_the_rest() -> None:
    payload = {
        "text_search": "linen",
        "compliance_score": {"min": 90, "max": 10},
        "date_range": {"start": "2025-02-01T00:00:00Z", "end": "2025-01-01T00:00:00Z"},
        "colors": ["red", 3, None],
        "has_adjustments": ["with", "maybe"],
        "sort": {"sort_by": "nonsense", "direction": "asc"},
    }

    state = sanitize_filter_payload(payload)

    assert state.text_search == "linen"
    assert state.compliance_score is None
    assert state.date_range == DateRange()
    assert state.colors == ["red"]
    assert state.has_adjustments == ["with"]
    assert state.sort == SortSpec(sort_by="created_at", direction="asc")


def test_sanitize_parses_dates_back_into_datetimes() -> None:
    state = sanitize_filter_payload(
        {"date_range": {"start": "2025-01-01T00:00:00Z", "end": None, "preset": "custom"}}
    )

    assert state.date_range.start == datetime(2025, 1, 1, tzinfo=timezone.utc)
    assert state.date_range.end is None
    assert state.date_range.preset == "custom"


def test_sanitize_accepts_iso_week_dates_and_drops_unrepresentable_bounds() -> None:
    state = sanitize_filter_payload(
        {"date_range": {"start": "2025-W01-2", "end": "0001-01-01T00:00:00+05:00"}}
    )

    assert state.date_range.start == datetime(2024, 12, 31)
    assert state.date_range.end is None


def test_sanitize_non_mapping_gives_defaults() -> None:
    assert sanitize_filter_payload(["nope"]) == FilterState()
    assert sanitize_filter_payload(None) == FilterState()


def test_resolve_date_presets() -> None:
    now = datetime(2025, 3, 15, 14, 30, tzinfo=timezone.utc)

    today = resolve_date_preset("today", now)
    assert today.start == datetime(2025, 3, 15, tzinfo=timezone.utc)
    assert today.end == datetime(2025, 3, 16, tzinfo=timezone.utc)

    yesterday = resolve_date_preset("yesterday", now)
    assert yesterday.start == datetime(2025, 3, 14, tzinfo=timezone.utc)
    assert yesterday.end == datetime(2025, 3, 15, tzinfo=timezone.utc)

    last7 = resolve_date_preset("last7days", now)
    assert last7.start == datetime(2025, 3, 8, 14, 30, tzinfo=timezone.utc)
    assert last7.end == now

    this_month = resolve_date_preset("thisMonth", now)
    assert this_month.start == datetime(2025, 3, 1, tzinfo=timezone.utc)
    assert this_month.end == datetime(2025, 3, 31, 23, 59, 59, 999999, tzinfo=timezone.utc)

    last_month = resolve_date_preset("lastMonth", now)
    assert last_month.start == datetime(2025, 2, 1, tzinfo=timezone.utc)
    assert last_month.end.day == 28

    assert resolve_date_preset("custom", now) is None
    assert resolve_date_preset(None, now) is None


def test_last_month_in_january_wraps_to_december() -> None:
    window = resolve_date_preset("lastMonth", datetime(2025, 1, 10))

    assert window.start == datetime(2024, 12, 1)
    assert window.end == datetime(2024, 12, 31, 23, 59, 59, 999999)


def test_compliance_bands_cover_the_whole_scale() -> None:
    covered = sorted(score for band in COMPLIANCE_RANGES for score in range(band.min, band.max + 1))

    assert covered == list(range(0, 101))
