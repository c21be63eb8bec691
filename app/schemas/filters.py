"""Campaign filter state and filter option schemas."""

from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field, model_validator

DatePreset = Literal[
    "today",
    "yesterday",
    "last7days",
    "last30days",
    "thisMonth",
    "lastMonth",
    "custom",
]
SortField = Literal[
    "created_at",
    "title",
    "brand_compliance_score",
    "status",
    "published_at",
    "scheduled_at",
]
SortDirection = Literal["asc", "desc"]
AdjustmentPresence = Literal["with", "without"]


class DateRange(BaseModel):
    """Inclusive created_at window; an absent bound leaves that side open."""

    start: datetime | None = None
    end: datetime | None = None
    preset: DatePreset | None = None

    @model_validator(mode="after")
    def _check_order(self) -> "DateRange":
        if self.start is not None and self.end is not None:
            if _timestamp(self.start) > _timestamp(self.end):
                raise ValueError("date_range.start must not be after date_range.end")
        return self


class ComplianceScoreRange(BaseModel):
    min: float = Field(ge=0, le=100)
    max: float = Field(ge=0, le=100)

    @model_validator(mode="after")
    def _check_order(self) -> "ComplianceScoreRange":
        if self.min > self.max:
            raise ValueError("compliance_score.min must not exceed compliance_score.max")
        return self


class SortSpec(BaseModel):
    sort_by: SortField = "created_at"
    direction: SortDirection = "desc"


class FilterState(BaseModel):
    """User-selected filter and sort criteria for the campaign list."""

    text_search: str = ""
    date_range: DateRange = Field(default_factory=DateRange)
    compliance_score: ComplianceScoreRange | None = None
    colors: list[str] = Field(default_factory=list)
    styles: list[str] = Field(default_factory=list)
    budget: list[str] = Field(default_factory=list)
    occasion: list[str] = Field(default_factory=list)
    audience: list[str] = Field(default_factory=list)
    has_adjustments: list[AdjustmentPresence] = Field(default_factory=list)
    sort: SortSpec = Field(default_factory=SortSpec)


class FilterOption(BaseModel):
    value: str
    label: str
    count: int = 0


class FilterOptions(BaseModel):
    """Distinct facet values observed across a campaign collection."""

    colors: list[FilterOption] = Field(default_factory=list)
    styles: list[FilterOption] = Field(default_factory=list)
    budget: list[FilterOption] = Field(default_factory=list)
    occasion: list[FilterOption] = Field(default_factory=list)
    audience: list[FilterOption] = Field(default_factory=list)
    has_adjustments: list[FilterOption] = Field(default_factory=list)


def _timestamp(value: datetime) -> float:
    # Naive datetimes are read as UTC so mixed inputs stay comparable.
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.timestamp()
