"""Campaign API schemas."""

from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from app.schemas.filters import FilterState
from app.schemas.lookpost import LookPostSchema, ValidationLog

QualityStatus = Literal["excellent", "good", "needs_review", "attention", "invalid"]


class CampaignResponse(BaseModel):
    """Stored campaign as returned by list and action endpoints."""

    id: str
    user_id: str
    title: str | None = None
    status: str = "draft"
    prompt: str | None = None
    short_description: str | None = None
    long_description: str | None = None
    instagram: dict[str, Any] | None = None
    centerpiece_image: str | None = None
    accessories_images: list[Any] | None = None
    model_image: str | None = None
    look_visual: str | None = None
    locale: str | None = None
    input: dict[str, Any] | None = None
    product: dict[str, Any] | None = None
    look_items: list[Any] | None = None
    palette_hex: list[Any] | None = None
    seo_keywords: list[Any] | None = None
    brand_tone: str | None = None
    governance: dict[str, Any] | None = None
    telemetry: dict[str, Any] | None = None
    brand_compliance_score: float | None = None
    brand_compliance_original_score: float | None = None
    brand_compliance_adjustments: list[Any] | None = None
    published_at: datetime | None = None
    scheduled_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class CampaignListResponse(BaseModel):
    items: list[CampaignResponse]
    total: int


class CampaignSearchRequest(BaseModel):
    """Filter a user's campaigns with a full filter state."""

    user_id: str
    filters: FilterState = Field(default_factory=FilterState)


class CampaignScheduleRequest(BaseModel):
    scheduled_at: datetime


class CampaignValidationResponse(BaseModel):
    """Validation outcome plus the derived overall quality status."""

    valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    corrected: bool = False
    corrected_data: LookPostSchema
    validation_log: ValidationLog
    quality_status: QualityStatus


class CampaignRevalidateResponse(CampaignValidationResponse):
    saved: bool = False
