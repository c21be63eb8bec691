"""Campaign API endpoints."""

import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Query, Response, status

from app.api.v1.campaigns.constants import CAMPAIGN_NOT_FOUND_DETAIL, EXPORT_FALLBACK_ID
from app.config import settings
from app.core.exceptions import CampaignNotFoundError
from app.dependencies import DbSession
from app.models.campaign import Campaign
from app.repositories.campaign_repository import CampaignRepository
from app.schemas.campaign import (
    CampaignListResponse,
    CampaignResponse,
    CampaignRevalidateResponse,
    CampaignScheduleRequest,
    CampaignSearchRequest,
    CampaignValidationResponse,
)
from app.schemas.lookpost import ValidationResult
from app.services.campaign_filters.engine import apply_filters
from app.services.campaign_quality import assess_campaign_quality
from app.services.lookpost.builder import build_lookpost_json
from app.services.lookpost.export import (
    EXPORT_MEDIA_TYPE,
    attachment_disposition,
    export_filename,
    serialize_lookpost,
)
from app.services.lookpost.validation import validate_and_normalize_campaign

logger = logging.getLogger(__name__)

router = APIRouter()

LanguageQuery = Query(None, description="Language tag used for locale detection")


def _language(value: str | None) -> str:
    return value or settings.default_language


def _validation_payload(campaign: dict[str, Any], result: ValidationResult) -> dict[str, Any]:
    return {
        **result.model_dump(),
        "quality_status": assess_campaign_quality(campaign, result),
    }


def _campaign_response(campaign: Campaign) -> CampaignResponse:
    return CampaignResponse.model_validate(campaign.to_record())


async def _get_campaign(repository: CampaignRepository, campaign_id: str) -> Campaign:
    try:
        return await repository.get(campaign_id)
    except CampaignNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CAMPAIGN_NOT_FOUND_DETAIL,
        ) from exc


@router.get("", response_model=CampaignListResponse)
async def list_campaigns(session: DbSession, user_id: str = Query(...)) -> CampaignListResponse:
    """List a user's campaigns, newest first."""
    campaigns = await CampaignRepository(session).list_for_user(user_id)
    items = [_campaign_response(campaign) for campaign in campaigns]
    return CampaignListResponse(items=items, total=len(items))


@router.post("/search", response_model=CampaignListResponse)
async def search_campaigns(
    payload: CampaignSearchRequest,
    session: DbSession,
) -> CampaignListResponse:
    """Filter and sort a user's campaigns with a filter state."""
    campaigns = await CampaignRepository(session).list_for_user(payload.user_id)
    records = [campaign.to_record() for campaign in campaigns]
    matches = apply_filters(records, payload.filters)
    items = [CampaignResponse.model_validate(record) for record in matches]
    return CampaignListResponse(items=items, total=len(items))


@router.post("/validate", response_model=CampaignValidationResponse)
async def validate_campaign(
    campaign: dict[str, Any] = Body(...),
    language: str | None = LanguageQuery,
) -> CampaignValidationResponse:
    """Validate a raw campaign and return its normalized LookPost document."""
    result = validate_and_normalize_campaign(campaign, language=_language(language))
    return CampaignValidationResponse.model_validate(_validation_payload(campaign, result))


@router.post("/export")
async def export_campaign(
    campaign: dict[str, Any] = Body(...),
    language: str | None = LanguageQuery,
) -> Response:
    """Download the LookPost document of a campaign as a JSON attachment."""
    schema = build_lookpost_json(campaign, language=_language(language))
    filename = export_filename(
        schema.campaign.campaign_id or EXPORT_FALLBACK_ID,
        datetime.now(timezone.utc),
    )
    logger.info(
        "Campaign exported",
        extra={"campaign_id": schema.campaign.campaign_id, "export_filename": filename},
    )
    return Response(
        content=serialize_lookpost(schema),
        media_type=EXPORT_MEDIA_TYPE,
        headers={"Content-Disposition": attachment_disposition(filename)},
    )


@router.post("/{campaign_id}/revalidate", response_model=CampaignRevalidateResponse)
async def revalidate_campaign(
    campaign_id: str,
    session: DbSession,
    language: str | None = LanguageQuery,
) -> CampaignRevalidateResponse:
    """Validate a stored campaign and write corrections back when there were any."""
    repository = CampaignRepository(session)
    campaign = await _get_campaign(repository, campaign_id)
    record = campaign.to_record()
    result = validate_and_normalize_campaign(record, language=_language(language))

    saved = False
    if result.corrected:
        await repository.apply_corrections(campaign_id, result)
        saved = True

    logger.info(
        "Campaign revalidated",
        extra={
            "campaign_id": campaign_id,
            "valid": result.valid,
            "error_count": len(result.errors),
            "corrected_fields": len(result.validation_log.corrected_fields),
            "saved": saved,
        },
    )

    return CampaignRevalidateResponse.model_validate(
        {**_validation_payload(record, result), "saved": saved}
    )


@router.post("/{campaign_id}/publish", response_model=CampaignResponse)
async def publish_campaign(campaign_id: str, session: DbSession) -> CampaignResponse:
    """Publish a campaign now."""
    try:
        campaign = await CampaignRepository(session).publish(campaign_id)
    except CampaignNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CAMPAIGN_NOT_FOUND_DETAIL,
        ) from exc
    return _campaign_response(campaign)


@router.post("/{campaign_id}/schedule", response_model=CampaignResponse)
async def schedule_campaign(
    campaign_id: str,
    payload: CampaignScheduleRequest,
    session: DbSession,
) -> CampaignResponse:
    """Schedule a campaign for later publication."""
    try:
        campaign = await CampaignRepository(session).schedule(campaign_id, payload.scheduled_at)
    except CampaignNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CAMPAIGN_NOT_FOUND_DETAIL,
        ) from exc
    return _campaign_response(campaign)


@router.delete("/{campaign_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_campaign(campaign_id: str, session: DbSession) -> Response:
    """Delete a campaign."""
    try:
        await CampaignRepository(session).delete(campaign_id)
    except CampaignNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CAMPAIGN_NOT_FOUND_DETAIL,
        ) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)
