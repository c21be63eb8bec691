"""Repository for Campaign reads and lifecycle writes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import CampaignNotFoundError
from app.models.campaign import Campaign
from app.schemas.lookpost import ValidationResult
from app.services.lookpost.validation import corrected_campaign_updates

logger = logging.getLogger(__name__)


class CampaignRepository:
    """Campaign queries and status transitions on a caller-owned session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_for_user(self, user_id: str) -> list[Campaign]:
        """Return a user's campaigns, newest first."""
        result = await self.session.execute(
            select(Campaign)
            .where(Campaign.user_id == str(user_id))
            .order_by(Campaign.created_at.desc())
        )
        return list(result.scalars().all())

    async def list_all(self) -> list[Campaign]:
        """Return every campaign, oldest first."""
        result = await self.session.execute(select(Campaign).order_by(Campaign.created_at.asc()))
        return list(result.scalars().all())

    async def get(self, campaign_id: str) -> Campaign:
        result = await self.session.execute(
            select(Campaign).where(Campaign.id == str(campaign_id))
        )
        campaign = result.scalar_one_or_none()
        if campaign is None:
            raise CampaignNotFoundError(str(campaign_id))
        return campaign

    async def apply_corrections(self, campaign_id: str, result: ValidationResult) -> Campaign:
        """Write the normalized LookPost fields of a corrected run back onto the row."""
        campaign = await self.get(campaign_id)
        for key, value in corrected_campaign_updates(result).items():
            setattr(campaign, key, value)
        await self.session.flush()
        logger.info(
            "Campaign corrections saved",
            extra={
                "campaign_id": str(campaign_id),
                "corrected_fields": result.validation_log.corrected_fields,
            },
        )
        return campaign

    async def publish(self, campaign_id: str, *, now: datetime | None = None) -> Campaign:
        campaign = await self.get(campaign_id)
        campaign.status = "published"
        campaign.published_at = now or datetime.now(timezone.utc)
        campaign.scheduled_at = None
        await self.session.flush()
        logger.info("Campaign published", extra={"campaign_id": str(campaign_id)})
        return campaign

    async def schedule(self, campaign_id: str, scheduled_at: datetime) -> Campaign:
        campaign = await self.get(campaign_id)
        campaign.status = "scheduled"
        campaign.scheduled_at = scheduled_at
        await self.session.flush()
        logger.info(
            "Campaign scheduled",
            extra={"campaign_id": str(campaign_id), "scheduled_at": scheduled_at.isoformat()},
        )
        return campaign

    async def delete(self, campaign_id: str) -> None:
        campaign = await self.get(campaign_id)
        await self.session.delete(campaign)
        await self.session.flush()
        logger.info("Campaign deleted", extra={"campaign_id": str(campaign_id)})
