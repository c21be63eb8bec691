"""Batch re-validation of stored campaigns with write-back of corrections."""

from __future__ import annotations

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session_context
from app.core.db_retry import run_with_transient_db_retry
from app.repositories.campaign_repository import CampaignRepository
from app.schemas.lookpost import ValidationResult
from app.services.lookpost.validation import validate_and_normalize_campaign

logger = logging.getLogger(__name__)

SessionFactory = Callable[..., AbstractAsyncContextManager[AsyncSession]]
RepositoryFactory = Callable[[AsyncSession], CampaignRepository]


@dataclass(slots=True)
class MigrationStats:
    total: int = 0
    processed: int = 0
    corrected: int = 0
    skipped: int = 0
    errors: int = 0

    @property
    def success_rate(self) -> float:
        """Percentage of campaigns processed without an exception."""
        return _percent(self.processed, self.total)

    @property
    def correction_rate(self) -> float:
        return _percent(self.corrected, self.total)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "processed": self.processed,
            "corrected": self.corrected,
            "skipped": self.skipped,
            "errors": self.errors,
            "success_rate": self.success_rate,
            "correction_rate": self.correction_rate,
        }


class CampaignMigrationService:
    """Validate every stored campaign and persist corrections.

    Each campaign is validated and written independently: a failure is logged
    and counted, and the run moves on to the next campaign. In dry-run mode
    corrections are counted but nothing is written.
    """

    def __init__(
        self,
        *,
        language: str | None = None,
        dry_run: bool = False,
        session_factory: SessionFactory = get_session_context,
        repository_factory: RepositoryFactory = CampaignRepository,
    ) -> None:
        self.language = language
        self.dry_run = dry_run
        self._session_factory = session_factory
        self._repository_factory = repository_factory

    async def run(self) -> MigrationStats:
        stats = MigrationStats()
        records = await self._load_records()
        stats.total = len(records)
        logger.info(
            "Campaign migration started",
            extra={"total": stats.total, "dry_run": self.dry_run},
        )

        for index, record in enumerate(records, start=1):
            campaign_id = str(record.get("id"))
            try:
                result = validate_and_normalize_campaign(record, language=self.language)
                if result.corrected:
                    if not self.dry_run:
                        await self._save_corrections(campaign_id, result)
                    stats.corrected += 1
                else:
                    stats.skipped += 1
                stats.processed += 1
                logger.info(
                    "Campaign processed",
                    extra={
                        "campaign_id": campaign_id,
                        "position": index,
                        "total": stats.total,
                        "valid": result.valid,
                        "corrected": result.corrected,
                        "errors": result.errors,
                        "corrected_fields": result.validation_log.corrected_fields,
                        "duration_ms": result.validation_log.duration_ms,
                    },
                )
            except Exception:
                stats.errors += 1
                logger.exception("Campaign migration failed", extra={"campaign_id": campaign_id})

        logger.info("Campaign migration finished", extra=stats.to_dict())
        return stats

    async def _load_records(self) -> list[dict[str, Any]]:
        async def _load_once() -> list[dict[str, Any]]:
            async with self._session_factory(commit_on_exit=False) as session:
                campaigns = await self._repository_factory(session).list_all()
                return [campaign.to_record() for campaign in campaigns]

        return await run_with_transient_db_retry(_load_once, operation_name="campaign_migration_load")

    async def _save_corrections(self, campaign_id: str, result: ValidationResult) -> None:
        async def _save_once() -> None:
            async with self._session_factory() as session:
                await self._repository_factory(session).apply_corrections(campaign_id, result)

        await run_with_transient_db_retry(
            _save_once,
            operation_name="campaign_migration_save",
            log_context={"campaign_id": campaign_id},
        )


def _percent(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    return round(part / whole * 100, 1)
