"""Re-validate stored campaigns and write back normalized LookPost fields."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from app.config import settings
from app.core.database import close_db
from app.core.logging import setup_logging
from app.services.campaign_migration import CampaignMigrationService

logger = logging.getLogger("scripts.migrate_campaigns")


def parse_args() -> argparse.Namespace:
    """Build CLI parser."""
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Validate and count corrections without writing them",
    )
    parser.add_argument(
        "--language",
        default=settings.default_language,
        help=f"Language tag used for locale detection (default: {settings.default_language})",
    )
    return parser.parse_args()


async def async_main() -> int:
    """Async entrypoint."""
    args = parse_args()
    setup_logging(settings.log_level, logger_names=("app", "scripts"))

    service = CampaignMigrationService(language=args.language, dry_run=args.dry_run)
    try:
        stats = await service.run()
    finally:
        await close_db()

    prefix = "DRY RUN " if args.dry_run else ""
    print(f"{prefix}campaign migration: {json.dumps(stats.to_dict())}")
    if stats.errors:
        logger.warning("Campaign migration finished with errors", extra={"errors": stats.errors})
        return 1
    return 0


def main() -> int:
    """Sync wrapper."""
    return asyncio.run(async_main())


if __name__ == "__main__":
    raise SystemExit(main())
