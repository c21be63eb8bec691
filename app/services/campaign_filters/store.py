"""Per-owner campaign filter state backed by Redis."""

from __future__ import annotations

import json
import logging

from redis.asyncio import Redis

from app.config import settings
from app.core.exceptions import InvalidFilterStateError
from app.core.redis import get_redis_client
from app.schemas.filters import FilterState
from app.services.campaign_filters.state import (
    default_filter_state,
    is_valid_filter,
    sanitize_filter_payload,
)

logger = logging.getLogger(__name__)

FILTER_STORAGE_KEY = "campaign-filters-v1"


class FilterStateStore:
    """Load, save and clear the last filter state a user applied."""

    def __init__(self, redis_client: Redis | None = None, ttl_seconds: int | None = None) -> None:
        self.redis = redis_client or get_redis_client()
        self.ttl_seconds = ttl_seconds or settings.filter_state_ttl_seconds

    async def load(self, owner_id: str) -> FilterState:
        """Return the saved state, or defaults when nothing usable is stored."""
        raw = await self.redis.get(self._state_key(owner_id))
        if raw is None:
            return default_filter_state()

        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Invalid filter state payload in Redis", extra={"owner_id": owner_id})
            return default_filter_state()

        return sanitize_filter_payload(payload)

    async def save(self, owner_id: str, state: FilterState) -> FilterState:
        """Persist `state`; refuses states that break range invariants."""
        payload = state.model_dump(mode="json")
        if not is_valid_filter(payload):
            raise InvalidFilterStateError()

        await self.redis.set(
            self._state_key(owner_id),
            json.dumps(payload),
            ex=self.ttl_seconds,
        )
        logger.debug("Filter state saved", extra={"owner_id": owner_id})
        return state

    async def clear(self, owner_id: str) -> None:
        await self.redis.delete(self._state_key(owner_id))

    @staticmethod
    def _state_key(owner_id: str) -> str:
        return f"{FILTER_STORAGE_KEY}:{owner_id}"
