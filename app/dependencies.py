"""Shared FastAPI dependencies."""

from typing import Annotated

from fastapi import Depends
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_session
from app.core.redis import get_redis_client
from app.services.campaign_filters.store import FilterStateStore

DbSession = Annotated[AsyncSession, Depends(get_session)]


def get_filter_state_store(
    redis_client: Annotated[Redis, Depends(get_redis_client)],
) -> FilterStateStore:
    return FilterStateStore(redis_client=redis_client)


FilterStore = Annotated[FilterStateStore, Depends(get_filter_state_store)]
