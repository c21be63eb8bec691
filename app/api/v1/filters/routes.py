"""Campaign filter API endpoints."""

import logging
from typing import Any

from fastapi import APIRouter, Body, HTTPException, Response, status

from app.api.v1.filters.constants import INVALID_FILTER_STATE_DETAIL
from app.core.exceptions import InvalidFilterStateError
from app.dependencies import FilterStore
from app.schemas.filters import FilterOptions, FilterState
from app.services.campaign_filters.options import extract_filter_options

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/options", response_model=FilterOptions)
async def filter_options(campaigns: list[dict[str, Any]] = Body(...)) -> FilterOptions:
    """Distinct facet values with usage counts for the given campaigns."""
    return extract_filter_options(campaigns)


@router.get("/state/{owner_id}", response_model=FilterState)
async def get_filter_state(owner_id: str, store: FilterStore) -> FilterState:
    """Return the last saved filter state, or defaults."""
    return await store.load(owner_id)


@router.put("/state/{owner_id}", response_model=FilterState)
async def save_filter_state(owner_id: str, payload: FilterState, store: FilterStore) -> FilterState:
    """Persist a filter state for later sessions."""
    try:
        return await store.save(owner_id, payload)
    except InvalidFilterStateError as exc:
        logger.warning("Rejected filter state", extra={"owner_id": owner_id})
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=INVALID_FILTER_STATE_DETAIL,
        ) from exc


@router.delete("/state/{owner_id}", status_code=status.HTTP_204_NO_CONTENT)
async def clear_filter_state(owner_id: str, store: FilterStore) -> Response:
    """Forget the saved filter state."""
    await store.clear(owner_id)
    logger.info("Filter state cleared", extra={"owner_id": owner_id})
    return Response(status_code=status.HTTP_204_NO_CONTENT)
