"""API v1 router aggregator."""

from fastapi import APIRouter

from app.api.v1.campaigns.routes import router as campaigns_router
from app.api.v1.filters.routes import router as filters_router

api_router = APIRouter()

api_router.include_router(campaigns_router, prefix="/campaigns", tags=["Campaigns"])
api_router.include_router(filters_router, prefix="/filters", tags=["Filters"])
