from __future__ import annotations

from fastapi import APIRouter

from hotel_analytics.api.analytics import router as analytics_router
from hotel_analytics.api.health import router as health_router


api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(analytics_router)
