from __future__ import annotations

from functools import lru_cache

from hotel_analytics.core.config import get_settings
from hotel_analytics.repositories.analytics_repository import AnalyticsRepository
from hotel_analytics.services.analytics_service import AnalyticsService


@lru_cache
def get_analytics_repository() -> AnalyticsRepository:
    return AnalyticsRepository()


def get_analytics_service() -> AnalyticsService:
    settings = get_settings()
    return AnalyticsService(
        repository=get_analytics_repository(),
        trend_window_days=settings.analytics_trend_window_days,
    )
