from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request

from hotel_analytics.analytics.filters import normalize_filters
from hotel_analytics.api.dependencies import get_analytics_service
from hotel_analytics.core.config import get_settings
from hotel_analytics.core.errors import ForbiddenError
from hotel_analytics.models.bookings import BOOKING_STATUSES, CITIES
from hotel_analytics.schemas.analytics import (
    AnalyticsFilters,
    AnalyticsReport,
    AnalyticsSummary,
    DateRangePreset,
    FilterOptions,
    ProfitReport,
    RevenueReport,
)
from hotel_analytics.services.analytics_service import AnalyticsService
from hotel_analytics.shared.response import Meta, ResponseEnvelope
from hotel_analytics.shared.time import date_range_presets


def require_admin(x_admin_token: Optional[str] = Header(default=None)) -> None:
    expected = get_settings().analytics_admin_token
    if expected and x_admin_token != expected:
        raise ForbiddenError()


router = APIRouter(prefix="/analytics", tags=["analytics"], dependencies=[Depends(require_admin)])


def get_analytics_filters(request: Request) -> AnalyticsFilters:
    # Read raw strings so malformed values can be dropped instead of 422'd.
    return normalize_filters(
        request.query_params, strict=get_settings().analytics_strict_filters
    )


def _report_meta(filters: AnalyticsFilters, source: str) -> Meta:
    return Meta(
        as_of_date=date.today().isoformat(),
        source=source,
        time_window=filters.describe(),
        calculation_version="v1",
        currency=get_settings().report_currency,
        generated_at=datetime.now(timezone.utc).isoformat(),
    )


@router.get("/revenue")
def analytics_revenue(
    filters: AnalyticsFilters = Depends(get_analytics_filters),
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResponseEnvelope[RevenueReport]:
    data = service.get_revenue_data(filters)
    return ResponseEnvelope(data=data, meta=_report_meta(filters, "bookings"))


@router.get("/profit")
def analytics_profit(
    filters: AnalyticsFilters = Depends(get_analytics_filters),
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResponseEnvelope[ProfitReport]:
    data = service.get_profit_data(filters)
    return ResponseEnvelope(data=data, meta=_report_meta(filters, "booking_items,operational_costs"))


@router.get("/dashboard")
def analytics_dashboard(
    filters: AnalyticsFilters = Depends(get_analytics_filters),
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResponseEnvelope[AnalyticsReport]:
    data = service.get_analytics_data(filters)
    return ResponseEnvelope(
        data=data, meta=_report_meta(filters, "bookings,booking_items,operational_costs")
    )


@router.get("/summary")
def analytics_summary(
    filters: AnalyticsFilters = Depends(get_analytics_filters),
    service: AnalyticsService = Depends(get_analytics_service),
) -> ResponseEnvelope[AnalyticsSummary]:
    data = service.get_summary(filters)
    return ResponseEnvelope(
        data=data, meta=_report_meta(filters, "bookings,booking_items,operational_costs")
    )


@router.get("/filter-options")
def analytics_filter_options() -> ResponseEnvelope[FilterOptions]:
    data = FilterOptions(
        cities=list(CITIES),
        statuses=list(BOOKING_STATUSES),
        date_ranges=[
            DateRangePreset(value=value, label=label, start_date=start, end_date=end)
            for value, label, start, end in date_range_presets(date.today())
        ],
    )
    return ResponseEnvelope(data=data, meta=_report_meta(AnalyticsFilters(), "system"))
