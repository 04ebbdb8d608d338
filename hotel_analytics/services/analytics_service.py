from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

from hotel_analytics.analytics.numeric import safe_ratio, to_report_number
from hotel_analytics.analytics.profit import aggregate_profit
from hotel_analytics.analytics.revenue import aggregate_revenue
from hotel_analytics.repositories.analytics_repository import AnalyticsRepository
from hotel_analytics.schemas.analytics import (
    AnalyticsFilters,
    AnalyticsReport,
    AnalyticsSummary,
    ProfitReport,
    RevenueReport,
    TopPerformingCity,
)
from hotel_analytics.shared.time import utc_now


logger = logging.getLogger(__name__)


class AnalyticsService:
    def __init__(
        self,
        repository: AnalyticsRepository,
        trend_window_days: int = 30,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.repository = repository
        self.trend_window_days = trend_window_days
        self.clock = clock

    def get_revenue_data(
        self, filters: AnalyticsFilters, now: Optional[datetime] = None
    ) -> RevenueReport:
        bookings = self.repository.list_bookings(filters)
        logger.info("Revenue report for %s over %d bookings", filters.describe(), len(bookings))
        return aggregate_revenue(bookings, now or self.clock(), self.trend_window_days)

    def get_profit_data(
        self, filters: AnalyticsFilters, now: Optional[datetime] = None
    ) -> ProfitReport:
        items = self.repository.list_booking_items(filters)
        costs = self.repository.list_operational_costs(filters)
        logger.info(
            "Profit report for %s over %d items and %d operational costs",
            filters.describe(),
            len(items),
            len(costs),
        )
        return aggregate_profit(items, costs, now or self.clock())

    def get_analytics_data(self, filters: AnalyticsFilters) -> AnalyticsReport:
        # Both sides share one reference time so their calendar windows agree.
        now = self.clock()
        with ThreadPoolExecutor(max_workers=2) as executor:
            revenue_future = executor.submit(self.get_revenue_data, filters, now)
            profit_future = executor.submit(self.get_profit_data, filters, now)
            revenue = revenue_future.result()
            profit = profit_future.result()
        return AnalyticsReport(
            revenue=revenue,
            profit=profit,
            summary=build_summary(revenue, profit),
        )

    def get_summary(self, filters: AnalyticsFilters) -> AnalyticsSummary:
        return self.get_analytics_data(filters).summary


def build_summary(revenue: RevenueReport, profit: ProfitReport) -> AnalyticsSummary:
    # Booking count comes from the city breakdown so the headline matches it.
    total_bookings = sum(row.booking_count for row in revenue.revenue_by_city)
    average = safe_ratio(Decimal(str(revenue.total_revenue)), Decimal(total_bookings))
    top_city = revenue.revenue_by_city[0] if revenue.revenue_by_city else None
    return AnalyticsSummary(
        total_revenue=revenue.total_revenue,
        total_bookings=total_bookings,
        average_booking_value=to_report_number(average),
        gross_profit=profit.gross_profit,
        net_profit=profit.net_profit,
        profit_margin=profit.profit_margin,
        top_performing_city=(
            TopPerformingCity(city=top_city.city, revenue=top_city.revenue) if top_city else None
        ),
    )
