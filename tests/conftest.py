from __future__ import annotations

import os
from datetime import date

os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test-service-role-key")

import pytest
from fastapi.testclient import TestClient

from hotel_analytics.api.dependencies import get_analytics_service
from hotel_analytics.main import create_app
from hotel_analytics.schemas.analytics import (
    AnalyticsFilters,
    AnalyticsReport,
    AnalyticsSummary,
    CityProfit,
    CityRevenue,
    CostBreakdownItem,
    PeriodProfit,
    PeriodRevenue,
    ProfitReport,
    RevenueReport,
    RevenueTrendPoint,
)
from hotel_analytics.services.analytics_service import build_summary


class FakeAnalyticsService:
    def __init__(self) -> None:
        self.received_filters: list[AnalyticsFilters] = []

    def get_revenue_data(self, filters: AnalyticsFilters) -> RevenueReport:
        self.received_filters.append(filters)
        return RevenueReport(
            total_revenue=1000.0,
            revenue_by_period=[PeriodRevenue(period="2026-10", revenue=1000.0, booking_count=1)],
            revenue_by_city=[
                CityRevenue(city="Makkah", revenue=1000.0, booking_count=1, average_booking_value=1000.0)
            ],
            revenue_trend=[RevenueTrendPoint(day=date(2026, 10, 10), revenue=1000.0, booking_count=1)],
        )

    def get_profit_data(self, filters: AnalyticsFilters) -> ProfitReport:
        self.received_filters.append(filters)
        return ProfitReport(
            gross_profit=400.0,
            net_profit=300.0,
            profit_margin=30.0,
            total_revenue=1000.0,
            total_hotel_costs=600.0,
            total_operational_costs=100.0,
            profit_by_period=[
                PeriodProfit(
                    period="2026-10",
                    revenue=1000.0,
                    hotel_costs=600.0,
                    operational_costs=100.0,
                    gross_profit=400.0,
                    net_profit=300.0,
                    profit_margin=30.0,
                )
            ],
            profit_by_city=[
                CityProfit(
                    city="Makkah",
                    revenue=1000.0,
                    hotel_costs=600.0,
                    operational_costs=100.0,
                    gross_profit=400.0,
                    net_profit=300.0,
                    profit_margin=30.0,
                )
            ],
            cost_breakdown=[
                CostBreakdownItem(cost_type="Hotel Costs", amount=600.0, percentage=85.71),
                CostBreakdownItem(cost_type="transportation", amount=100.0, percentage=14.29),
            ],
        )

    def get_analytics_data(self, filters: AnalyticsFilters) -> AnalyticsReport:
        revenue = self.get_revenue_data(filters)
        profit = self.get_profit_data(filters)
        return AnalyticsReport(revenue=revenue, profit=profit, summary=build_summary(revenue, profit))

    def get_summary(self, filters: AnalyticsFilters) -> AnalyticsSummary:
        return self.get_analytics_data(filters).summary


@pytest.fixture()
def fake_service() -> FakeAnalyticsService:
    return FakeAnalyticsService()


@pytest.fixture()
def client(fake_service: FakeAnalyticsService) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_analytics_service] = lambda: fake_service
    return TestClient(app)
