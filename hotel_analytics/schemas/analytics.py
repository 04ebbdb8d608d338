from __future__ import annotations

from datetime import date
from typing import List, Literal, Optional

from pydantic import Field

from hotel_analytics.shared.base import BaseSchema


City = Literal["Makkah", "Madinah"]
BookingStatus = Literal["pending", "confirmed", "cancelled"]


class AnalyticsFilters(BaseSchema):
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    city: Optional[City] = None
    status: Optional[BookingStatus] = None

    def describe(self) -> str:
        start = self.start_date.isoformat() if self.start_date else "*"
        end = self.end_date.isoformat() if self.end_date else "*"
        parts = [f"{start}..{end}"]
        if self.city:
            parts.append(f"city={self.city}")
        if self.status:
            parts.append(f"status={self.status}")
        return ";".join(parts)


class CityRevenue(BaseSchema):
    city: str
    revenue: float
    booking_count: int
    average_booking_value: float


class PeriodRevenue(BaseSchema):
    period: str
    revenue: float
    booking_count: int


class RevenueTrendPoint(BaseSchema):
    day: date = Field(alias="date")
    revenue: float
    booking_count: int


class RevenueReport(BaseSchema):
    total_revenue: float
    revenue_by_period: List[PeriodRevenue]
    revenue_by_city: List[CityRevenue]
    revenue_trend: List[RevenueTrendPoint]


class PeriodProfit(BaseSchema):
    period: str
    revenue: float
    hotel_costs: float
    operational_costs: float
    gross_profit: float
    net_profit: float
    profit_margin: float


class CityProfit(BaseSchema):
    city: str
    revenue: float
    hotel_costs: float
    operational_costs: float
    gross_profit: float
    net_profit: float
    profit_margin: float


class CostBreakdownItem(BaseSchema):
    cost_type: str
    amount: float
    percentage: float


class ProfitReport(BaseSchema):
    gross_profit: float
    net_profit: float
    profit_margin: float
    total_revenue: float
    total_hotel_costs: float
    total_operational_costs: float
    profit_by_period: List[PeriodProfit]
    profit_by_city: List[CityProfit]
    cost_breakdown: List[CostBreakdownItem]


class TopPerformingCity(BaseSchema):
    city: str
    revenue: float


class AnalyticsSummary(BaseSchema):
    total_revenue: float
    total_bookings: int
    average_booking_value: float
    gross_profit: float
    net_profit: float
    profit_margin: float
    top_performing_city: Optional[TopPerformingCity] = None


class AnalyticsReport(BaseSchema):
    revenue: RevenueReport
    profit: ProfitReport
    summary: AnalyticsSummary


class DateRangePreset(BaseSchema):
    value: str
    label: str
    start_date: date
    end_date: date


class FilterOptions(BaseSchema):
    cities: List[str]
    statuses: List[str]
    date_ranges: List[DateRangePreset]
