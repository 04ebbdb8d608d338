from __future__ import annotations

from collections import defaultdict
from datetime import date, datetime
from decimal import Decimal
from typing import Dict, Iterable, List, Tuple

from hotel_analytics.analytics.numeric import ZERO, decimal_sum, safe_ratio, to_report_number
from hotel_analytics.models.bookings import BookingRecord
from hotel_analytics.schemas.analytics import (
    CityRevenue,
    PeriodRevenue,
    RevenueReport,
    RevenueTrendPoint,
)
from hotel_analytics.shared.time import period_label, trailing_window_start, year_start


Bucket = Tuple[Decimal, int]


def aggregate_revenue(
    bookings: Iterable[BookingRecord], now: datetime, trend_window_days: int = 30
) -> RevenueReport:
    records = list(bookings)
    return RevenueReport(
        total_revenue=to_report_number(decimal_sum(record.total_amount for record in records)),
        revenue_by_period=calculate_revenue_by_period(records, now),
        revenue_by_city=calculate_revenue_by_city(records),
        revenue_trend=calculate_revenue_trend(records, now, trend_window_days),
    )


def calculate_revenue_by_city(bookings: Iterable[BookingRecord]) -> List[CityRevenue]:
    buckets: Dict[str, Bucket] = defaultdict(lambda: (ZERO, 0))
    for booking in bookings:
        revenue, count = buckets[booking.city]
        buckets[booking.city] = (revenue + booking.total_amount, count + 1)

    ranked = sorted(buckets.items(), key=lambda item: (-item[1][0], item[0]))
    return [
        CityRevenue(
            city=city,
            revenue=to_report_number(revenue),
            booking_count=count,
            average_booking_value=to_report_number(safe_ratio(revenue, Decimal(count))),
        )
        for city, (revenue, count) in ranked
    ]


def calculate_revenue_by_period(
    bookings: Iterable[BookingRecord], now: datetime
) -> List[PeriodRevenue]:
    since = year_start(now)
    buckets: Dict[str, Bucket] = defaultdict(lambda: (ZERO, 0))
    for booking in bookings:
        if booking.created_at < since:
            continue
        label = period_label(booking.created_at)
        revenue, count = buckets[label]
        buckets[label] = (revenue + booking.total_amount, count + 1)

    return [
        PeriodRevenue(period=label, revenue=to_report_number(revenue), booking_count=count)
        for label, (revenue, count) in sorted(buckets.items())
    ]


def calculate_revenue_trend(
    bookings: Iterable[BookingRecord], now: datetime, window_days: int
) -> List[RevenueTrendPoint]:
    since = trailing_window_start(now, window_days)
    buckets: Dict[date, Bucket] = defaultdict(lambda: (ZERO, 0))
    for booking in bookings:
        if booking.created_at < since:
            continue
        day = booking.created_at.date()
        revenue, count = buckets[day]
        buckets[day] = (revenue + booking.total_amount, count + 1)

    return [
        RevenueTrendPoint(day=day, revenue=to_report_number(revenue), booking_count=count)
        for day, (revenue, count) in sorted(buckets.items())
    ]
