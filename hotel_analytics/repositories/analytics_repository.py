from __future__ import annotations

from typing import List, Optional, Tuple

from hotel_analytics.core.supabase import SupabaseClient
from hotel_analytics.models.bookings import BookingItemRecord, BookingRecord, OperationalCostRecord
from hotel_analytics.schemas.analytics import AnalyticsFilters
from hotel_analytics.shared.time import end_of_day_exclusive, start_of_day


BOOKING_REF_COLUMNS = "id,city,created_at,booking_status"


class AnalyticsRepository:
    def __init__(self, client: Optional[SupabaseClient] = None) -> None:
        self.client = client or SupabaseClient()

    def list_bookings(self, filters: AnalyticsFilters) -> List[BookingRecord]:
        rows = self.client.select_all(
            table="bookings",
            select="id,city,created_at,total_amount,payment_status,booking_status",
            filters=build_booking_filters(filters),
            order="id.asc",
        )
        return [BookingRecord.model_validate(row) for row in rows]

    def list_booking_items(self, filters: AnalyticsFilters) -> List[BookingItemRecord]:
        # !inner drops items whose booking is missing or filtered out.
        rows = self.client.select_all(
            table="booking_items",
            select=(
                "id,booking_id,room_count,unit_price,hotel_cost_price,"
                f"bookings!inner({BOOKING_REF_COLUMNS})"
            ),
            filters=build_booking_filters(filters, prefix="bookings."),
            order="id.asc",
        )
        return [BookingItemRecord.model_validate(row) for row in rows]

    def list_operational_costs(self, filters: AnalyticsFilters) -> List[OperationalCostRecord]:
        rows = self.client.select_all(
            table="operational_costs",
            select=f"id,booking_id,cost_type,amount,bookings!inner({BOOKING_REF_COLUMNS})",
            filters=build_booking_filters(filters, prefix="bookings."),
            order="id.asc",
        )
        return [OperationalCostRecord.model_validate(row) for row in rows]


def build_booking_filters(filters: AnalyticsFilters, prefix: str = "") -> List[Tuple[str, str]]:
    params: List[Tuple[str, str]] = []
    if filters.start_date:
        params.append((f"{prefix}created_at", f"gte.{start_of_day(filters.start_date).isoformat()}"))
    if filters.end_date:
        # Inclusive end date: everything before the next midnight.
        params.append(
            (f"{prefix}created_at", f"lt.{end_of_day_exclusive(filters.end_date).isoformat()}")
        )
    if filters.city:
        params.append((f"{prefix}city", f"eq.{filters.city}"))
    if filters.status:
        params.append((f"{prefix}booking_status", f"eq.{filters.status}"))
    return params
