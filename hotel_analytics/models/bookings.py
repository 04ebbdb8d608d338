from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from hotel_analytics.shared.time import to_naive_utc


CITIES = ("Makkah", "Madinah")
BOOKING_STATUSES = ("pending", "confirmed", "cancelled")


class _TimestampedRecord(BaseModel):
    created_at: datetime

    @field_validator("created_at")
    @classmethod
    def _normalize_created_at(cls, value: datetime) -> datetime:
        return to_naive_utc(value)


class BookingRecord(_TimestampedRecord):
    id: int
    city: str
    total_amount: Decimal = Decimal("0")
    payment_status: Optional[str] = None
    booking_status: Optional[str] = None


class BookingRef(_TimestampedRecord):
    id: int
    city: str
    booking_status: Optional[str] = None


class BookingItemRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int
    room_count: int = 0
    unit_price: Decimal = Decimal("0")
    hotel_cost_price: Decimal = Decimal("0")
    booking: BookingRef = Field(alias="bookings")

    @property
    def revenue(self) -> Decimal:
        return self.unit_price * self.room_count

    @property
    def hotel_cost(self) -> Decimal:
        return self.hotel_cost_price * self.room_count


class OperationalCostRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    booking_id: int
    cost_type: str
    amount: Decimal = Decimal("0")
    booking: BookingRef = Field(alias="bookings")
