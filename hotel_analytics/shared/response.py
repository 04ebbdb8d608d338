from __future__ import annotations

from typing import Generic, Optional, TypeVar

from hotel_analytics.shared.base import BaseSchema


T = TypeVar("T")


class Meta(BaseSchema):
    as_of_date: str
    source: str
    time_window: str
    calculation_version: str
    currency: Optional[str] = None
    generated_at: Optional[str] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    meta: Optional[Meta] = None
