from __future__ import annotations

import logging
from datetime import date
from typing import Mapping, Optional

from hotel_analytics.core.errors import BadRequestError
from hotel_analytics.models.bookings import BOOKING_STATUSES, CITIES
from hotel_analytics.schemas.analytics import AnalyticsFilters
from hotel_analytics.shared.time import parse_calendar_date


logger = logging.getLogger(__name__)


def normalize_filters(params: Mapping[str, Optional[str]], strict: bool = False) -> AnalyticsFilters:
    """Build a query-safe filter from loosely typed request parameters.

    Malformed fields are dropped so the report falls back to "no constraint"
    on that dimension. With ``strict`` they raise ``BadRequestError`` instead.
    """
    start_date = _date_field(params, "startDate", "start_date", strict)
    end_date = _date_field(params, "endDate", "end_date", strict)
    city = _choice_field(params, "city", CITIES, strict)
    status = _choice_field(params, "status", BOOKING_STATUSES, strict)
    return AnalyticsFilters(start_date=start_date, end_date=end_date, city=city, status=status)


def _lookup(params: Mapping[str, Optional[str]], *names: str) -> Optional[str]:
    for name in names:
        value = params.get(name)
        if value is not None and value != "":
            return value
    return None


def _date_field(
    params: Mapping[str, Optional[str]], name: str, alias: str, strict: bool
) -> Optional[date]:
    raw = _lookup(params, name, alias)
    if raw is None:
        return None
    parsed = parse_calendar_date(raw)
    if parsed is None:
        _reject(name, raw, strict)
    return parsed


def _choice_field(
    params: Mapping[str, Optional[str]], name: str, choices: tuple[str, ...], strict: bool
) -> Optional[str]:
    raw = _lookup(params, name)
    if raw is None:
        return None
    if raw not in choices:
        _reject(name, raw, strict)
        return None
    return raw


def _reject(name: str, raw: str, strict: bool) -> None:
    if strict:
        raise BadRequestError(f"Invalid value for {name}")
    logger.debug("Dropping malformed analytics filter %s=%r", name, raw)
