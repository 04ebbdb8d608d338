from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import List, Optional, Tuple


def utc_now() -> datetime:
    # Booking timestamps are stored without a zone, in UTC.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def year_start(now: datetime) -> datetime:
    return datetime(now.year, 1, 1)


def trailing_window_start(now: datetime, days: int) -> datetime:
    return now - timedelta(days=days)


def period_label(value: datetime) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, time.min)


def end_of_day_exclusive(value: date) -> datetime:
    return start_of_day(value + timedelta(days=1))


def parse_calendar_date(value: Optional[str]) -> Optional[date]:
    """Parse ``YYYY-MM-DD`` or an ISO datetime; return None when unparsable."""
    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


def date_range_presets(today: date) -> List[Tuple[str, str, date, date]]:
    return [
        ("last_7_days", "Last 7 days", today - timedelta(days=6), today),
        ("last_30_days", "Last 30 days", today - timedelta(days=29), today),
        ("this_month", "This month", today.replace(day=1), today),
        ("this_year", "This year", today.replace(month=1, day=1), today),
    ]
