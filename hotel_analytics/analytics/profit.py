from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Callable, Dict, Iterable, List, Optional

from hotel_analytics.analytics.numeric import ZERO, decimal_sum, margin_pct, share_pct, to_report_number
from hotel_analytics.models.bookings import BookingItemRecord, BookingRef, OperationalCostRecord
from hotel_analytics.schemas.analytics import CityProfit, CostBreakdownItem, PeriodProfit, ProfitReport
from hotel_analytics.shared.time import period_label, year_start


HOTEL_COSTS_LABEL = "Hotel Costs"

# Maps a booking to its slice label, or None to leave it out of the breakdown.
DimensionKey = Callable[[BookingRef], Optional[str]]


@dataclass
class BookingTotals:
    booking: BookingRef
    revenue: Decimal = ZERO
    hotel_costs: Decimal = ZERO


@dataclass
class SliceTotals:
    revenue: Decimal = ZERO
    hotel_costs: Decimal = ZERO
    operational_costs: Decimal = ZERO

    @property
    def gross_profit(self) -> Decimal:
        return self.revenue - self.hotel_costs

    @property
    def net_profit(self) -> Decimal:
        return self.gross_profit - self.operational_costs

    @property
    def profit_margin(self) -> Decimal:
        return margin_pct(self.net_profit, self.revenue)


def aggregate_profit(
    items: Iterable[BookingItemRecord],
    costs: Iterable[OperationalCostRecord],
    now: datetime,
) -> ProfitReport:
    per_booking = rollup_items_by_booking(items)
    cost_records = list(costs)

    totals = SliceTotals(
        revenue=decimal_sum(entry.revenue for entry in per_booking.values()),
        hotel_costs=decimal_sum(entry.hotel_costs for entry in per_booking.values()),
        operational_costs=decimal_sum(cost.amount for cost in cost_records),
    )

    by_city = merge_slices(per_booking.values(), cost_records, _city_key)
    city_rows = sorted(by_city.items(), key=lambda item: (-item[1].revenue, item[0]))

    since = year_start(now)
    by_period = merge_slices(per_booking.values(), cost_records, _period_key(since))

    return ProfitReport(
        gross_profit=to_report_number(totals.gross_profit),
        net_profit=to_report_number(totals.net_profit),
        profit_margin=to_report_number(totals.profit_margin),
        total_revenue=to_report_number(totals.revenue),
        total_hotel_costs=to_report_number(totals.hotel_costs),
        total_operational_costs=to_report_number(totals.operational_costs),
        profit_by_period=[
            PeriodProfit(period=label, **_slice_fields(values))
            for label, values in sorted(by_period.items())
        ],
        profit_by_city=[CityProfit(city=city, **_slice_fields(values)) for city, values in city_rows],
        cost_breakdown=calculate_cost_breakdown(
            totals, cost_records, has_items=bool(per_booking)
        ),
    )


def rollup_items_by_booking(items: Iterable[BookingItemRecord]) -> Dict[int, BookingTotals]:
    per_booking: Dict[int, BookingTotals] = {}
    for item in items:
        entry = per_booking.get(item.booking_id)
        if entry is None:
            entry = per_booking[item.booking_id] = BookingTotals(booking=item.booking)
        entry.revenue += item.revenue
        entry.hotel_costs += item.hotel_cost
    return per_booking


def merge_slices(
    bookings: Iterable[BookingTotals],
    costs: Iterable[OperationalCostRecord],
    key: DimensionKey,
) -> Dict[str, SliceTotals]:
    """Join item totals and operational costs on the dimension label.

    Each source is summed into its own label-keyed dict; labels present on
    only one side are kept with zero for the other.
    """
    item_side: Dict[str, SliceTotals] = defaultdict(SliceTotals)
    for entry in bookings:
        label = key(entry.booking)
        if label is None:
            continue
        bucket = item_side[label]
        bucket.revenue += entry.revenue
        bucket.hotel_costs += entry.hotel_costs

    cost_side: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for cost in costs:
        label = key(cost.booking)
        if label is None:
            continue
        cost_side[label] += cost.amount

    merged: Dict[str, SliceTotals] = {}
    for label in set(item_side) | set(cost_side):
        base = item_side.get(label) or SliceTotals()
        merged[label] = SliceTotals(
            revenue=base.revenue,
            hotel_costs=base.hotel_costs,
            operational_costs=cost_side.get(label, ZERO),
        )
    return merged


def calculate_cost_breakdown(
    totals: SliceTotals,
    costs: Iterable[OperationalCostRecord],
    has_items: bool,
) -> List[CostBreakdownItem]:
    by_type: Dict[str, Decimal] = defaultdict(lambda: ZERO)
    for cost in costs:
        by_type[cost.cost_type] += cost.amount
    if not has_items and not by_type:
        return []

    entries = [(HOTEL_COSTS_LABEL, totals.hotel_costs)]
    entries.extend(sorted(by_type.items(), key=lambda item: (-item[1], item[0])))
    # Negative amounts get a 0% share, so they stay out of the denominator too.
    denominator = decimal_sum(max(ZERO, amount) for _, amount in entries)
    return [
        CostBreakdownItem(
            cost_type=label,
            amount=to_report_number(amount),
            percentage=to_report_number(share_pct(amount, denominator)),
        )
        for label, amount in entries
    ]


def _slice_fields(values: SliceTotals) -> Dict[str, float]:
    return {
        "revenue": to_report_number(values.revenue),
        "hotel_costs": to_report_number(values.hotel_costs),
        "operational_costs": to_report_number(values.operational_costs),
        "gross_profit": to_report_number(values.gross_profit),
        "net_profit": to_report_number(values.net_profit),
        "profit_margin": to_report_number(values.profit_margin),
    }


def _city_key(booking: BookingRef) -> Optional[str]:
    return booking.city


def _period_key(since: datetime) -> DimensionKey:
    def key(booking: BookingRef) -> Optional[str]:
        if booking.created_at < since:
            return None
        return period_label(booking.created_at)

    return key
