from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from hotel_analytics.core.errors import ComputationError


ZERO = Decimal("0")
HUNDRED = Decimal("100")
_CENTS = Decimal("0.01")


def to_report_number(value: Decimal) -> float:
    if not value.is_finite():
        raise ComputationError(f"Non-finite analytics value: {value}")
    return float(value.quantize(_CENTS, rounding=ROUND_HALF_UP))


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return ZERO
    return numerator / denominator


def margin_pct(net_profit: Decimal, revenue: Decimal) -> Decimal:
    if revenue <= 0:
        return ZERO
    return net_profit / revenue * HUNDRED


def share_pct(amount: Decimal, total: Decimal) -> Decimal:
    if total <= 0:
        return ZERO
    return max(ZERO, amount / total * HUNDRED)


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    return sum(values, ZERO)
