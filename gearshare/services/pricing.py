# gearshare/services/pricing.py
"""
Rental pricing.

Pure functions, no storage access. Money is Decimal everywhere and is never
rounded here.
"""
import math
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from decimal import Decimal

SECONDS_PER_DAY = 24 * 60 * 60

# (upper bound inclusive, daily rate)
RATE_TIERS = (
    (Decimal("1000000"), Decimal("0.03")),
    (Decimal("5000000"), Decimal("0.02")),
    (Decimal("20000000"), Decimal("0.015")),
)
TOP_TIER_RATE = Decimal("0.01")


def to_decimal(value) -> Decimal:
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def daily_rental_rate(base_price) -> Decimal:
    """Daily rental fee for one unit, a tiered percentage of the base price."""
    price = to_decimal(base_price)
    if price <= 0:
        return Decimal("0")

    for upper, rate in RATE_TIERS:
        if price <= upper:
            return price * rate
    return price * TOP_TIER_RATE


def _as_utc(moment: date | datetime) -> datetime:
    # a bare date means midnight UTC of that day
    if not isinstance(moment, datetime):
        return datetime.combine(moment, time.min, tzinfo=timezone.utc)
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def rental_days(return_date: date | datetime | None, now: datetime) -> int:
    """Whole days from `now` to `return_date`, rounded up. Past or absent -> 0."""
    if return_date is None:
        return 0

    diff = (_as_utc(return_date) - _as_utc(now)).total_seconds()
    if diff <= 0:
        return 0
    return max(1, math.ceil(diff / SECONDS_PER_DAY))


@dataclass(frozen=True)
class LinePrice:
    daily_rental_rate: Decimal
    rental_days: int
    rental_extra: Decimal
    per_unit_total: Decimal
    line_total: Decimal


def price_line(base_price, quantity: int, option_extra, return_date, now: datetime) -> LinePrice:
    base = to_decimal(base_price)
    extra = to_decimal(option_extra)

    days = rental_days(return_date, now)
    rate = daily_rental_rate(base)
    # rental extra is per single unit
    rental_extra = rate * days
    per_unit_total = base + extra + rental_extra

    return LinePrice(
        daily_rental_rate=rate,
        rental_days=days,
        rental_extra=rental_extra,
        per_unit_total=per_unit_total,
        line_total=per_unit_total * quantity,
    )
