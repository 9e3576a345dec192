"""Growth Calculator: period-over-period percentage change."""

from decimal import ROUND_HALF_UP, Decimal

_ONE_PLACE = Decimal("0.1")
_ZERO = Decimal("0.0")


def percent_change(current: Decimal | int, previous: Decimal | int) -> Decimal:
    """``(current - previous) / previous * 100`` rounded to one place.

    A zero baseline yields 0, not infinity and not an error.
    """
    current = Decimal(current)
    previous = Decimal(previous)
    if previous == 0:
        return _ZERO
    change = (current - previous) / previous * 100
    return change.quantize(_ONE_PLACE, rounding=ROUND_HALF_UP)
