"""Named reporting periods and calendar arithmetic in the venue's time zone."""

from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from enum import StrEnum
from typing import TYPE_CHECKING

from shared.errors import ValidationError

if TYPE_CHECKING:
    from datetime import tzinfo

WEEK = timedelta(days=7)
_ONE_MICROSECOND = timedelta(microseconds=1)


class SalesPeriod(StrEnum):
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    CUSTOM = "custom"


class InvalidPeriodError(ValidationError):
    pass


class InvalidDateRangeError(ValidationError):
    pass


def parse_period(value: str) -> SalesPeriod:
    try:
        return SalesPeriod(value.lower())
    except ValueError:
        choices = ", ".join(p.value for p in SalesPeriod)
        raise InvalidPeriodError(f"Invalid period '{value}'. Expected one of: {choices}") from None


def parse_day(value: str, field: str) -> date:
    """Parse a YYYY-MM-DD query value.

    The first and last representable days are refused: their local bounds
    cannot be converted to UTC.
    """
    try:
        day = date.fromisoformat(value)
    except ValueError:
        raise InvalidDateRangeError(f"{field} must be a date in YYYY-MM-DD format") from None
    if not date.min < day < date.max:
        raise InvalidDateRangeError(f"{field} is outside the supported calendar range")
    return day


def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """First and last instant of a local calendar day, both inclusive."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz) - _ONE_MICROSECOND
    return start, end


def one_month_before(moment: datetime) -> datetime:
    """Same wall-clock instant a calendar month earlier, clamping the day (Mar 31 -> Feb 28)."""
    year, month = (moment.year, moment.month - 1) if moment.month > 1 else (moment.year - 1, 12)
    last_day = calendar.monthrange(year, month)[1]
    return moment.replace(year=year, month=month, day=min(moment.day, last_day))


def validate_day_range(start: date, end: date, max_days: int | None = None) -> None:
    if start > end:
        raise InvalidDateRangeError("Start date must not be after end date")
    if max_days is not None and (end - start).days + 1 > max_days:
        raise InvalidDateRangeError(f"Date range must not exceed {max_days} days")
