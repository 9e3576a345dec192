"""Rate Table: current per-player prices as a query over an append-only history."""

from __future__ import annotations

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.dal.models import Rate
from shared.errors import ConfigurationError, ValidationError
from shared.money import CENT

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.dal.rate_repository import RateRepository

logger = structlog.get_logger()

SYSTEM_ACTOR = "system"

# Storage precision is 10 digits with 2 fractional places.
MAX_PRICE = Decimal("99999999.99")


class NoRateConfiguredError(ConfigurationError):
    def __init__(self) -> None:
        super().__init__("Pricing not configured")


class InvalidRateError(ValidationError):
    pass


def _utc_now() -> datetime:
    return datetime.now(UTC)


def validate_price(value: object, field: str) -> Decimal:
    """Accept non-negative finite decimals with at most two fractional digits."""
    if isinstance(value, bool) or not isinstance(value, (Decimal, int, str)):
        raise InvalidRateError(f"{field} must be a decimal amount")
    try:
        price = Decimal(value)
    except ArithmeticError:
        raise InvalidRateError(f"{field} must be a decimal amount") from None
    if not price.is_finite():
        raise InvalidRateError(f"{field} must be a finite amount")
    if price < 0:
        raise InvalidRateError(f"{field} must not be negative")
    if price > MAX_PRICE:
        raise InvalidRateError(f"{field} must not exceed {MAX_PRICE}")
    if price != price.quantize(CENT):
        raise InvalidRateError(f"{field} must have at most 2 decimal places")
    return price.quantize(CENT)


class RateTable:
    """Current and historical pricing. A change is always a new row."""

    def __init__(self, rate_repo: RateRepository, clock: Callable[[], datetime] = _utc_now) -> None:
        self._rate_repo = rate_repo
        self._clock = clock

    async def get_current_rate(self) -> Rate:
        """Return the most recently inserted rate. Never invents one."""
        rate = await self._rate_repo.get_latest_rate()
        if rate is None:
            raise NoRateConfiguredError
        return rate

    async def set_rate(
        self,
        weekday_price: Decimal | int | str,
        weekend_price: Decimal | int | str,
        set_by: str,
    ) -> Rate:
        rate = Rate(
            rate_id=str(uuid4()),
            weekday_price=validate_price(weekday_price, "weekdayPrice"),
            weekend_price=validate_price(weekend_price, "weekendPrice"),
            updated_at=self._clock(),
            updated_by=set_by,
        )
        await self._rate_repo.add_rate(rate)
        logger.info(
            "rate updated",
            rate_id=rate.rate_id,
            weekday_price=rate.weekday_price,
            weekend_price=rate.weekend_price,
            updated_by=set_by,
        )
        return rate

    async def get_rate_history(self) -> list[Rate]:
        """Every rate ever set, newest first."""
        return await self._rate_repo.list_rates()

    async def ensure_default_rate(self, weekday_price: Decimal, weekend_price: Decimal) -> Rate:
        """Seed a rate on first boot; return the current rate otherwise."""
        current = await self._rate_repo.get_latest_rate()
        if current is not None:
            return current
        logger.info("seeding default rate")
        return await self.set_rate(weekday_price, weekend_price, SYSTEM_ACTOR)
