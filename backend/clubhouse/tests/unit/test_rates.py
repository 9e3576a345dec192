from decimal import Decimal

import pytest

from clubhouse.pricing.rates import (
    SYSTEM_ACTOR,
    InvalidRateError,
    NoRateConfiguredError,
    validate_price,
)
from shared.errors import ConfigurationError


class TestGetCurrentRate:
    async def test_empty_table_is_a_configuration_error(self, rate_table):
        with pytest.raises(NoRateConfiguredError, match="Pricing not configured") as exc_info:
            await rate_table.get_current_rate()
        assert isinstance(exc_info.value, ConfigurationError)

    async def test_returns_latest_insert(self, rate_table, clock):
        await rate_table.set_rate(Decimal("60.00"), Decimal("80.00"), set_by="system")
        clock.advance(days=1)
        newest = await rate_table.set_rate("70.5", 95, set_by="admin-1")

        current = await rate_table.get_current_rate()
        assert current == newest
        assert str(current.weekday_price) == "70.50"
        assert str(current.weekend_price) == "95.00"
        assert current.updated_by == "admin-1"


class TestRateHistory:
    async def test_history_is_append_only_newest_first(self, rate_table, clock):
        first = await rate_table.set_rate("60.00", "80.00", set_by="system")
        clock.advance(hours=1)
        second = await rate_table.set_rate("65.00", "85.00", set_by="admin-1")
        clock.advance(hours=1)
        third = await rate_table.set_rate("60.00", "80.00", set_by="admin-2")

        assert await rate_table.get_rate_history() == [third, second, first]

    async def test_rejected_rate_leaves_history_untouched(self, rate_table):
        await rate_table.set_rate("60.00", "80.00", set_by="system")
        with pytest.raises(InvalidRateError):
            await rate_table.set_rate("-1", "80.00", set_by="admin-1")
        assert len(await rate_table.get_rate_history()) == 1


class TestEnsureDefaultRate:
    async def test_seeds_empty_table_as_system(self, rate_table):
        rate = await rate_table.ensure_default_rate(Decimal("60.00"), Decimal("80.00"))
        assert rate.updated_by == SYSTEM_ACTOR

    async def test_keeps_existing_rate(self, rate_table):
        existing = await rate_table.set_rate("70.00", "90.00", set_by="admin-1")
        assert await rate_table.ensure_default_rate(Decimal("60.00"), Decimal("80.00")) == existing
        assert len(await rate_table.get_rate_history()) == 1


class TestValidatePrice:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(Decimal("60"), "60.00"), (0, "0.00"), ("80.5", "80.50"), ("99999999.99", "99999999.99")],
    )
    def test_accepts_and_normalizes(self, value, expected):
        assert str(validate_price(value, "weekdayPrice")) == expected

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("-0.01", "must not be negative"),
            ("10.001", "at most 2 decimal places"),
            ("NaN", "finite"),
            ("Infinity", "finite"),
            ("1e20", "must not exceed"),
            ("sixty", "decimal amount"),
            (60.0, "decimal amount"),
            (True, "decimal amount"),
            (None, "decimal amount"),
        ],
    )
    def test_rejects_malformed_amounts(self, value, message):
        with pytest.raises(InvalidRateError, match=message):
            validate_price(value, "weekdayPrice")
