"""Sales Aggregator: totals and zero-filled breakdowns over non-demo games.

All bucketing happens in the venue's local time zone; the store keeps UTC.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

import structlog

from clubhouse.sales.growth import percent_change
from clubhouse.sales.periods import (
    WEEK,
    InvalidDateRangeError,
    SalesPeriod,
    day_bounds,
    one_month_before,
    validate_day_range,
)
from shared.money import from_cents, quantize_money

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import tzinfo

    from shared.dal.game_repository import GameRepository

logger = structlog.get_logger()

HOURS_PER_DAY = 24
WEEKS_IN_MONTH_VIEW = 4

_ZERO_MONEY = Decimal("0.00")


@dataclass(frozen=True)
class SalesTotals:
    total_games: int = 0
    total_revenue: Decimal = _ZERO_MONEY
    total_players: int = 0

    @property
    def average_per_game(self) -> Decimal:
        """Revenue per game; zero for an empty period."""
        if self.total_games == 0:
            return _ZERO_MONEY
        return quantize_money(self.total_revenue / self.total_games)


@dataclass(frozen=True)
class HourlyBucket:
    hour: int
    game_count: int = 0
    revenue: Decimal = _ZERO_MONEY


@dataclass(frozen=True)
class DailyBucket:
    day: date
    game_count: int = 0
    revenue: Decimal = _ZERO_MONEY
    player_count: int = 0


@dataclass(frozen=True)
class WeeklyBucket:
    start: datetime
    end: datetime
    game_count: int = 0
    revenue: Decimal = _ZERO_MONEY
    player_count: int = 0


@dataclass(frozen=True)
class DayComparison:
    today: SalesTotals
    yesterday: SalesTotals
    games_growth: Decimal
    revenue_growth: Decimal


class _Accumulator:
    __slots__ = ("games", "players", "revenue")

    def __init__(self) -> None:
        self.games = 0
        self.players = 0
        self.revenue = _ZERO_MONEY

    def add(self, revenue: Decimal, players: int) -> None:
        self.games += 1
        self.players += players
        self.revenue += revenue


def _utc_now() -> datetime:
    return datetime.now(UTC)


class SalesAggregator:
    """Read-only reporting over the game ledger. Demo games never count."""

    def __init__(
        self,
        game_repo: GameRepository,
        tz: tzinfo,
        *,
        max_days: int | None = None,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._game_repo = game_repo
        self._tz = tz
        self._max_days = max_days
        self._clock = clock

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def now(self) -> datetime:
        return self._clock().astimezone(self._tz)

    def today(self) -> date:
        return self.now().date()

    def day_bounds(self, day: date) -> tuple[datetime, datetime]:
        return day_bounds(day, self._tz)

    def period_bounds(
        self,
        period: SalesPeriod,
        start_day: date | None = None,
        end_day: date | None = None,
    ) -> tuple[datetime, datetime]:
        """Resolve a named period to an inclusive instant range ending now (or at end_day)."""
        now = self.now()
        if period is SalesPeriod.DAY:
            return self.day_bounds(now.date())
        if period is SalesPeriod.WEEK:
            return now - WEEK, now
        if period is SalesPeriod.MONTH:
            return one_month_before(now), now
        if start_day is None or end_day is None:
            raise InvalidDateRangeError("Custom period requires start and end dates")
        validate_day_range(start_day, end_day, self._max_days)
        return self.day_bounds(start_day)[0], self.day_bounds(end_day)[1]

    async def aggregate(self, start: datetime, end: datetime) -> SalesTotals:
        """Totals over games completed in [start, end]. An empty range is all zeros."""
        if start > end:
            raise InvalidDateRangeError("Start must not be after end")
        games, revenue_cents, players = await self._game_repo.summarize_range(start, end)
        logger.debug("sales aggregated", start=start.isoformat(), end=end.isoformat(), games=games)
        return SalesTotals(total_games=games, total_revenue=from_cents(revenue_cents), total_players=players)

    async def day_over_day(self) -> DayComparison:
        today = self.today()
        current = await self.aggregate(*self.day_bounds(today))
        previous = await self.aggregate(*self.day_bounds(today - timedelta(days=1)))
        return DayComparison(
            today=current,
            yesterday=previous,
            games_growth=percent_change(current.total_games, previous.total_games),
            revenue_growth=percent_change(current.total_revenue, previous.total_revenue),
        )

    async def hourly_breakdown(self, day: date) -> list[HourlyBucket]:
        """Exactly 24 buckets, hour 0..23 in local time, zero-filled."""
        accumulators = [_Accumulator() for _ in range(HOURS_PER_DAY)]
        for entry in await self._game_repo.get_sale_entries(*self.day_bounds(day)):
            accumulators[entry.completed_at.astimezone(self._tz).hour].add(entry.total_cost, entry.player_count)
        return [
            HourlyBucket(hour=hour, game_count=acc.games, revenue=acc.revenue)
            for hour, acc in enumerate(accumulators)
        ]

    async def daily_breakdown(self, start_day: date, end_day: date) -> list[DailyBucket]:
        """One bucket per local calendar day in [start_day, end_day], ascending."""
        validate_day_range(start_day, end_day, self._max_days)
        span = (end_day - start_day).days + 1
        accumulators = [_Accumulator() for _ in range(span)]
        range_start = self.day_bounds(start_day)[0]
        range_end = self.day_bounds(end_day)[1]
        for entry in await self._game_repo.get_sale_entries(range_start, range_end):
            index = (entry.completed_at.astimezone(self._tz).date() - start_day).days
            accumulators[index].add(entry.total_cost, entry.player_count)
        return [
            DailyBucket(
                day=start_day + timedelta(days=offset),
                game_count=acc.games,
                revenue=acc.revenue,
                player_count=acc.players,
            )
            for offset, acc in enumerate(accumulators)
        ]

    async def weekly_buckets_last_28_days(self) -> list[WeeklyBucket]:
        """Four contiguous 7-day windows ending now, oldest first."""
        now = self.now()
        window_start = now - WEEK * WEEKS_IN_MONTH_VIEW
        accumulators = [_Accumulator() for _ in range(WEEKS_IN_MONTH_VIEW)]
        for entry in await self._game_repo.get_sale_entries(window_start, now):
            # an entry exactly at "now" belongs to the last window
            index = min(int((entry.completed_at - window_start) / WEEK), WEEKS_IN_MONTH_VIEW - 1)
            accumulators[index].add(entry.total_cost, entry.player_count)
        return [
            WeeklyBucket(
                start=window_start + WEEK * i,
                end=window_start + WEEK * (i + 1),
                game_count=acc.games,
                revenue=acc.revenue,
                player_count=acc.players,
            )
            for i, acc in enumerate(accumulators)
        ]
