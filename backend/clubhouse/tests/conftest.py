"""Shared fixtures for clubhouse tests: a temporary database and a controllable clock."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import TYPE_CHECKING

import pytest

from clubhouse.demo.registry import DemoNumberRegistry
from clubhouse.games.ledger import GameLedger
from clubhouse.players.service import PlayerService
from clubhouse.pricing.rates import RateTable
from clubhouse.sales.aggregator import SalesAggregator
from shared.db import (
    Database,
    SqliteDemoNumberRepository,
    SqliteGameRepository,
    SqlitePlayerRepository,
    SqliteRateRepository,
)

if TYPE_CHECKING:
    from pathlib import Path

    from shared.dal.models import Player

# A Saturday morning at the venue (UTC).
START_TIME = datetime(2026, 10, 17, 9, 0, tzinfo=UTC)


class FakeClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, now: datetime = START_TIME) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now += timedelta(**kwargs)
        return self.now


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def db(tmp_path: Path):
    database = Database(tmp_path / "clubhouse.db")
    database.connect()
    yield database
    database.close()


@pytest.fixture
def rate_table(db: Database, clock: FakeClock) -> RateTable:
    return RateTable(SqliteRateRepository(db), clock=clock)


@pytest.fixture
async def priced_rate_table(rate_table: RateTable) -> RateTable:
    await rate_table.set_rate(Decimal("60.00"), Decimal("80.00"), set_by="system")
    return rate_table


@pytest.fixture
def game_repo(db: Database) -> SqliteGameRepository:
    return SqliteGameRepository(db)


@pytest.fixture
def ledger(game_repo: SqliteGameRepository, priced_rate_table: RateTable, clock: FakeClock) -> GameLedger:
    return GameLedger(game_repo, priced_rate_table, max_players=8, clock=clock)


@pytest.fixture
def player_service(db: Database, clock: FakeClock) -> PlayerService:
    return PlayerService(SqlitePlayerRepository(db), clock=clock)


@pytest.fixture
async def player(player_service: PlayerService) -> Player:
    return await player_service.register("Asha", "+91 98450 12345", "asha@example.com")


@pytest.fixture
def demo_registry(db: Database, clock: FakeClock) -> DemoNumberRegistry:
    return DemoNumberRegistry(SqliteDemoNumberRepository(db), clock=clock)


@pytest.fixture
def sales(game_repo: SqliteGameRepository, clock: FakeClock) -> SalesAggregator:
    return SalesAggregator(game_repo, UTC, max_days=366, clock=clock)
