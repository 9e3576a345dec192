from datetime import UTC, date, datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

import pytest

from clubhouse.sales.aggregator import DailyBucket, HourlyBucket, SalesTotals
from clubhouse.views.serializers import (
    clock_label,
    daily_json,
    game_json,
    hour_label,
    hourly_json,
    totals_json,
    transaction_json,
)
from shared.dal.models import Game

GAME = Game(
    game_id="g-1",
    player_id="p-1",
    player_names=["Asha", "Ravi"],
    player_count=2,
    total_cost=Decimal("120.00"),
    is_weekend=False,
    created_at=datetime(2026, 10, 17, 9, 0, tzinfo=UTC),
    completed_at=datetime(2026, 10, 17, 9, 35, tzinfo=UTC),
)


@pytest.mark.parametrize(
    ("hour", "label"),
    [(0, "12AM"), (1, "1AM"), (11, "11AM"), (12, "12PM"), (13, "1PM"), (23, "11PM")],
)
def test_hour_label(hour, label):
    assert hour_label(hour) == label


def test_clock_label():
    assert clock_label(datetime(2026, 10, 17, 0, 5)) == "12:05 AM"
    assert clock_label(datetime(2026, 10, 17, 15, 0)) == "3:00 PM"


def test_game_money_is_a_two_place_string():
    body = game_json(GAME)
    assert body["totalCost"] == "120.00"
    assert body["playerNames"] == ["Asha", "Ravi"]
    assert body["isDemoGame"] is False


def test_transaction_uses_venue_time_and_lead_player():
    row = transaction_json(GAME, ZoneInfo("Asia/Kolkata"))
    assert row["time"] == "3:05 PM"
    assert row["player"] == "Asha"
    assert row["cost"] == "120.00"
    assert row["type"] == "Weekday"


def test_totals_and_buckets():
    assert totals_json(SalesTotals()) == {
        "totalGames": 0,
        "totalRevenue": "0.00",
        "totalPlayers": 0,
        "avgPerGame": "0.00",
    }
    assert hourly_json(HourlyBucket(hour=15, game_count=1, revenue=Decimal("60.00")))["label"] == "3PM"
    assert daily_json(DailyBucket(day=date(2026, 10, 17)), "%a")["label"] == "Sat"
