"""JSON shapes for API responses. Money is a two-place decimal string."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import date, datetime, tzinfo
    from typing import Any

    from clubhouse.games.types import Standing
    from clubhouse.sales.aggregator import DailyBucket, HourlyBucket, SalesTotals, WeeklyBucket
    from shared.dal.models import DemoPhoneNumber, Game, Player, Rate, Score

_NOON = 12


def hour_label(hour: int) -> str:
    """0 -> "12AM", 9 -> "9AM", 12 -> "12PM", 15 -> "3PM"."""
    suffix = "AM" if hour < _NOON else "PM"
    return f"{hour % _NOON or _NOON}{suffix}"


def clock_label(moment: datetime) -> str:
    """Local wall-clock time such as "3:05 PM"."""
    suffix = "AM" if moment.hour < _NOON else "PM"
    return f"{moment.hour % _NOON or _NOON}:{moment.minute:02d} {suffix}"


def day_type_label(game: Game) -> str:
    return "Weekend" if game.is_weekend else "Weekday"


def player_json(player: Player) -> dict[str, Any]:
    return {
        "id": player.player_id,
        "name": player.name,
        "contact": player.contact,
        "email": player.email,
        "createdAt": player.created_at.isoformat(),
    }


def game_json(game: Game) -> dict[str, Any]:
    return {
        "id": game.game_id,
        "playerId": game.player_id,
        "playerNames": list(game.player_names),
        "playerCount": game.player_count,
        "totalCost": str(game.total_cost),
        "isWeekend": game.is_weekend,
        "isDemoGame": game.is_demo_game,
        "createdAt": game.created_at.isoformat(),
        "completedAt": game.completed_at.isoformat(),
    }


def score_json(score: Score) -> dict[str, Any]:
    return {
        "id": score.score_id,
        "gameId": score.game_id,
        "playerName": score.player_name,
        "hole": score.hole,
        "strokes": score.strokes,
    }


def standing_json(standing: Standing, position: int) -> dict[str, Any]:
    return {"position": position, "playerName": standing.player_name, "totalStrokes": standing.total_strokes}


def rate_json(rate: Rate) -> dict[str, Any]:
    return {
        "id": rate.rate_id,
        "weekdayPrice": str(rate.weekday_price),
        "weekendPrice": str(rate.weekend_price),
        "updatedAt": rate.updated_at.isoformat(),
        "updatedBy": rate.updated_by,
    }


def demo_number_json(entry: DemoPhoneNumber) -> dict[str, Any]:
    return {"id": entry.demo_id, "phoneNumber": entry.phone_number, "addedAt": entry.added_at.isoformat()}


def totals_json(totals: SalesTotals) -> dict[str, Any]:
    return {
        "totalGames": totals.total_games,
        "totalRevenue": str(totals.total_revenue),
        "totalPlayers": totals.total_players,
        "avgPerGame": str(totals.average_per_game),
    }


def hourly_json(bucket: HourlyBucket) -> dict[str, Any]:
    return {
        "hour": bucket.hour,
        "label": hour_label(bucket.hour),
        "gameCount": bucket.game_count,
        "revenue": str(bucket.revenue),
    }


def daily_json(bucket: DailyBucket, label_format: str) -> dict[str, Any]:
    return {
        "date": bucket.day.isoformat(),
        "label": bucket.day.strftime(label_format),
        "gameCount": bucket.game_count,
        "revenue": str(bucket.revenue),
        "players": bucket.player_count,
    }


def weekly_json(bucket: WeeklyBucket, index: int) -> dict[str, Any]:
    return {
        "label": f"Week {index + 1}",
        "start": bucket.start.isoformat(),
        "end": bucket.end.isoformat(),
        "gameCount": bucket.game_count,
        "revenue": str(bucket.revenue),
        "players": bucket.player_count,
    }


def transaction_json(game: Game, tz: tzinfo) -> dict[str, Any]:
    local = game.completed_at.astimezone(tz)
    return {
        "id": game.game_id,
        "completedAt": local.isoformat(),
        "time": clock_label(local),
        "player": game.player_names[0],
        "playerCount": game.player_count,
        "cost": str(game.total_cost),
        "type": day_type_label(game),
    }


def day_range_json(start: date, end: date) -> dict[str, str]:
    return {"start": start.isoformat(), "end": end.isoformat()}
