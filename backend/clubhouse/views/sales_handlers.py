"""Admin reporting endpoints. Every figure excludes demo games."""

from __future__ import annotations

import csv
import io
from datetime import timedelta
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse, Response

from clubhouse.sales.periods import InvalidDateRangeError, SalesPeriod, parse_period, validate_day_range
from clubhouse.views.parsing import optional_day
from clubhouse.views.serializers import (
    daily_json,
    day_range_json,
    hourly_json,
    totals_json,
    transaction_json,
    weekly_json,
)

if TYPE_CHECKING:
    from datetime import date

    from starlette.requests import Request

    from clubhouse.games.ledger import GameLedger
    from clubhouse.sales.aggregator import SalesAggregator
    from clubhouse.server.settings import ClubhouseSettings

WEEKDAY_LABEL = "%a"
DAY_LABEL = "%d %b"
LAST_WEEK_DAYS = 7

TRANSACTION_COLUMNS = ("id", "completedAt", "time", "player", "playerCount", "cost", "type")


def _required_range(request: Request) -> tuple[date, date]:
    start = optional_day(request, "start")
    end = optional_day(request, "end")
    if start is None or end is None:
        raise InvalidDateRangeError("Both start and end dates are required")
    return start, end


async def dashboard_stats(request: Request) -> JSONResponse:
    """GET /api/admin/dashboard-stats - today against yesterday."""
    sales: SalesAggregator = request.app.state.sales
    comparison = await sales.day_over_day()
    return JSONResponse(
        {
            "today": totals_json(comparison.today),
            "yesterday": totals_json(comparison.yesterday),
            "gamesGrowth": str(comparison.games_growth),
            "revenueGrowth": str(comparison.revenue_growth),
        },
    )


async def recent_games(request: Request) -> JSONResponse:
    sales: SalesAggregator = request.app.state.sales
    ledger: GameLedger = request.app.state.game_ledger
    settings: ClubhouseSettings = request.app.state.settings

    games = await ledger.get_games_in_range(*sales.day_bounds(sales.today()), limit=settings.recent_games_limit)
    return JSONResponse({"games": [transaction_json(game, sales.tz) for game in games]})


async def period_sales(request: Request) -> JSONResponse:
    """GET /api/admin/sales/{period} - totals for day, week, month or custom (?start=&end=)."""
    sales: SalesAggregator = request.app.state.sales
    period = parse_period(request.path_params["period"])
    if period is SalesPeriod.CUSTOM:
        start, end = _required_range(request)
        bounds = sales.period_bounds(period, start, end)
    else:
        bounds = sales.period_bounds(period)
        start, end = bounds[0].date(), bounds[1].date()
    totals = await sales.aggregate(*bounds)
    return JSONResponse({"period": period.value, **day_range_json(start, end), **totals_json(totals)})


async def hourly_sales(request: Request) -> JSONResponse:
    """GET /api/admin/hourly-sales?date=YYYY-MM-DD (defaults to today)."""
    sales: SalesAggregator = request.app.state.sales
    day = optional_day(request, "date") or sales.today()
    buckets = await sales.hourly_breakdown(day)
    return JSONResponse({"date": day.isoformat(), "hours": [hourly_json(bucket) for bucket in buckets]})


async def weekly_sales(request: Request) -> JSONResponse:
    """GET /api/admin/weekly-sales - one bucket per day for the last seven days, today included."""
    sales: SalesAggregator = request.app.state.sales
    end = sales.today()
    start = end - timedelta(days=LAST_WEEK_DAYS - 1)
    buckets = await sales.daily_breakdown(start, end)
    return JSONResponse({**day_range_json(start, end), "days": [daily_json(b, WEEKDAY_LABEL) for b in buckets]})


async def monthly_sales(request: Request) -> JSONResponse:
    """GET /api/admin/monthly-sales - four seven-day windows ending now."""
    sales: SalesAggregator = request.app.state.sales
    buckets = await sales.weekly_buckets_last_28_days()
    return JSONResponse({"weeks": [weekly_json(bucket, index) for index, bucket in enumerate(buckets)]})


async def custom_sales(request: Request) -> JSONResponse:
    sales: SalesAggregator = request.app.state.sales
    start, end = _required_range(request)
    buckets = await sales.daily_breakdown(start, end)
    return JSONResponse({**day_range_json(start, end), "days": [daily_json(b, DAY_LABEL) for b in buckets]})


async def transactions(request: Request) -> Response:
    """GET /api/admin/transactions?date= or ?start=&end=, optionally &format=csv."""
    sales: SalesAggregator = request.app.state.sales
    ledger: GameLedger = request.app.state.game_ledger
    settings: ClubhouseSettings = request.app.state.settings

    if "start" in request.query_params or "end" in request.query_params:
        start, end = _required_range(request)
        validate_day_range(start, end, settings.max_report_days)
    else:
        start = end = optional_day(request, "date") or sales.today()

    games = await ledger.get_games_in_range(sales.day_bounds(start)[0], sales.day_bounds(end)[1])
    rows = [transaction_json(game, sales.tz) for game in games]

    if request.query_params.get("format") == "csv":
        buffer = io.StringIO()
        writer = csv.DictWriter(buffer, fieldnames=TRANSACTION_COLUMNS)
        writer.writeheader()
        writer.writerows(rows)
        filename = f"transactions-{start.isoformat()}-{end.isoformat()}.csv"
        return Response(
            buffer.getvalue(),
            media_type="text/csv",
            headers={"Content-Disposition": f'attachment; filename="{filename}"'},
        )
    return JSONResponse({**day_range_json(start, end), "transactions": rows})
