from __future__ import annotations

import contextlib
from http import HTTPStatus
from pathlib import Path
from typing import TYPE_CHECKING, cast

import structlog
from starlette.applications import Starlette
from starlette.exceptions import HTTPException
from starlette.middleware.authentication import AuthenticationMiddleware
from starlette.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse, Response
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from clubhouse.auth.backend import SessionCookieBackend
from clubhouse.auth.policy import protected_api, public_route, validate_route_auth_policy
from clubhouse.demo.registry import DemoNumberRegistry
from clubhouse.games.ledger import GameLedger
from clubhouse.players.service import PlayerService
from clubhouse.pricing.rates import RateTable
from clubhouse.sales.aggregator import SalesAggregator
from clubhouse.server.bootstrap import seed_defaults
from clubhouse.server.middleware import SecurityHeadersMiddleware, SlashNormalizationMiddleware
from clubhouse.server.settings import ClubhouseSettings
from clubhouse.views import (
    add_demo_number,
    add_scores,
    create_game,
    create_player,
    current_pricing,
    custom_sales,
    dashboard_stats,
    get_game,
    hourly_sales,
    list_demo_numbers,
    login,
    logout,
    me,
    monthly_sales,
    period_sales,
    pricing_history,
    recent_games,
    remove_demo_number,
    transactions,
    update_pricing,
    weekly_sales,
)
from shared.auth import AuthService, AuthSessionStore
from shared.auth.password import get_hasher
from shared.auth.settings import AuthSettings
from shared.db import (
    Database,
    SqliteAdminRepository,
    SqliteDemoNumberRepository,
    SqliteGameRepository,
    SqlitePlayerRepository,
    SqliteRateRepository,
)
from shared.errors import ClubhouseError, StoreError
from shared.logging import setup_logging

logger = structlog.get_logger()

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

    from starlette.requests import Request

STORE_ERROR_MESSAGE = "Internal server error"


async def _clubhouse_error_handler(request: Request, exc: Exception) -> Response:
    """Map the error taxonomy to ``{"error": message}`` with the category's status.

    Store failures never echo driver text back to the client.
    """
    error = cast("ClubhouseError", exc)
    if isinstance(error, StoreError):
        logger.error("store error", path=request.url.path, error=str(error), cause=repr(error.__cause__))
        return JSONResponse({"error": STORE_ERROR_MESSAGE}, status_code=error.status_code)
    logger.info("request rejected", path=request.url.path, error_type=type(error).__name__, error=str(error))
    return JSONResponse({"error": str(error)}, status_code=error.status_code)


async def _http_error_handler(_request: Request, exc: Exception) -> Response:
    http_exc = cast("HTTPException", exc)
    if http_exc.status_code == HTTPStatus.UNAUTHORIZED:
        return JSONResponse({"error": "Authentication required"}, status_code=HTTPStatus.UNAUTHORIZED)
    if http_exc.status_code in {HTTPStatus.NO_CONTENT, HTTPStatus.NOT_MODIFIED}:
        return Response(status_code=http_exc.status_code, headers=http_exc.headers)
    return JSONResponse({"error": http_exc.detail}, status_code=http_exc.status_code, headers=http_exc.headers)


async def health(_request: Request) -> JSONResponse:
    return JSONResponse({"status": "ok"})


def create_app(
    settings: ClubhouseSettings | None = None,
    auth_settings: AuthSettings | None = None,
) -> Starlette:
    if settings is None:  # pragma: no cover
        settings = ClubhouseSettings()
    if auth_settings is None:  # pragma: no cover
        auth_settings = AuthSettings()

    routes: list[Route | Mount] = [
        # Front desk (public)
        Route("/api/players", public_route(create_player), methods=["POST"], name="create_player"),
        Route("/api/games", public_route(create_game), methods=["POST"], name="create_game"),
        Route("/api/games/{game_id}/scores", public_route(add_scores), methods=["POST"], name="add_scores"),
        Route("/api/games/{game_id}", public_route(get_game), methods=["GET"], name="get_game"),
        Route("/api/pricing", public_route(current_pricing), methods=["GET"], name="current_pricing"),
        Route("/api/admin/login", public_route(login), methods=["POST"], name="admin_login"),
        Route("/health", public_route(health), methods=["GET"], name="health"),
        # Admin (session required)
        Route("/api/admin/logout", protected_api(logout), methods=["POST"], name="admin_logout"),
        Route("/api/admin/me", protected_api(me), methods=["GET"], name="admin_me"),
        Route("/api/admin/dashboard-stats", protected_api(dashboard_stats), methods=["GET"], name="dashboard_stats"),
        Route("/api/admin/recent-games", protected_api(recent_games), methods=["GET"], name="recent_games"),
        Route("/api/admin/sales/{period}", protected_api(period_sales), methods=["GET"], name="period_sales"),
        Route("/api/admin/hourly-sales", protected_api(hourly_sales), methods=["GET"], name="hourly_sales"),
        Route("/api/admin/weekly-sales", protected_api(weekly_sales), methods=["GET"], name="weekly_sales"),
        Route("/api/admin/monthly-sales", protected_api(monthly_sales), methods=["GET"], name="monthly_sales"),
        Route("/api/admin/custom-sales", protected_api(custom_sales), methods=["GET"], name="custom_sales"),
        Route("/api/admin/transactions", protected_api(transactions), methods=["GET"], name="transactions"),
        Route("/api/admin/pricing", protected_api(update_pricing), methods=["POST"], name="update_pricing"),
        Route("/api/admin/pricing-history", protected_api(pricing_history), methods=["GET"], name="pricing_history"),
        Route("/api/admin/demo-numbers", protected_api(list_demo_numbers), methods=["GET"], name="list_demo_numbers"),
        Route("/api/admin/demo-numbers", protected_api(add_demo_number), methods=["POST"], name="add_demo_number"),
        Route(
            "/api/admin/demo-numbers/{demo_id}",
            protected_api(remove_demo_number),
            methods=["DELETE"],
            name="remove_demo_number",
        ),
    ]

    static_dir = Path(settings.static_dir).resolve()
    if static_dir.is_dir():
        routes.append(Mount("/", app=StaticFiles(directory=str(static_dir), html=True), name="client"))
    else:
        logger.warning("client build directory not found, / will not be served", path=str(static_dir))

    validate_route_auth_policy(routes)

    db = Database(settings.database_path)
    db.connect()
    rate_table = RateTable(SqliteRateRepository(db))
    session_store = AuthSessionStore(ttl_seconds=auth_settings.session_ttl_seconds)
    auth_service = AuthService(
        SqliteAdminRepository(db),
        session_store,
        password_hasher=get_hasher(auth_settings.password_hasher),
    )
    game_repo = SqliteGameRepository(db)

    @contextlib.asynccontextmanager
    async def lifespan(_app: Starlette) -> AsyncGenerator[None]:
        session_store.start_cleanup()
        await seed_defaults(settings, auth_settings, rate_table=rate_table, auth_service=auth_service)
        yield
        await session_store.stop_cleanup()
        db.close()

    app = Starlette(
        routes=routes,
        lifespan=lifespan,
        exception_handlers={
            ClubhouseError: _clubhouse_error_handler,
            HTTPException: _http_error_handler,
        },
    )
    app.add_middleware(SlashNormalizationMiddleware)  # type: ignore[arg-type]
    app.add_middleware(AuthenticationMiddleware, backend=SessionCookieBackend(auth_service))  # type: ignore[arg-type]
    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(SecurityHeadersMiddleware)  # type: ignore[arg-type]

    app.state.db = db
    app.state.settings = settings
    app.state.auth_settings = auth_settings
    app.state.auth_service = auth_service
    app.state.rate_table = rate_table
    app.state.player_service = PlayerService(SqlitePlayerRepository(db))
    app.state.demo_registry = DemoNumberRegistry(SqliteDemoNumberRepository(db))
    app.state.game_ledger = GameLedger(game_repo, rate_table, max_players=settings.max_players_per_game)
    app.state.sales = SalesAggregator(game_repo, settings.venue_tz, max_days=settings.max_report_days)

    logger.info("clubhouse server ready", timezone=settings.timezone)
    return app


def get_app() -> Starlette:  # pragma: no cover
    """Factory function for uvicorn --factory clubhouse.server.app:get_app."""
    s = ClubhouseSettings()
    auth = AuthSettings()
    setup_logging(log_dir=s.log_dir)
    return create_app(settings=s, auth_settings=auth)
