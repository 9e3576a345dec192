"""Front-desk endpoints: registration, game creation, scoring, current pricing."""

from __future__ import annotations

from http import HTTPStatus
from typing import TYPE_CHECKING

from starlette.responses import JSONResponse

from clubhouse.games.ledger import compute_standings
from clubhouse.games.types import CreateGameRequest, ScoreEntry
from clubhouse.players.types import CreatePlayerRequest
from clubhouse.views.parsing import parse_body_as
from clubhouse.views.serializers import game_json, player_json, rate_json, score_json, standing_json

if TYPE_CHECKING:
    from starlette.requests import Request

    from clubhouse.demo.registry import DemoNumberRegistry
    from clubhouse.games.ledger import GameLedger
    from clubhouse.players.service import PlayerService
    from clubhouse.pricing.rates import RateTable


async def create_player(request: Request) -> JSONResponse:
    """POST /api/players"""
    players: PlayerService = request.app.state.player_service
    body = await parse_body_as(request, CreatePlayerRequest)
    player = await players.register(body.name, body.contact, body.email)
    return JSONResponse(player_json(player), status_code=HTTPStatus.CREATED)


async def create_game(request: Request) -> JSONResponse:
    """POST /api/games - price the round at the current rate and freeze the demo flag."""
    players: PlayerService = request.app.state.player_service
    demo_registry: DemoNumberRegistry = request.app.state.demo_registry
    ledger: GameLedger = request.app.state.game_ledger

    body = await parse_body_as(request, CreateGameRequest)
    player = await players.get_player(body.player_id)
    game = await ledger.create_game(
        player_id=player.player_id,
        player_names=body.player_names,
        player_count=body.player_count,
        is_weekend=body.is_weekend,
        is_demo_game=await demo_registry.is_demo(player.contact),
    )
    return JSONResponse(game_json(game), status_code=HTTPStatus.CREATED)


async def add_scores(request: Request) -> JSONResponse:
    """POST /api/games/{game_id}/scores"""
    ledger: GameLedger = request.app.state.game_ledger
    game_id = request.path_params["game_id"]
    entries = await parse_body_as(request, list[ScoreEntry])
    rows = await ledger.append_scores(game_id, entries)
    return JSONResponse({"scores": [score_json(row) for row in rows]}, status_code=HTTPStatus.CREATED)


async def get_game(request: Request) -> JSONResponse:
    """GET /api/games/{game_id} - game, score rows, and standings (lowest total first)."""
    ledger: GameLedger = request.app.state.game_ledger
    game = await ledger.get_game(request.path_params["game_id"])
    scores = await ledger.get_scores(game.game_id)
    standings = compute_standings(game, scores)
    return JSONResponse(
        {
            "game": game_json(game),
            "scores": [score_json(score) for score in scores],
            "standings": [standing_json(standing, position) for position, standing in enumerate(standings, 1)],
        },
    )


async def current_pricing(request: Request) -> JSONResponse:
    """GET /api/pricing"""
    rate_table: RateTable = request.app.state.rate_table
    return JSONResponse(rate_json(await rate_table.get_current_rate()))
