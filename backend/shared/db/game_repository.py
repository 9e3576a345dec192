"""SQLite-backed game ledger repository."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import structlog

from shared.dal.game_repository import GameRepository
from shared.dal.models import Game, SaleEntry, Score
from shared.db.connection import format_timestamp, parse_timestamp
from shared.money import from_cents, to_cents

if TYPE_CHECKING:
    import sqlite3
    from datetime import datetime

    from shared.db.connection import Database

logger = structlog.get_logger()


class SqliteGameRepository(GameRepository):
    """SQLite implementation of GameRepository.

    Stores full game snapshots as JSON with indexed columns for reporting:
    completion time, cost in cents, head count and the demo flag.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_game(self, game: Game) -> None:
        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT INTO games (id, player_id, completed_at, total_cost_cents, player_count, is_demo, data) "
                "VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    game.game_id,
                    game.player_id,
                    format_timestamp(game.completed_at),
                    to_cents(game.total_cost),
                    game.player_count,
                    int(game.is_demo_game),
                    game.model_dump_json(),
                ),
            )

        await self._db.run_in_transaction(_insert)

    async def get_game(self, game_id: str) -> Game | None:
        rows = self._db.query("SELECT data FROM games WHERE id = ?", (game_id,))
        if not rows:
            return None
        return Game.model_validate(json.loads(rows[0][0]))

    async def add_scores(self, game_id: str, scores: list[Score], completed_at: datetime) -> None:
        """Insert score rows and stamp completion in one transaction.

        Raises LookupError (after rolling back) when the game does not exist.
        """
        completed_iso = format_timestamp(completed_at)

        def _write(conn: sqlite3.Connection) -> None:
            cursor = conn.execute(
                "UPDATE games SET completed_at = ?, data = json_set(data, '$.completed_at', ?) WHERE id = ?",
                (completed_iso, completed_iso, game_id),
            )
            if cursor.rowcount == 0:
                raise LookupError(game_id)
            conn.executemany(
                "INSERT INTO scores (id, game_id, player_name, hole, strokes) VALUES (?, ?, ?, ?, ?)",
                [(s.score_id, game_id, s.player_name, s.hole, s.strokes) for s in scores],
            )

        await self._db.run_in_transaction(_write)
        logger.debug("scores stored", game_id=game_id, rows=len(scores))

    async def get_scores(self, game_id: str) -> list[Score]:
        rows = self._db.query(
            "SELECT id, game_id, player_name, hole, strokes FROM scores WHERE game_id = ? "
            "ORDER BY hole, player_name, rowid",
            (game_id,),
        )
        return [
            Score(score_id=row[0], game_id=row[1], player_name=row[2], hole=row[3], strokes=row[4]) for row in rows
        ]

    async def get_games_in_range(
        self,
        start: datetime,
        end: datetime,
        *,
        include_demo: bool = False,
        limit: int | None = None,
    ) -> list[Game]:
        """Games completed in [start, end], most recent first."""
        sql = "SELECT data FROM games WHERE completed_at >= ? AND completed_at <= ?"
        params: list[object] = [format_timestamp(start), format_timestamp(end)]
        if not include_demo:
            sql += " AND is_demo = 0"
        sql += " ORDER BY completed_at DESC, rowid DESC"
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        rows = self._db.query(sql, tuple(params))
        return [Game.model_validate(json.loads(row[0])) for row in rows]

    async def summarize_range(self, start: datetime, end: datetime) -> tuple[int, int, int]:
        rows = self._db.query(
            "SELECT COUNT(*), COALESCE(SUM(total_cost_cents), 0), COALESCE(SUM(player_count), 0) "
            "FROM games WHERE completed_at >= ? AND completed_at <= ? AND is_demo = 0",
            (format_timestamp(start), format_timestamp(end)),
        )
        games, revenue_cents, players = rows[0]
        return int(games), int(revenue_cents), int(players)

    async def get_sale_entries(self, start: datetime, end: datetime) -> list[SaleEntry]:
        rows = self._db.query(
            "SELECT completed_at, total_cost_cents, player_count FROM games "
            "WHERE completed_at >= ? AND completed_at <= ? AND is_demo = 0 "
            "ORDER BY completed_at",
            (format_timestamp(start), format_timestamp(end)),
        )
        return [
            SaleEntry(completed_at=parse_timestamp(row[0]), total_cost=from_cents(row[1]), player_count=row[2])
            for row in rows
        ]
