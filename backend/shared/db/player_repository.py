"""SQLite-backed player repository."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from shared.dal.models import Player
from shared.dal.player_repository import PlayerRepository
from shared.db.connection import format_timestamp

if TYPE_CHECKING:
    import sqlite3

    from shared.db.connection import Database


class SqlitePlayerRepository(PlayerRepository):
    """SQLite implementation of PlayerRepository. Players are stored as JSON snapshots."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_player(self, player: Player) -> None:
        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT INTO players (id, created_at, data) VALUES (?, ?, ?)",
                (player.player_id, format_timestamp(player.created_at), player.model_dump_json()),
            )

        await self._db.run_in_transaction(_insert)

    async def get_player(self, player_id: str) -> Player | None:
        rows = self._db.query("SELECT data FROM players WHERE id = ?", (player_id,))
        if not rows:
            return None
        return Player.model_validate(json.loads(rows[0][0]))
