"""SQLite-backed rate history repository. Insert-only."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from shared.dal.models import Rate
from shared.dal.rate_repository import RateRepository
from shared.db.connection import format_timestamp

if TYPE_CHECKING:
    import sqlite3

    from shared.db.connection import Database

# rowid breaks ties between rates written within the same microsecond
_NEWEST_FIRST = "ORDER BY updated_at DESC, rowid DESC"


class SqliteRateRepository(RateRepository):
    def __init__(self, db: Database) -> None:
        self._db = db

    async def add_rate(self, rate: Rate) -> None:
        def _insert(conn: sqlite3.Connection) -> None:
            conn.execute(
                "INSERT INTO rates (id, updated_at, data) VALUES (?, ?, ?)",
                (rate.rate_id, format_timestamp(rate.updated_at), rate.model_dump_json()),
            )

        await self._db.run_in_transaction(_insert)

    async def get_latest_rate(self) -> Rate | None:
        rows = self._db.query(f"SELECT data FROM rates {_NEWEST_FIRST} LIMIT 1")  # noqa: S608
        if not rows:
            return None
        return Rate.model_validate(json.loads(rows[0][0]))

    async def list_rates(self) -> list[Rate]:
        rows = self._db.query(f"SELECT data FROM rates {_NEWEST_FIRST}")  # noqa: S608
        return [Rate.model_validate(json.loads(row[0])) for row in rows]
