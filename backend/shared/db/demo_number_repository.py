"""SQLite-backed demo phone number repository."""

from __future__ import annotations

import sqlite3
from typing import TYPE_CHECKING

from shared.dal.demo_number_repository import DemoNumberRepository
from shared.dal.models import DemoPhoneNumber
from shared.db.connection import format_timestamp, parse_timestamp

if TYPE_CHECKING:
    from shared.db.connection import Database


def _row_to_entry(row: tuple) -> DemoPhoneNumber:
    return DemoPhoneNumber(demo_id=row[0], phone_number=row[1], added_at=parse_timestamp(row[2]))


class SqliteDemoNumberRepository(DemoNumberRepository):
    """Phone numbers are stored normalized under a UNIQUE constraint."""

    def __init__(self, db: Database) -> None:
        self._db = db

    async def add_number(self, entry: DemoPhoneNumber) -> None:
        def _insert(conn: sqlite3.Connection) -> None:
            try:
                conn.execute(
                    "INSERT INTO demo_phone_numbers (id, phone_number, added_at) VALUES (?, ?, ?)",
                    (entry.demo_id, entry.phone_number, format_timestamp(entry.added_at)),
                )
            except sqlite3.IntegrityError as exc:
                raise ValueError(f"Phone number '{entry.phone_number}' is already registered") from exc

        await self._db.run_in_transaction(_insert)

    async def remove_number(self, demo_id: str) -> bool:
        def _delete(conn: sqlite3.Connection) -> bool:
            cursor = conn.execute("DELETE FROM demo_phone_numbers WHERE id = ?", (demo_id,))
            return cursor.rowcount > 0

        return await self._db.run_in_transaction(_delete)

    async def list_numbers(self) -> list[DemoPhoneNumber]:
        rows = self._db.query(
            "SELECT id, phone_number, added_at FROM demo_phone_numbers ORDER BY added_at DESC, rowid DESC",
        )
        return [_row_to_entry(row) for row in rows]

    async def get_by_number(self, phone_number: str) -> DemoPhoneNumber | None:
        rows = self._db.query(
            "SELECT id, phone_number, added_at FROM demo_phone_numbers WHERE phone_number = ?",
            (phone_number,),
        )
        if not rows:
            return None
        return _row_to_entry(rows[0])
