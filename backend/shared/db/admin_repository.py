"""SQLite-backed admin account repository."""

from __future__ import annotations

import json
import sqlite3
from typing import TYPE_CHECKING

from shared.auth.models import AdminUser
from shared.dal.admin_repository import AdminRepository

if TYPE_CHECKING:
    from shared.db.connection import Database


class SqliteAdminRepository(AdminRepository):
    """SQLite implementation of AdminRepository.

    Relies on the unique username index and maps IntegrityError to ValueError.
    """

    def __init__(self, db: Database) -> None:
        self._db = db

    async def create_admin(self, admin: AdminUser) -> None:
        def _insert(conn: sqlite3.Connection) -> None:
            try:
                conn.execute(
                    "INSERT INTO admin_users (id, username, data) VALUES (?, ?, ?)",
                    (admin.user_id, admin.username, admin.model_dump_json()),
                )
            except sqlite3.IntegrityError as exc:
                error_msg = str(exc).lower()
                if "admin_users.id" in error_msg:
                    raise ValueError(f"Admin with id '{admin.user_id}' already exists") from exc
                raise ValueError(f"Username '{admin.username}' already taken") from exc

        await self._db.run_in_transaction(_insert)

    async def get_by_username(self, username: str) -> AdminUser | None:
        """Look up an admin by username (case-insensitive)."""
        rows = self._db.query("SELECT data FROM admin_users WHERE username = ? COLLATE NOCASE", (username,))
        if not rows:
            return None
        return AdminUser.model_validate(json.loads(rows[0][0]))

    async def get_by_id(self, user_id: str) -> AdminUser | None:
        rows = self._db.query("SELECT data FROM admin_users WHERE id = ?", (user_id,))
        if not rows:
            return None
        return AdminUser.model_validate(json.loads(rows[0][0]))
