"""SQLite database connection, schema, and transaction management."""

from __future__ import annotations

import asyncio
import os
import sqlite3
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

import structlog

from shared.errors import StoreError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = structlog.get_logger()

T = TypeVar("T")

_DB_FILE_PERMISSIONS = 0o600

# One retry on a transient lock, then the error is surfaced.
_MAX_WRITE_ATTEMPTS = 2
_TRANSIENT_MARKERS = ("database is locked", "database is busy", "database table is locked")

_SCHEMA_SQL = """\
CREATE TABLE IF NOT EXISTS admin_users (
    id TEXT PRIMARY KEY,
    username TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE UNIQUE INDEX IF NOT EXISTS idx_admin_users_username
    ON admin_users (username COLLATE NOCASE);

CREATE TABLE IF NOT EXISTS players (
    id TEXT PRIMARY KEY,
    created_at TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS games (
    id TEXT PRIMARY KEY,
    player_id TEXT NOT NULL REFERENCES players (id),
    completed_at TEXT NOT NULL,
    total_cost_cents INTEGER NOT NULL,
    player_count INTEGER NOT NULL,
    is_demo INTEGER NOT NULL DEFAULT 0,
    data TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_games_completed_at
    ON games (completed_at);

CREATE TABLE IF NOT EXISTS scores (
    id TEXT PRIMARY KEY,
    game_id TEXT NOT NULL REFERENCES games (id),
    player_name TEXT NOT NULL,
    hole INTEGER NOT NULL,
    strokes INTEGER NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_scores_game_id
    ON scores (game_id);

CREATE TABLE IF NOT EXISTS rates (
    id TEXT PRIMARY KEY,
    updated_at TEXT NOT NULL,
    data TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS demo_phone_numbers (
    id TEXT PRIMARY KEY,
    phone_number TEXT NOT NULL UNIQUE,
    added_at TEXT NOT NULL
);
"""


def format_timestamp(value: datetime) -> str:
    """Serialize to fixed-width UTC ISO-8601 so text order equals time order."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def _is_transient(exc: sqlite3.OperationalError) -> bool:
    message = str(exc).lower()
    return any(marker in message for marker in _TRANSIENT_MARKERS)


class Database:
    """SQLite database wrapper with schema management and serialized writes."""

    def __init__(self, path: str | Path) -> None:
        self._path = str(path)
        self._conn: sqlite3.Connection | None = None
        self._write_lock = asyncio.Lock()

    @property
    def connection(self) -> sqlite3.Connection:
        """Return the active connection or raise if disconnected."""
        if self._conn is None:
            raise RuntimeError("Database is not connected")
        return self._conn

    def connect(self) -> None:
        """Open the database, apply pragmas, create schema, and harden file permissions."""
        parent = Path(self._path).parent
        parent.mkdir(parents=True, exist_ok=True)

        # Autocommit mode: transactions are opened explicitly in run_in_transaction.
        self._conn = sqlite3.connect(self._path, check_same_thread=False, isolation_level=None)
        self._conn.execute("PRAGMA journal_mode=WAL")
        self._conn.execute("PRAGMA foreign_keys=ON")
        self._conn.execute("PRAGMA busy_timeout=5000")
        self._conn.executescript(_SCHEMA_SQL)

        self._harden_permissions()
        logger.info("database connected", path=self._path)

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    async def run_in_transaction(self, work: Callable[[sqlite3.Connection], T]) -> T:
        """Run ``work`` inside a single write transaction.

        Any exception rolls the transaction back. Domain exceptions raised by
        ``work`` propagate unchanged; SQLite failures become StoreError after
        one retry for transient lock errors.
        """
        async with self._write_lock:
            attempt = 1
            while True:
                try:
                    return self._run_once(work)
                except sqlite3.OperationalError as exc:
                    if attempt < _MAX_WRITE_ATTEMPTS and _is_transient(exc):
                        logger.warning("transient database error, retrying write", error=str(exc), attempt=attempt)
                        attempt += 1
                        continue
                    logger.exception("database write failed")
                    raise StoreError("Database write failed") from exc
                except sqlite3.Error as exc:
                    logger.exception("database write failed")
                    raise StoreError("Database write failed") from exc

    def _run_once(self, work: Callable[[sqlite3.Connection], T]) -> T:
        conn = self.connection
        conn.execute("BEGIN IMMEDIATE")
        try:
            result = work(conn)
            conn.execute("COMMIT")
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        return result

    def query(self, sql: str, params: tuple[object, ...] = ()) -> list[tuple]:
        """Run a read-only statement, mapping driver failures to StoreError."""
        try:
            return self.connection.execute(sql, params).fetchall()
        except sqlite3.Error as exc:
            logger.exception("database read failed")
            raise StoreError("Database read failed") from exc

    def _harden_permissions(self) -> None:
        """Set restrictive file permissions on POSIX systems (best effort).

        Covers the WAL/SHM siblings too, since they hold customer contact data.
        """
        if os.name != "posix":  # pragma: no cover
            return
        for suffix in ("", "-wal", "-shm"):
            p = Path(self._path + suffix)
            if p.exists():
                try:
                    p.chmod(_DB_FILE_PERMISSIONS)
                except OSError:
                    logger.warning("could not set file permissions", permissions=oct(_DB_FILE_PERMISSIONS), path=str(p))
