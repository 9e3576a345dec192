"""SQLite database layer: connection management and repository implementations."""

from shared.db.admin_repository import SqliteAdminRepository
from shared.db.connection import Database
from shared.db.demo_number_repository import SqliteDemoNumberRepository
from shared.db.game_repository import SqliteGameRepository
from shared.db.player_repository import SqlitePlayerRepository
from shared.db.rate_repository import SqliteRateRepository

__all__ = [
    "Database",
    "SqliteAdminRepository",
    "SqliteDemoNumberRepository",
    "SqliteGameRepository",
    "SqlitePlayerRepository",
    "SqliteRateRepository",
]
