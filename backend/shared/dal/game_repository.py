"""Abstract interface for game and score persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime

    from shared.dal.models import Game, SaleEntry, Score


class GameRepository(ABC):
    """Abstract interface for the game ledger storage.

    Range queries are inclusive on both ends and match on ``completed_at``.
    """

    @abstractmethod
    async def create_game(self, game: Game) -> None: ...

    @abstractmethod
    async def get_game(self, game_id: str) -> Game | None: ...

    @abstractmethod
    async def add_scores(self, game_id: str, scores: list[Score], completed_at: datetime) -> None:
        """Insert score rows and stamp the game's completion time atomically."""

    @abstractmethod
    async def get_scores(self, game_id: str) -> list[Score]: ...

    @abstractmethod
    async def get_games_in_range(
        self,
        start: datetime,
        end: datetime,
        *,
        include_demo: bool = False,
        limit: int | None = None,
    ) -> list[Game]: ...

    @abstractmethod
    async def summarize_range(self, start: datetime, end: datetime) -> tuple[int, int, int]:
        """Return (game_count, revenue_cents, player_count) over non-demo games."""

    @abstractmethod
    async def get_sale_entries(self, start: datetime, end: datetime) -> list[SaleEntry]:
        """Return reporting rows for non-demo games, oldest first."""
