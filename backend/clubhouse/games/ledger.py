"""Game Ledger: completed rounds, their frozen cost, and per-player scores."""

from __future__ import annotations

from collections import defaultdict
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from clubhouse.games.types import DEFAULT_MAX_PLAYERS, Standing
from clubhouse.pricing.settlement import compute_cost, validate_player_count
from shared.dal.models import Game, Score
from shared.errors import ConflictError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from clubhouse.games.types import ScoreEntry
    from clubhouse.pricing.rates import RateTable
    from shared.dal.game_repository import GameRepository

logger = structlog.get_logger()


class GameNotFoundError(NotFoundError):
    def __init__(self, game_id: str) -> None:
        super().__init__(f"Game '{game_id}' not found")
        self.game_id = game_id


class PlayerCountMismatchError(ConflictError):
    pass


class DuplicatePlayerNameError(ConflictError):
    pass


class UnknownPlayerError(ConflictError):
    pass


class InvalidScoreTotalError(ValidationError):
    pass


def _name_key(name: str) -> str:
    return name.strip().casefold()


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _clean_roster(player_names: Sequence[str]) -> list[str]:
    names = [name.strip() if isinstance(name, str) else "" for name in player_names]
    if not names:
        raise ValidationError("At least one player name is required")
    if any(not name for name in names):
        raise ValidationError("Player names must not be blank")

    seen: set[str] = set()
    for name in names:
        key = _name_key(name)
        if key in seen:
            raise DuplicatePlayerNameError(f"Player name '{name}' appears more than once")
        seen.add(key)
    return names


def compute_standings(game: Game, scores: Sequence[Score]) -> list[Standing]:
    """Total strokes per roster name, lowest first. Ties keep roster order."""
    totals = dict.fromkeys(game.player_names, 0)
    for score in scores:
        totals[score.player_name] = totals.get(score.player_name, 0) + score.strokes
    ranked = sorted(totals.items(), key=lambda item: item[1])
    return [Standing(player_name=name, total_strokes=total) for name, total in ranked]


class GameLedger:
    """Create games at the current rate and record their scores.

    Every validation happens before the single write of each operation, so a
    rejected request leaves no partial state behind.
    """

    def __init__(
        self,
        game_repo: GameRepository,
        rate_table: RateTable,
        *,
        max_players: int = DEFAULT_MAX_PLAYERS,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._game_repo = game_repo
        self._rate_table = rate_table
        self._max_players = max_players
        self._clock = clock

    async def create_game(
        self,
        player_id: str,
        player_names: Sequence[str],
        player_count: int,
        is_weekend: bool,  # noqa: FBT001
        is_demo_game: bool = False,  # noqa: FBT001, FBT002
    ) -> Game:
        validate_player_count(player_count, self._max_players)
        names = _clean_roster(player_names)
        if player_count != len(names):
            raise PlayerCountMismatchError(
                f"Player count {player_count} does not match {len(names)} player names",
            )

        rate = await self._rate_table.get_current_rate()
        now = self._clock()
        game = Game(
            game_id=str(uuid4()),
            player_id=player_id,
            player_names=names,
            player_count=player_count,
            total_cost=compute_cost(player_count, is_weekend, rate, max_players=self._max_players),
            is_weekend=is_weekend,
            is_demo_game=is_demo_game,
            created_at=now,
            completed_at=now,
        )
        await self._game_repo.create_game(game)
        logger.info(
            "game created",
            game_id=game.game_id,
            player_count=player_count,
            total_cost=game.total_cost,
            rate_id=rate.rate_id,
            is_demo_game=is_demo_game,
        )
        return game

    async def append_scores(self, game_id: str, scores: Sequence[ScoreEntry]) -> list[Score]:
        """Record strokes for roster players and stamp the game as completed now.

        Individual holes may be negative; each player's running total may not.
        """
        if not scores:
            raise ValidationError("At least one score is required")
        game = await self.get_game(game_id)
        roster = {_name_key(name): name for name in game.player_names}

        rows: list[Score] = []
        for entry in scores:
            canonical = roster.get(_name_key(entry.player_name))
            if canonical is None:
                raise UnknownPlayerError(f"Player '{entry.player_name}' is not part of this game")
            rows.append(
                Score(
                    score_id=str(uuid4()),
                    game_id=game_id,
                    player_name=canonical,
                    hole=entry.hole,
                    strokes=entry.strokes,
                ),
            )

        totals: defaultdict[str, int] = defaultdict(int)
        for existing in await self._game_repo.get_scores(game_id):
            totals[existing.player_name] += existing.strokes
        for row in rows:
            totals[row.player_name] += row.strokes
        negative = sorted(name for name, total in totals.items() if total < 0)
        if negative:
            raise InvalidScoreTotalError(f"Total strokes must not be negative for: {', '.join(negative)}")

        try:
            await self._game_repo.add_scores(game_id, rows, completed_at=self._clock())
        except LookupError:
            raise GameNotFoundError(game_id) from None
        logger.info("scores recorded", game_id=game_id, rows=len(rows))
        return rows

    async def get_game(self, game_id: str) -> Game:
        game = await self._game_repo.get_game(game_id)
        if game is None:
            raise GameNotFoundError(game_id)
        return game

    async def get_scores(self, game_id: str) -> list[Score]:
        return await self._game_repo.get_scores(game_id)

    async def get_games_in_range(
        self,
        start: datetime,
        end: datetime,
        *,
        include_demo: bool = False,
        limit: int | None = None,
    ) -> list[Game]:
        """Games completed in [start, end], most recent first. Demo games are excluded by default."""
        return await self._game_repo.get_games_in_range(start, end, include_demo=include_demo, limit=limit)
