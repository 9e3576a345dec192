"""Player registration at the front desk."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.dal.models import Player
from shared.errors import NotFoundError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.dal.player_repository import PlayerRepository

logger = structlog.get_logger()

NAME_MAX_LENGTH = 100
CONTACT_MAX_LENGTH = 32
EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class PlayerNotFoundError(NotFoundError):
    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player '{player_id}' not found")
        self.player_id = player_id


def _utc_now() -> datetime:
    return datetime.now(UTC)


class PlayerService:
    def __init__(self, player_repo: PlayerRepository, clock: Callable[[], datetime] = _utc_now) -> None:
        self._player_repo = player_repo
        self._clock = clock

    async def register(self, name: str, contact: str, email: str | None = None) -> Player:
        """Validate and persist a new player. The contact is kept as typed."""
        name = name.strip()
        contact = contact.strip()
        email = email.strip() if email else None

        if not name or len(name) > NAME_MAX_LENGTH:
            raise ValidationError(f"Name must be between 1 and {NAME_MAX_LENGTH} characters")
        if not contact or len(contact) > CONTACT_MAX_LENGTH or not any(ch.isdigit() for ch in contact):
            raise ValidationError("Contact must be a phone number")
        if email is not None and not EMAIL_PATTERN.match(email):
            raise ValidationError("Email address is not valid")

        player = Player(
            player_id=str(uuid4()),
            name=name,
            contact=contact,
            email=email,
            created_at=self._clock(),
        )
        await self._player_repo.create_player(player)
        logger.info("player registered", player_id=player.player_id)
        return player

    async def get_player(self, player_id: str) -> Player:
        player = await self._player_repo.get_player(player_id)
        if player is None:
            raise PlayerNotFoundError(player_id)
        return player
