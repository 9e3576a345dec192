"""Admin sessions held in memory for the back-office API.

A session lasts one front-desk shift. Expired sessions are dropped lazily on
lookup and swept by a background task started with the application lifespan.
Nothing survives a restart; admins sign in again.
"""

from __future__ import annotations

import asyncio
import contextlib
import time
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.models import AuthSession

if TYPE_CHECKING:
    from collections.abc import Callable

DEFAULT_SESSION_TTL_SECONDS = 12 * 60 * 60
SWEEP_INTERVAL_SECONDS = 300

logger = structlog.get_logger()


class AuthSessionStore:
    def __init__(
        self,
        ttl_seconds: int = DEFAULT_SESSION_TTL_SECONDS,
        *,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._by_id: dict[str, AuthSession] = {}
        self._sweeper: asyncio.Task[None] | None = None

    @property
    def ttl_seconds(self) -> int:
        return self._ttl_seconds

    def __len__(self) -> int:
        return len(self._by_id)

    def create_session(self, user_id: str, username: str) -> AuthSession:
        issued_at = self._clock()
        session = AuthSession(
            session_id=str(uuid4()),
            user_id=user_id,
            username=username,
            created_at=issued_at,
            expires_at=issued_at + self._ttl_seconds,
        )
        self._by_id[session.session_id] = session
        return session

    def get_session(self, session_id: str) -> AuthSession | None:
        """Live session for the cookie value; an expired one is forgotten on the spot."""
        session = self._by_id.get(session_id)
        if session is not None and self._is_expired(session, self._clock()):
            del self._by_id[session_id]
            return None
        return session

    def delete_session(self, session_id: str) -> None:
        self._by_id.pop(session_id, None)

    def revoke_admin(self, user_id: str) -> int:
        """End every session an admin holds, e.g. after the account is removed."""
        revoked = self._drop(lambda s: s.user_id == user_id)
        if revoked:
            logger.info("admin sessions revoked", user_id=user_id, count=revoked)
        return revoked

    def cleanup_expired(self) -> int:
        now = self._clock()
        removed = self._drop(lambda s: self._is_expired(s, now))
        if removed:
            logger.info("expired admin sessions removed", count=removed, remaining=len(self._by_id))
        return removed

    def start_cleanup(self) -> None:
        if self._sweeper is None or self._sweeper.done():
            self._sweeper = asyncio.create_task(self._sweep_forever())

    async def stop_cleanup(self) -> None:
        sweeper, self._sweeper = self._sweeper, None
        if sweeper is None:
            return
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper

    @staticmethod
    def _is_expired(session: AuthSession, now: float) -> bool:
        return now > session.expires_at

    def _drop(self, predicate: Callable[[AuthSession], bool]) -> int:
        doomed = [sid for sid, session in self._by_id.items() if predicate(session)]
        for sid in doomed:
            del self._by_id[sid]
        return len(doomed)

    async def _sweep_forever(self) -> None:
        while True:
            await asyncio.sleep(SWEEP_INTERVAL_SECONDS)
            self.cleanup_expired()
