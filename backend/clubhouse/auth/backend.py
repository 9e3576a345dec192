"""Starlette AuthenticationBackend that validates the admin session cookie."""

from __future__ import annotations

from typing import TYPE_CHECKING

from starlette.authentication import AuthCredentials, AuthenticationBackend

from clubhouse.auth.models import AuthenticatedAdmin

if TYPE_CHECKING:
    from starlette.requests import HTTPConnection

    from shared.auth.service import AuthService

SESSION_COOKIE_NAME = "session_id"


class SessionCookieBackend(AuthenticationBackend):
    """Authenticate requests carrying a live server-side session id cookie.

    Requests without a valid cookie stay anonymous; route policy decides
    whether that is acceptable.
    """

    def __init__(self, auth_service: AuthService) -> None:
        self._auth_service = auth_service

    async def authenticate(
        self,
        conn: HTTPConnection,
    ) -> tuple[AuthCredentials, AuthenticatedAdmin] | None:
        session = self._auth_service.validate_session(conn.cookies.get(SESSION_COOKIE_NAME))
        if session is None:
            return None
        return AuthCredentials(["authenticated"]), AuthenticatedAdmin(
            user_id=session.user_id,
            username=session.username,
            session_id=session.session_id,
        )
