"""Auth service coordinating admin accounts, login, and session management."""

from __future__ import annotations

import re
from http import HTTPStatus
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.auth.models import AdminUser
from shared.errors import ClubhouseError, ConflictError, ValidationError

if TYPE_CHECKING:
    from shared.auth.models import AuthSession
    from shared.auth.password import PasswordHasher
    from shared.auth.session_store import AuthSessionStore
    from shared.dal.admin_repository import AdminRepository

logger = structlog.get_logger()

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 30
USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9_]+$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 72  # bcrypt truncates at 72 bytes


class AuthError(ClubhouseError):
    """Authentication failure. Deliberately vague about which part was wrong."""

    status_code = HTTPStatus.UNAUTHORIZED


class AuthService:
    """Coordinate admin account creation, login, and session validation."""

    def __init__(
        self,
        admin_repo: AdminRepository,
        session_store: AuthSessionStore | None = None,
        *,
        password_hasher: PasswordHasher,
    ) -> None:
        self._admin_repo = admin_repo
        self._session_store = session_store
        self._hasher = password_hasher

    async def create_admin(self, username: str, password: str) -> AdminUser:
        """Create a new admin account. Raises ValidationError or ConflictError."""
        _validate_username(username)
        _validate_password(password)
        if await self._admin_repo.get_by_username(username) is not None:
            raise ConflictError(f"Username '{username}' is already taken")

        admin = AdminUser(
            user_id=str(uuid4()),
            username=username,
            password_hash=await self._hasher.hash(password),
        )
        try:
            await self._admin_repo.create_admin(admin)
        except ValueError as e:
            raise ConflictError(str(e)) from e
        logger.info("admin account created", user_id=admin.user_id, username=username)
        return admin

    async def ensure_admin(self, username: str, password: str) -> AdminUser:
        """Return the existing admin with this username, creating it when absent."""
        existing = await self._admin_repo.get_by_username(username)
        if existing is not None:
            return existing
        return await self.create_admin(username, password)

    async def login(self, username: str, password: str) -> AuthSession:
        """Validate credentials and create a session."""
        store = self._require_session_store()
        admin = await self._admin_repo.get_by_username(username)
        if admin is None or not await self._hasher.verify(password, admin.password_hash):
            logger.info("admin login rejected", username=username)
            raise AuthError("Invalid credentials")
        session = store.create_session(admin.user_id, admin.username)
        logger.info("admin logged in", user_id=admin.user_id)
        return session

    def validate_session(self, session_id: str | None) -> AuthSession | None:
        """Return the session if valid and not expired, otherwise None."""
        store = self._require_session_store()
        if session_id is None:
            return None
        return store.get_session(session_id)

    def logout(self, session_id: str) -> None:
        self._require_session_store().delete_session(session_id)

    def end_admin_sessions(self, user_id: str) -> int:
        return self._require_session_store().revoke_admin(user_id)

    async def get_admin(self, user_id: str) -> AdminUser | None:
        return await self._admin_repo.get_by_id(user_id)

    # -- private helpers --

    def _require_session_store(self) -> AuthSessionStore:
        if self._session_store is None:
            raise RuntimeError("session_store is required for session operations")
        return self._session_store


def _validate_username(username: str) -> None:
    """Validate username: 3-30 chars, alphanumeric + underscores."""
    if len(username) < USERNAME_MIN_LENGTH or len(username) > USERNAME_MAX_LENGTH:
        raise ValidationError(f"Username must be between {USERNAME_MIN_LENGTH} and {USERNAME_MAX_LENGTH} characters")
    if not USERNAME_PATTERN.match(username):
        raise ValidationError("Username must contain only letters, numbers, and underscores")


def _validate_password(password: str) -> None:
    """Validate password: 8-72 chars, max 72 UTF-8 bytes (bcrypt limit)."""
    if len(password) < PASSWORD_MIN_LENGTH or len(password) > PASSWORD_MAX_LENGTH:
        raise ValidationError(f"Password must be between {PASSWORD_MIN_LENGTH} and {PASSWORD_MAX_LENGTH} characters")
    if len(password.encode("utf-8")) > PASSWORD_MAX_LENGTH:
        raise ValidationError(f"Password must not exceed {PASSWORD_MAX_LENGTH} bytes when encoded")
