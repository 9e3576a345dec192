"""Admin account and session models for authentication."""

from dataclasses import dataclass

from pydantic import BaseModel, field_validator


class AdminUser(BaseModel, frozen=True):
    """Back-office account allowed to manage pricing, reports and demo numbers."""

    user_id: str
    username: str
    password_hash: str

    @field_validator("password_hash")
    @classmethod
    def _require_hash(cls, value: str) -> str:
        if not value:
            raise ValueError("Admin accounts must have a password hash")
        return value


@dataclass
class AuthSession:
    """Server-side session for a logged-in admin."""

    session_id: str  # UUID, stored in cookie
    user_id: str
    username: str
    created_at: float  # time.time()
    expires_at: float  # time.time() + TTL
