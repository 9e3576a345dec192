"""Admin authentication settings."""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from shared.auth.session_store import DEFAULT_SESSION_TTL_SECONDS


class AuthSettings(BaseSettings):
    model_config = {"env_prefix": "AUTH_"}

    # Cookie Secure flag -- True in production, False for local dev (HTTP)
    cookie_secure: bool = False

    password_hasher: str = "bcrypt"

    session_ttl_seconds: int = Field(default=DEFAULT_SESSION_TTL_SECONDS, gt=0)

    # Bootstrap admin, created at startup only when a password is configured
    admin_username: str = "admin"
    admin_password: str | None = None

    @field_validator("password_hasher")
    @classmethod
    def validate_password_hasher(cls, v: str) -> str:
        if v not in {"bcrypt", "simple"}:
            raise ValueError("password_hasher must be 'bcrypt' or 'simple'")
        return v
