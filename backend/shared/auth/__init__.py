"""Admin authentication: accounts, password hashing, and server-side sessions."""

from shared.auth.models import AdminUser, AuthSession
from shared.auth.password import PasswordHasher, get_hasher
from shared.auth.service import AuthError, AuthService
from shared.auth.session_store import AuthSessionStore
from shared.auth.settings import AuthSettings

__all__ = [
    "AdminUser",
    "AuthError",
    "AuthService",
    "AuthSession",
    "AuthSessionStore",
    "AuthSettings",
    "PasswordHasher",
    "get_hasher",
]
