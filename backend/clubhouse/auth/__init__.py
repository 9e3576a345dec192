"""Admin authentication for the clubhouse API: Starlette backend, user model, and route policy."""

from clubhouse.auth.backend import SESSION_COOKIE_NAME, SessionCookieBackend
from clubhouse.auth.models import AuthenticatedAdmin
from clubhouse.auth.policy import protected_api, public_route, validate_route_auth_policy

__all__ = [
    "SESSION_COOKIE_NAME",
    "AuthenticatedAdmin",
    "SessionCookieBackend",
    "protected_api",
    "public_route",
    "validate_route_auth_policy",
]
