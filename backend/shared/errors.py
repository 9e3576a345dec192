"""Error taxonomy shared by the clubhouse components and the API boundary.

Each category carries the HTTP status the API maps it to. Components raise
the specific subclasses defined next to them; the web layer only needs to
know about ``ClubhouseError``.
"""

from http import HTTPStatus


class ClubhouseError(Exception):
    """Base class for every expected failure raised by the core components."""

    status_code: int = HTTPStatus.BAD_REQUEST


class ValidationError(ClubhouseError):
    """Bad input shape or range (negative player count, malformed rate, ...)."""


class ConflictError(ClubhouseError):
    """Input that contradicts itself or existing state (duplicate names, roster mismatch)."""


class NotFoundError(ClubhouseError):
    """A referenced entity does not exist."""

    status_code = HTTPStatus.NOT_FOUND


class ConfigurationError(ClubhouseError):
    """Required system configuration is missing (e.g. no rate configured)."""


class StoreError(ClubhouseError):
    """Underlying persistence failure. Always surfaced, never swallowed."""

    status_code = HTTPStatus.INTERNAL_SERVER_ERROR
