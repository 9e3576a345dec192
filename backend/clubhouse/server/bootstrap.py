"""Startup seeding: the default rate and the configured admin account."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from clubhouse.pricing.rates import RateTable
    from clubhouse.server.settings import ClubhouseSettings
    from shared.auth.service import AuthService
    from shared.auth.settings import AuthSettings

logger = structlog.get_logger()


async def seed_defaults(
    settings: ClubhouseSettings,
    auth_settings: AuthSettings,
    *,
    rate_table: RateTable,
    auth_service: AuthService,
) -> None:
    """Seed an empty rate table, and the bootstrap admin when a password is configured.

    Both steps are idempotent; existing rates and accounts are left alone.
    """
    await rate_table.ensure_default_rate(settings.default_weekday_price, settings.default_weekend_price)

    if auth_settings.admin_password is None:
        logger.info("no bootstrap admin configured")
        return
    admin = await auth_service.ensure_admin(auth_settings.admin_username, auth_settings.admin_password)
    logger.info("bootstrap admin ready", user_id=admin.user_id, username=admin.username)
