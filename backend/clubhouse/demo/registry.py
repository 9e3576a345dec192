"""Demo-Number Registry: contacts whose games are excluded from reporting."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

from shared.dal.models import DemoPhoneNumber
from shared.errors import ConflictError, NotFoundError, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable

    from shared.dal.demo_number_repository import DemoNumberRepository

logger = structlog.get_logger()

COUNTRY_CODE = "91"
LOCAL_NUMBER_LENGTH = 10

_NON_DIGITS = re.compile(r"\D")


class InvalidPhoneNumberError(ValidationError):
    pass


class DuplicateDemoNumberError(ConflictError):
    pass


class DemoNumberNotFoundError(NotFoundError):
    pass


def normalize(phone_number: str) -> str:
    """Strip every non-digit, then drop a leading country code from long numbers.

    The order matters: "+91 80159-89208" -> "918015989208" -> "8015989208".
    """
    digits = _NON_DIGITS.sub("", phone_number or "")
    if len(digits) > LOCAL_NUMBER_LENGTH and digits.startswith(COUNTRY_CODE):
        digits = digits[len(COUNTRY_CODE) :]
    return digits


def _utc_now() -> datetime:
    return datetime.now(UTC)


class DemoNumberRegistry:
    """Normalized phone numbers flagged as demo. Duplicate adds are rejected."""

    def __init__(self, repo: DemoNumberRepository, clock: Callable[[], datetime] = _utc_now) -> None:
        self._repo = repo
        self._clock = clock

    async def add(self, phone_number: str) -> DemoPhoneNumber:
        normalized = normalize(phone_number)
        if not normalized:
            raise InvalidPhoneNumberError("Phone number must contain digits")
        if await self._repo.get_by_number(normalized) is not None:
            raise DuplicateDemoNumberError(f"Phone number '{normalized}' is already a demo number")

        entry = DemoPhoneNumber(demo_id=str(uuid4()), phone_number=normalized, added_at=self._clock())
        try:
            await self._repo.add_number(entry)
        except ValueError as e:
            raise DuplicateDemoNumberError(str(e)) from e
        logger.info("demo number added", demo_id=entry.demo_id)
        return entry

    async def remove(self, demo_id: str) -> None:
        if not await self._repo.remove_number(demo_id):
            raise DemoNumberNotFoundError(f"Demo number '{demo_id}' not found")
        logger.info("demo number removed", demo_id=demo_id)

    async def list_numbers(self) -> list[DemoPhoneNumber]:
        return await self._repo.list_numbers()

    async def is_demo(self, phone_number: str) -> bool:
        normalized = normalize(phone_number)
        if not normalized:
            return False
        return await self._repo.get_by_number(normalized) is not None
