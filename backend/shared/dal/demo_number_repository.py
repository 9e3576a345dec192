"""Abstract interface for the demo phone number registry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import DemoPhoneNumber


class DemoNumberRepository(ABC):
    @abstractmethod
    async def add_number(self, entry: DemoPhoneNumber) -> None:
        """Insert an entry. Raises ValueError when the phone number is already registered."""

    @abstractmethod
    async def remove_number(self, demo_id: str) -> bool:
        """Delete an entry. Returns False when no entry had that id."""

    @abstractmethod
    async def list_numbers(self) -> list[DemoPhoneNumber]: ...

    @abstractmethod
    async def get_by_number(self, phone_number: str) -> DemoPhoneNumber | None: ...
