"""Abstract interface for the append-only rate history."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.dal.models import Rate


class RateRepository(ABC):
    @abstractmethod
    async def add_rate(self, rate: Rate) -> None: ...

    @abstractmethod
    async def get_latest_rate(self) -> Rate | None:
        """Return the most recently inserted rate by timestamp, or None when empty."""

    @abstractmethod
    async def list_rates(self) -> list[Rate]:
        """Return every rate, newest first."""
