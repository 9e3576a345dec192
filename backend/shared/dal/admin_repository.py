"""Abstract interface for admin account persistence."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from shared.auth.models import AdminUser


class AdminRepository(ABC):
    @abstractmethod
    async def create_admin(self, admin: AdminUser) -> None:
        """Insert an admin. Raises ValueError on duplicate id or username."""

    @abstractmethod
    async def get_by_username(self, username: str) -> AdminUser | None: ...

    @abstractmethod
    async def get_by_id(self, user_id: str) -> AdminUser | None: ...
