"""Domain entity representing a user."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class UserRole(str, Enum):
    """Closed set of roles a user can hold."""

    SPONSOR = "sponsor"
    SPONSEE = "sponsee"
    ADMIN = "admin"


@dataclass
class User:
    """Core attributes describing an application user."""

    id: int | None
    name: str
    email: str
    role: UserRole
    is_active: bool = True
    created_at: datetime | None = None

    def is_admin(self) -> bool:
        """Return ``True`` when the user is an administrator."""

        return self.role is UserRole.ADMIN


__all__ = ["User", "UserRole"]
