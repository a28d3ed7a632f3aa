"""Domain entity representing a user notification."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class NotificationKind(str, Enum):
    """Fixed set of events a user can be notified about."""

    NEW_SPONSORSHIP = "new_sponsorship"
    SPONSORSHIP_CONFIRMED = "sponsorship_confirmed"
    NEW_MESSAGE = "new_message"
    FLAGGED_TRANSACTION = "flagged_transaction"


@dataclass
class Notification:
    """Durable record of a dispatch to a specific user.

    ``kind`` and ``payload`` never change after creation; ``is_read`` only
    moves from ``False`` to ``True``.
    """

    id: int | None
    user_id: int
    kind: str
    payload: dict[str, Any] = field(default_factory=dict)
    is_read: bool = False
    created_at: datetime | None = None


__all__ = ["Notification", "NotificationKind"]
