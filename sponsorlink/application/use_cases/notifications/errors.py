"""Errors surfaced by notification dispatch."""

from __future__ import annotations


class RecipientNotFoundError(LookupError):
    """The user a notification is addressed to does not exist."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"Notification recipient {user_id} not found")
        self.user_id = user_id


class NotificationPersistenceError(RuntimeError):
    """The notification record could not be written."""


__all__ = ["NotificationPersistenceError", "RecipientNotFoundError"]
