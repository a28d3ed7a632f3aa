"""Use cases for listing notifications and updating their read flag."""

from __future__ import annotations

import logging

from sqlalchemy.orm import Session

from sponsorlink.domain.entities import Notification
from sponsorlink.infrastructure.repositories import NotificationRepository

logger = logging.getLogger(__name__)

NOTIFICATION_LIST_LIMIT = 50


def list_notifications(
    session: Session, user_id: int, *, limit: int = NOTIFICATION_LIST_LIMIT
) -> list[Notification]:
    """Return the newest notifications of ``user_id``, at most 50."""

    limit = max(1, min(limit, NOTIFICATION_LIST_LIMIT))
    return list(NotificationRepository(session).list_for_user(user_id, limit=limit))


def mark_notification_read(session: Session, notification_id: int, user_id: int) -> bool:
    """Flag a notification of ``user_id`` as read.

    Ids that are unknown or owned by another user are a silent no-op so the
    caller cannot probe for other users' notifications. Returns ``True`` when
    a notification of ``user_id`` matched.
    """

    repository = NotificationRepository(session)
    if repository.mark_as_read(notification_id, user_id=user_id):
        return True

    existing = repository.get(notification_id)
    if existing is not None:
        logger.warning(
            "User %s tried to mark notification %s owned by user %s as read",
            user_id,
            notification_id,
            existing.user_id,
        )
    return False


def mark_all_notifications_read(session: Session, user_id: int) -> int:
    """Flag every notification of ``user_id`` as read; returns how many changed."""

    return NotificationRepository(session).mark_all_as_read(user_id)


__all__ = [
    "NOTIFICATION_LIST_LIMIT",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
]
