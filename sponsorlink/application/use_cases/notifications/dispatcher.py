"""Multi-channel notification dispatch."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from sponsorlink.domain.entities import (
    Notification,
    NotificationKind,
    User,
    build_notification_event,
)
from sponsorlink.infrastructure.email import EmailSender
from sponsorlink.infrastructure.notifications import ChannelDeliveryError, PushPublisher
from sponsorlink.infrastructure.repositories import NotificationRepository, UserRepository
from sponsorlink.utils import now_in_app_timezone

from .errors import NotificationPersistenceError, RecipientNotFoundError
from .templates import EmailRendering, PushRendering, render_notification

logger = logging.getLogger(__name__)


class NotificationDispatcher:
    """Notify one user of one event by email, live push and a stored record.

    Email and push are best effort: their failures are logged and never
    raised. The stored record is written after both attempts regardless of
    their outcome. Only a missing recipient or a failed write reach the
    caller.
    """

    def __init__(self, email_sender: EmailSender, push_publisher: PushPublisher) -> None:
        self._email_sender = email_sender
        self._push_publisher = push_publisher

    def dispatch(
        self,
        session: Session,
        kind: NotificationKind | str,
        user_id: int,
        data: Mapping[str, Any],
    ) -> Notification:
        user = UserRepository(session).get(user_id)
        if user is None:
            raise RecipientNotFoundError(user_id)

        event = build_notification_event(kind, data)
        rendered = render_notification(event)

        if rendered.email is not None:
            self._send_email(user, rendered.email)
        if rendered.push is not None:
            self._publish_push(user.id, rendered.push)

        return self._persist(session, user.id, event.kind, data)

    def _send_email(self, user: User, email: EmailRendering) -> None:
        try:
            self._email_sender.send(user.email, email.subject, email.html)
        except ChannelDeliveryError as exc:
            logger.warning("Email notification to user %s not delivered: %s", user.id, exc)
        except Exception:
            logger.exception("Unexpected error sending email notification to user %s", user.id)

    def _publish_push(self, user_id: int, push: PushRendering) -> None:
        try:
            self._push_publisher.publish(user_id, push.to_message())
        except ChannelDeliveryError as exc:
            logger.warning("Push notification to user %s not delivered: %s", user_id, exc)
        except Exception:
            logger.exception("Unexpected error publishing push notification to user %s", user_id)

    @staticmethod
    def _persist(
        session: Session,
        user_id: int,
        kind: NotificationKind,
        data: Mapping[str, Any],
    ) -> Notification:
        notification = Notification(
            id=None,
            user_id=user_id,
            kind=kind.value,
            payload=dict(data),
            is_read=False,
            created_at=now_in_app_timezone(),
        )
        try:
            return NotificationRepository(session).create(notification)
        except SQLAlchemyError as exc:
            session.rollback()
            logger.error("Could not store %s notification for user %s: %s", kind.value, user_id, exc)
            raise NotificationPersistenceError(
                f"Could not store {kind.value} notification for user {user_id}"
            ) from exc


__all__ = ["NotificationDispatcher"]
