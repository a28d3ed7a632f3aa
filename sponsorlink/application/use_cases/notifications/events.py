"""Notification hooks called once a business operation has committed."""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.orm import Session

from sponsorlink.domain.entities import Notification, NotificationKind, User, UserRole
from sponsorlink.infrastructure.repositories import UserRepository

from .dispatcher import NotificationDispatcher
from .errors import NotificationPersistenceError, RecipientNotFoundError

logger = logging.getLogger(__name__)


def _dispatch_quietly(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    kind: NotificationKind,
    user_id: int,
    data: dict[str, Any],
) -> Notification | None:
    try:
        return dispatcher.dispatch(session, kind, user_id, data)
    except RecipientNotFoundError as exc:
        logger.warning("Skipping %s notification: %s", kind.value, exc)
    except NotificationPersistenceError:
        logger.exception("Dropping %s notification for user %s", kind.value, user_id)
    return None


def notify_new_sponsorship(
    session: Session, dispatcher: NotificationDispatcher, *, sponsor: User, sponsee: User
) -> Notification | None:
    """Tell ``sponsee`` that ``sponsor`` created a sponsorship for them."""

    return _dispatch_quietly(
        session,
        dispatcher,
        kind=NotificationKind.NEW_SPONSORSHIP,
        user_id=sponsee.id,
        data={"sponsor_name": sponsor.name, "sponsee_name": sponsee.name},
    )


def notify_sponsorship_confirmed(
    session: Session, dispatcher: NotificationDispatcher, *, sponsee: User, sponsor: User
) -> Notification | None:
    """Tell ``sponsor`` that ``sponsee`` confirmed receipt, e.g. by uploading a photo."""

    return _dispatch_quietly(
        session,
        dispatcher,
        kind=NotificationKind.SPONSORSHIP_CONFIRMED,
        user_id=sponsor.id,
        data={"sponsee_name": sponsee.name, "sponsor_name": sponsor.name},
    )


def notify_new_message(
    session: Session, dispatcher: NotificationDispatcher, *, sender: User, receiver: User
) -> Notification | None:
    """Tell ``receiver`` that ``sender`` wrote to them."""

    return _dispatch_quietly(
        session,
        dispatcher,
        kind=NotificationKind.NEW_MESSAGE,
        user_id=receiver.id,
        data={"sender_name": sender.name, "receiver_name": receiver.name},
    )


def notify_transaction_flagged(
    session: Session,
    dispatcher: NotificationDispatcher,
    *,
    flagged_by: User,
    transaction_id: int,
) -> list[Notification]:
    """Tell every active administrator that a transaction awaits review."""

    notifications = []
    for admin_id in UserRepository(session).list_ids_by_role(UserRole.ADMIN):
        saved = _dispatch_quietly(
            session,
            dispatcher,
            kind=NotificationKind.FLAGGED_TRANSACTION,
            user_id=admin_id,
            data={"admin_name": flagged_by.name, "transaction_id": transaction_id},
        )
        if saved is not None:
            notifications.append(saved)
    return notifications


__all__ = [
    "notify_new_message",
    "notify_new_sponsorship",
    "notify_sponsorship_confirmed",
    "notify_transaction_flagged",
]
