"""Public helpers for emitting and reading user notifications."""

from .dispatcher import NotificationDispatcher
from .errors import NotificationPersistenceError, RecipientNotFoundError
from .events import (
    notify_new_message,
    notify_new_sponsorship,
    notify_sponsorship_confirmed,
    notify_transaction_flagged,
)
from .read_state import (
    NOTIFICATION_LIST_LIMIT,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
)
from .templates import (
    EmailRendering,
    PushRendering,
    RenderedNotification,
    render,
    render_notification,
)

__all__ = [
    "NOTIFICATION_LIST_LIMIT",
    "EmailRendering",
    "NotificationDispatcher",
    "NotificationPersistenceError",
    "PushRendering",
    "RecipientNotFoundError",
    "RenderedNotification",
    "list_notifications",
    "mark_all_notifications_read",
    "mark_notification_read",
    "notify_new_message",
    "notify_new_sponsorship",
    "notify_sponsorship_confirmed",
    "notify_transaction_flagged",
    "render",
    "render_notification",
]
