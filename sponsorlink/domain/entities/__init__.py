"""Domain entities exposed by the application."""

from .notification import Notification, NotificationKind
from .notification_event import (
    EVENT_TYPES,
    FlaggedTransactionEvent,
    InvalidNotificationDataError,
    NewMessageEvent,
    NewSponsorshipEvent,
    NotificationEvent,
    SponsorshipConfirmedEvent,
    UnknownNotificationKindError,
    build_notification_event,
    parse_notification_kind,
)
from .user import User, UserRole

__all__ = [
    "EVENT_TYPES",
    "FlaggedTransactionEvent",
    "InvalidNotificationDataError",
    "NewMessageEvent",
    "NewSponsorshipEvent",
    "Notification",
    "NotificationEvent",
    "NotificationKind",
    "SponsorshipConfirmedEvent",
    "UnknownNotificationKindError",
    "User",
    "UserRole",
    "build_notification_event",
    "parse_notification_kind",
]
