from .notification import NotificationActionResponse, NotificationRead

__all__ = [
    "NotificationActionResponse",
    "NotificationRead",
]
