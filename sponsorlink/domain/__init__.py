"""Domain layer for the notification service."""
