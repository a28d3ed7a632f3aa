"""Errors raised by notification delivery channels."""

from __future__ import annotations


class ChannelDeliveryError(RuntimeError):
    """A delivery channel could not hand the notification over."""

    def __init__(self, channel: str, message: str) -> None:
        super().__init__(f"{channel} delivery failed: {message}")
        self.channel = channel


__all__ = ["ChannelDeliveryError"]
