"""Realtime notification helpers for the infrastructure layer."""

from .errors import ChannelDeliveryError
from .manager import ConnectionRegistry
from .publisher import PUSH_CHANNEL, PushPublisher

__all__ = [
    "ChannelDeliveryError",
    "ConnectionRegistry",
    "PUSH_CHANNEL",
    "PushPublisher",
]
