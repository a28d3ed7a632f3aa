"""Push channel that hands messages to the :class:`ConnectionRegistry`."""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from anyio import from_thread

from .errors import ChannelDeliveryError
from .manager import ConnectionRegistry

logger = logging.getLogger(__name__)

PUSH_CHANNEL = "push"


class PushPublisher:
    """Schedule broadcasts onto the event loop that owns the registry."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry
        self._pending: set[asyncio.Task] = set()

    def publish(self, user_id: int, message: dict[str, Any]) -> None:
        """Deliver ``message`` to the live connections of ``user_id``.

        On the event loop the broadcast is fire-and-forget. From a worker
        thread it blocks until the broadcast finishes, which is bounded by the
        registry's per-connection timeout.
        """

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            try:
                from_thread.run(self._registry.broadcast_to, user_id, dict(message))
            except RuntimeError as exc:
                raise ChannelDeliveryError(
                    PUSH_CHANNEL, "no event loop available to reach live connections"
                ) from exc
        else:
            task = loop.create_task(self._registry.broadcast_to(user_id, dict(message)))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)


__all__ = ["PUSH_CHANNEL", "PushPublisher"]
