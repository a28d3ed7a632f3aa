"""Registry of live websocket connections and the user each one claims."""

from __future__ import annotations

import logging
from typing import Any

import anyio
from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionRegistry:
    """Track accepted websockets and push messages to those claimed by a user.

    A connection starts unclaimed, may claim a user id, and is removed when
    its session ends. Every method runs on the event loop thread; worker
    threads reach it through :class:`PushPublisher`.
    """

    def __init__(self, *, send_timeout: float = 5.0) -> None:
        self._send_timeout = send_timeout
        self._connections: dict[WebSocket, int | None] = {}

    def __len__(self) -> int:
        return len(self._connections)

    def __contains__(self, websocket: object) -> bool:
        return websocket in self._connections

    async def connect(self, websocket: WebSocket) -> None:
        """Accept ``websocket`` and register it without an identity."""

        await websocket.accept()
        self._connections[websocket] = None

    def claim_identity(self, websocket: WebSocket, user_id: int) -> None:
        if websocket not in self._connections:
            raise KeyError("Connection is not registered")
        previous = self._connections[websocket]
        if previous is not None and previous != user_id:
            logger.info(
                "Connection re-claimed: identity %s replaced by %s", previous, user_id
            )
        self._connections[websocket] = user_id

    def deregister(self, websocket: WebSocket) -> None:
        self._connections.pop(websocket, None)

    def identity_of(self, websocket: WebSocket) -> int | None:
        return self._connections.get(websocket)

    def connections_for(self, user_id: int) -> list[WebSocket]:
        return [
            websocket
            for websocket, claimed in self._connections.items()
            if claimed is not None and claimed == user_id
        ]

    async def broadcast_to(self, user_id: int, message: dict[str, Any]) -> int:
        """Send ``message`` to every connection claimed by ``user_id``.

        A connection that fails or exceeds the send timeout is dropped and the
        remaining connections are still attempted. Returns the number of
        connections that received the message.
        """

        delivered = 0
        for connection in self.connections_for(user_id):
            try:
                with anyio.fail_after(self._send_timeout):
                    await connection.send_json(message)
            except Exception as exc:
                logger.warning(
                    "Dropping websocket for user %s after failed push: %r", user_id, exc
                )
                self.deregister(connection)
                continue
            delivered += 1
        return delivered


__all__ = ["ConnectionRegistry"]
