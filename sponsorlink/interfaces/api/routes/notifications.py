"""Endpoints and websocket handler for user notifications."""

from __future__ import annotations

import logging
from typing import Any

from anyio import to_thread
from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from sqlalchemy.orm import Session

from sponsorlink.application.use_cases.notifications import (
    NOTIFICATION_LIST_LIMIT,
    list_notifications as list_notifications_uc,
    mark_all_notifications_read,
    mark_notification_read,
)
from sponsorlink.domain.entities import User
from sponsorlink.infrastructure.database import SessionLocal, get_db
from sponsorlink.infrastructure.notifications import ConnectionRegistry
from sponsorlink.interfaces.api.dependencies import (
    get_current_active_user,
    resolve_current_user,
)
from sponsorlink.interfaces.api.schemas import NotificationActionResponse, NotificationRead

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

POLICY_VIOLATION = 1008


@router.get("/", response_model=list[NotificationRead])
def list_notifications(
    limit: int = Query(NOTIFICATION_LIST_LIMIT, ge=1, le=NOTIFICATION_LIST_LIMIT),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> list[NotificationRead]:
    """Return the most recent notifications for the authenticated user."""

    notifications = list_notifications_uc(db, current_user.id, limit=limit)
    return [NotificationRead.model_validate(notification) for notification in notifications]


@router.patch("/read-all", response_model=NotificationActionResponse)
def mark_all_as_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationActionResponse:
    updated = mark_all_notifications_read(db, current_user.id)
    return NotificationActionResponse(
        message="All notifications marked as read", updated=updated
    )


@router.patch("/{notification_id}/read", response_model=NotificationActionResponse)
def mark_as_read(
    notification_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_active_user),
) -> NotificationActionResponse:
    """Mark one notification as read.

    The response is identical whether or not the notification belongs to the
    caller.
    """

    mark_notification_read(db, notification_id, current_user.id)
    return NotificationActionResponse(message="Notification marked as read")


def _authenticate_claim(token: Any, claimed_user_id: Any = None) -> User:
    """Return the user behind ``token``, rejecting mismatching ``userId`` claims."""

    if not isinstance(token, str) or not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token required")

    session = SessionLocal()
    try:
        user = resolve_current_user(token, session)
    finally:
        session.close()

    if not user.is_active:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Inactive user")
    if claimed_user_id is not None and str(claimed_user_id) != str(user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Claimed user does not match token",
        )
    return user


async def _claim(
    websocket: WebSocket,
    registry: ConnectionRegistry,
    token: Any,
    claimed_user_id: Any = None,
) -> bool:
    try:
        user = await to_thread.run_sync(_authenticate_claim, token, claimed_user_id)
    except HTTPException as exc:
        logger.info("Rejected websocket identity claim: %s", exc.detail)
        await websocket.send_json({"type": "error", "message": exc.detail})
        await websocket.close(code=POLICY_VIOLATION)
        return False

    registry.claim_identity(websocket, user.id)
    await websocket.send_json({"type": "auth", "status": "ok", "user_id": user.id})
    return True


@router.websocket("/ws")
async def notifications_websocket(websocket: WebSocket) -> None:
    """Websocket that streams push notifications to the claimed user.

    Identity is claimed with ``?token=`` on connect or an
    ``{"type": "auth", "token": ...}`` message.
    """

    registry: ConnectionRegistry = websocket.app.state.connection_registry
    await registry.connect(websocket)
    try:
        token = websocket.query_params.get("token")
        if token and not await _claim(websocket, registry, token):
            return

        while True:
            try:
                message = await websocket.receive_json()
            except (KeyError, ValueError):
                logger.debug("Ignoring malformed websocket frame")
                continue

            if not isinstance(message, dict):
                continue

            message_type = message.get("type")
            if message_type == "ping":
                await websocket.send_json({"type": "pong"})
            elif message_type == "auth":
                if not await _claim(
                    websocket, registry, message.get("token"), message.get("userId")
                ):
                    return
    except WebSocketDisconnect:
        logger.debug("Websocket for user %s disconnected", registry.identity_of(websocket))
    finally:
        registry.deregister(websocket)


__all__ = ["router"]
