"""Pydantic models describing notification payloads."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class NotificationRead(BaseModel):
    """Representation of a stored notification delivered to the client."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    kind: str
    payload: dict[str, Any] = Field(default_factory=dict)
    is_read: bool
    created_at: datetime


class NotificationActionResponse(BaseModel):
    """Acknowledgement returned by the read-state endpoints."""

    message: str
    updated: int | None = None


__all__ = ["NotificationActionResponse", "NotificationRead"]
