"""Render notification events into email and push messages.

Every renderer is a pure function of its event. Names are HTML-escaped in
email bodies; push messages are plain text and left as is.
"""

from __future__ import annotations

from dataclasses import dataclass
from html import escape
from typing import Any, Callable, Mapping

from sponsorlink.domain.entities import (
    FlaggedTransactionEvent,
    NewMessageEvent,
    NewSponsorshipEvent,
    NotificationEvent,
    NotificationKind,
    SponsorshipConfirmedEvent,
    build_notification_event,
)


@dataclass(frozen=True)
class EmailRendering:
    subject: str
    html: str


@dataclass(frozen=True)
class PushRendering:
    type: str
    message: str

    def to_message(self) -> dict[str, str]:
        return {"type": self.type, "message": self.message}


@dataclass(frozen=True)
class RenderedNotification:
    email: EmailRendering | None = None
    push: PushRendering | None = None


def _email_body(title: str, greeting: str, *lines: str) -> str:
    paragraphs = "".join(f"<p>{line}</p>" for line in lines)
    return f"<h2>{title}</h2><p>Dear {greeting},</p>{paragraphs}"


def _render_new_sponsorship(event: NewSponsorshipEvent) -> RenderedNotification:
    sponsor = escape(str(event.sponsor_name))
    return RenderedNotification(
        email=EmailRendering(
            subject="New Sponsorship Received",
            html=_email_body(
                "New Sponsorship",
                escape(str(event.sponsee_name)),
                f"You have received a new sponsorship from {sponsor}.",
                "Please log in to your account to view the details.",
            ),
        ),
        push=PushRendering(
            type="new_sponsorship",
            message=f"New sponsorship received from {event.sponsor_name}",
        ),
    )


def _render_sponsorship_confirmed(event: SponsorshipConfirmedEvent) -> RenderedNotification:
    sponsee = escape(str(event.sponsee_name))
    return RenderedNotification(
        email=EmailRendering(
            subject="Sponsorship Confirmed",
            html=_email_body(
                "Sponsorship Confirmed",
                escape(str(event.sponsor_name)),
                f"{sponsee} has confirmed receipt of your sponsorship.",
                "Please log in to your account to view the confirmation details.",
            ),
        ),
        push=PushRendering(
            type="sponsorship_confirmed",
            message=f"{event.sponsee_name} has confirmed your sponsorship",
        ),
    )


def _render_new_message(event: NewMessageEvent) -> RenderedNotification:
    sender = escape(str(event.sender_name))
    return RenderedNotification(
        email=EmailRendering(
            subject="New Message Received",
            html=_email_body(
                "New Message",
                escape(str(event.receiver_name)),
                f"You have received a new message from {sender}.",
                "Please log in to your account to view the message.",
            ),
        ),
        push=PushRendering(
            type="new_message",
            message=f"New message from {event.sender_name}",
        ),
    )


def _render_flagged_transaction(event: FlaggedTransactionEvent) -> RenderedNotification:
    transaction = escape(str(event.transaction_id))
    return RenderedNotification(
        email=EmailRendering(
            subject="Transaction Flagged",
            html=_email_body(
                "Transaction Flagged",
                "Admin",
                f"{escape(str(event.admin_name))} has flagged transaction #{transaction} for review.",
                "Please log in to your account to review the transaction.",
            ),
        ),
        push=PushRendering(
            type="transaction_flagged",
            message=f"Transaction #{event.transaction_id} has been flagged for review",
        ),
    )


_RENDERERS: dict[NotificationKind, Callable[[Any], RenderedNotification]] = {
    NotificationKind.NEW_SPONSORSHIP: _render_new_sponsorship,
    NotificationKind.SPONSORSHIP_CONFIRMED: _render_sponsorship_confirmed,
    NotificationKind.NEW_MESSAGE: _render_new_message,
    NotificationKind.FLAGGED_TRANSACTION: _render_flagged_transaction,
}

_missing_renderers = set(NotificationKind) - set(_RENDERERS)
if _missing_renderers:  # pragma: no cover - guards against adding a kind without a template
    raise RuntimeError(
        "Notification kinds without a template: "
        + ", ".join(sorted(kind.value for kind in _missing_renderers))
    )


def render_notification(event: NotificationEvent) -> RenderedNotification:
    """Return the email and push renderings for ``event``."""

    return _RENDERERS[event.kind](event)


def render(kind: NotificationKind | str, data: Mapping[str, Any]) -> RenderedNotification:
    """Validate ``data`` for ``kind`` and render it."""

    return render_notification(build_notification_event(kind, data))


__all__ = [
    "EmailRendering",
    "PushRendering",
    "RenderedNotification",
    "render",
    "render_notification",
]
