"""Email delivery channel backed by the SendGrid REST API."""

from __future__ import annotations

import json
import logging
from typing import Any, Protocol

from sendgrid import SendGridAPIClient
from sendgrid.helpers.mail import Mail

from sponsorlink.config import Settings
from sponsorlink.infrastructure.notifications.errors import ChannelDeliveryError

logger = logging.getLogger(__name__)

EMAIL_CHANNEL = "email"


class EmailSender(Protocol):
    def send(self, recipient: str, subject: str, html_content: str) -> None:
        """Deliver one email or raise :class:`ChannelDeliveryError`."""


def _extract_sendgrid_error_details(body: Any) -> str | None:
    """Return a human readable description for a SendGrid error payload."""

    if isinstance(body, bytes):
        try:
            body = body.decode("utf-8")
        except UnicodeDecodeError:
            return None

    if isinstance(body, str):
        body = body.strip()
        if not body:
            return None
        try:
            body = json.loads(body)
        except json.JSONDecodeError:
            return body

    if isinstance(body, dict):
        messages = []
        for item in body.get("errors") or []:
            if not isinstance(item, dict) or not item.get("message"):
                continue
            if item.get("help"):
                messages.append(f"{item['message']} (help: {item['help']})")
            else:
                messages.append(str(item["message"]))
        if messages:
            return "; ".join(messages)
        return json.dumps(body, default=str)

    if isinstance(body, list):
        return "; ".join(str(item) for item in body)

    return None


def _describe_failure(source: Any) -> str:
    status_code = getattr(source, "status_code", None)
    details = _extract_sendgrid_error_details(getattr(source, "body", None))
    if status_code and details:
        return f"status {status_code}: {details}"
    if status_code:
        return f"status {status_code}"
    return details or str(source) or source.__class__.__name__


class SendGridEmailSender:
    """Send HTML emails through SendGrid.

    A sender without credentials is disabled: :meth:`send` logs and returns
    without contacting the API.
    """

    def __init__(
        self,
        api_key: str | None,
        sender: str | None,
        *,
        timeout: float = 10.0,
    ) -> None:
        self._api_key = api_key
        self._sender = sender
        self._timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "SendGridEmailSender":
        return cls(
            settings.sendgrid_api_key,
            settings.sendgrid_sender,
            timeout=settings.email_timeout_seconds,
        )

    @property
    def enabled(self) -> bool:
        return bool(self._api_key and self._sender)

    def send(self, recipient: str, subject: str, html_content: str) -> None:
        if not self.enabled:
            logger.info("SendGrid configuration incomplete; skipping email to %s", recipient)
            return

        message = Mail(
            from_email=self._sender,
            to_emails=recipient,
            subject=subject,
            html_content=html_content,
        )

        client = SendGridAPIClient(self._api_key)
        # The HTTP client copies this value into every request it builds.
        client.client.timeout = self._timeout
        try:
            response = client.send(message)
        except Exception as exc:
            description = _describe_failure(exc)
            logger.error("SendGrid API request failed with %s", description)
            raise ChannelDeliveryError(EMAIL_CHANNEL, description) from exc

        status_code = getattr(response, "status_code", None)
        if not isinstance(status_code, int) or not 200 <= status_code < 300:
            description = _describe_failure(response)
            logger.error("SendGrid API responded with %s", description)
            raise ChannelDeliveryError(EMAIL_CHANNEL, description)

        logger.debug("Email '%s' sent to %s", subject, recipient)


__all__ = ["EMAIL_CHANNEL", "EmailSender", "SendGridEmailSender"]
