"""Tests for notification event validation and template rendering."""

from __future__ import annotations

import pytest

from sponsorlink.application.use_cases.notifications import render
from sponsorlink.domain.entities import (
    InvalidNotificationDataError,
    NewMessageEvent,
    NotificationKind,
    UnknownNotificationKindError,
    build_notification_event,
)


def test_new_message_rendering_uses_fixed_subject_and_push_type() -> None:
    rendered = render("new_message", {"sender_name": "Alice", "receiver_name": "Bob"})

    assert rendered.email is not None
    assert rendered.email.subject == "New Message Received"
    assert "Dear Bob," in rendered.email.html
    assert "new message from Alice" in rendered.email.html
    assert rendered.push is not None
    assert rendered.push.to_message() == {
        "type": "new_message",
        "message": "New message from Alice",
    }


@pytest.mark.parametrize(
    ("kind", "data", "subject", "push_type"),
    [
        (
            NotificationKind.NEW_SPONSORSHIP,
            {"sponsor_name": "Ada", "sponsee_name": "Grace"},
            "New Sponsorship Received",
            "new_sponsorship",
        ),
        (
            NotificationKind.SPONSORSHIP_CONFIRMED,
            {"sponsee_name": "Grace", "sponsor_name": "Ada"},
            "Sponsorship Confirmed",
            "sponsorship_confirmed",
        ),
        (
            NotificationKind.FLAGGED_TRANSACTION,
            {"admin_name": "Root", "transaction_id": 17},
            "Transaction Flagged",
            "transaction_flagged",
        ),
    ],
)
def test_every_kind_renders_email_and_push(kind, data, subject, push_type) -> None:
    rendered = render(kind, data)

    assert rendered.email.subject == subject
    assert rendered.push.type == push_type


def test_flagged_transaction_mentions_transaction_number() -> None:
    rendered = render("flagged_transaction", {"admin_name": "Root", "transaction_id": 17})

    assert "flagged transaction #17 for review" in rendered.email.html
    assert rendered.push.message == "Transaction #17 has been flagged for review"


def test_rendering_is_deterministic() -> None:
    data = {"sponsor_name": "Ada", "sponsee_name": "Grace"}

    assert render("new_sponsorship", data) == render("new_sponsorship", data)


def test_names_are_escaped_in_email_but_not_in_push() -> None:
    rendered = render(
        "new_message",
        {"sender_name": "<script>x</script>", "receiver_name": "Bob & Co"},
    )

    assert "<script>" not in rendered.email.html
    assert "&lt;script&gt;" in rendered.email.html
    assert "Bob &amp; Co" in rendered.email.html
    assert rendered.push.message == "New message from <script>x</script>"


def test_unknown_kind_fails_fast() -> None:
    with pytest.raises(UnknownNotificationKindError):
        render("sponsorship_cancelled", {})


def test_missing_and_unexpected_fields_are_rejected() -> None:
    with pytest.raises(InvalidNotificationDataError) as exc_info:
        build_notification_event("new_message", {"sender_name": "Alice", "body": "hi"})

    message = str(exc_info.value)
    assert "missing receiver_name" in message
    assert "unexpected body" in message


def test_build_event_uses_named_fields_regardless_of_order() -> None:
    event = build_notification_event(
        NotificationKind.NEW_MESSAGE,
        {"receiver_name": "Bob", "sender_name": "Alice"},
    )

    assert event == NewMessageEvent(sender_name="Alice", receiver_name="Bob")


def test_build_event_accepts_camel_case_field_names() -> None:
    event = build_notification_event(
        "flagged_transaction", {"adminName": "Root", "transactionId": 17}
    )
    rendered = render("new_message", {"senderName": "Alice", "receiverName": "Bob"})

    assert rendered.push.message == "New message from Alice"
    assert event.admin_name == "Root"
    assert event.transaction_id == 17


def test_field_given_under_both_names_is_rejected() -> None:
    with pytest.raises(InvalidNotificationDataError) as exc_info:
        build_notification_event(
            "new_message",
            {"sender_name": "Alice", "senderName": "Mallory", "receiver_name": "Bob"},
        )

    assert "duplicated sender_name" in str(exc_info.value)
