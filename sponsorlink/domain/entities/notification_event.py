"""Typed payloads for each :class:`NotificationKind`."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, ClassVar, Mapping, Union

from .notification import NotificationKind


@dataclass(frozen=True)
class NewSponsorshipEvent:
    """A sponsor started funding the recipient."""

    kind: ClassVar[NotificationKind] = NotificationKind.NEW_SPONSORSHIP

    sponsor_name: str
    sponsee_name: str


@dataclass(frozen=True)
class SponsorshipConfirmedEvent:
    """The sponsee confirmed receipt of the recipient's sponsorship."""

    kind: ClassVar[NotificationKind] = NotificationKind.SPONSORSHIP_CONFIRMED

    sponsee_name: str
    sponsor_name: str


@dataclass(frozen=True)
class NewMessageEvent:
    kind: ClassVar[NotificationKind] = NotificationKind.NEW_MESSAGE

    sender_name: str
    receiver_name: str


@dataclass(frozen=True)
class FlaggedTransactionEvent:
    """An administrator flagged a transaction for review."""

    kind: ClassVar[NotificationKind] = NotificationKind.FLAGGED_TRANSACTION

    admin_name: str
    transaction_id: int | str


NotificationEvent = Union[
    NewSponsorshipEvent,
    SponsorshipConfirmedEvent,
    NewMessageEvent,
    FlaggedTransactionEvent,
]

EVENT_TYPES: dict[NotificationKind, type] = {
    event_type.kind: event_type
    for event_type in (
        NewSponsorshipEvent,
        SponsorshipConfirmedEvent,
        NewMessageEvent,
        FlaggedTransactionEvent,
    )
}


class UnknownNotificationKindError(ValueError):
    """Raised when a kind outside :class:`NotificationKind` is requested."""


class InvalidNotificationDataError(ValueError):
    """Raised when the data does not match the fields of the kind's event."""


def parse_notification_kind(kind: NotificationKind | str) -> NotificationKind:
    """Return ``kind`` as a :class:`NotificationKind` or raise."""

    try:
        return NotificationKind(kind)
    except ValueError as exc:
        raise UnknownNotificationKindError(f"Unknown notification kind: {kind!r}") from exc


def _camel_case(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def build_notification_event(
    kind: NotificationKind | str, data: Mapping[str, Any]
) -> NotificationEvent:
    """Validate ``data`` against the event declared for ``kind``.

    Each field may be given by its own name or its camelCase alias
    (``sender_name`` or ``senderName``), but not both.
    """

    event_type = EVENT_TYPES[parse_notification_kind(kind)]
    aliases = {}
    for item in fields(event_type):
        aliases[item.name] = item.name
        aliases[_camel_case(item.name)] = item.name

    values: dict[str, Any] = {}
    unexpected = []
    duplicated = []
    for key, value in data.items():
        name = aliases.get(key)
        if name is None:
            unexpected.append(key)
        elif name in values:
            duplicated.append(name)
        else:
            values[name] = value

    missing = sorted(set(aliases.values()) - set(values))
    if missing or unexpected or duplicated:
        problems = []
        if missing:
            problems.append(f"missing {', '.join(missing)}")
        if unexpected:
            problems.append(f"unexpected {', '.join(sorted(unexpected))}")
        if duplicated:
            problems.append(f"duplicated {', '.join(sorted(duplicated))}")
        raise InvalidNotificationDataError(
            f"Invalid data for {event_type.kind.value}: {'; '.join(problems)}"
        )

    return event_type(**values)


__all__ = [
    "EVENT_TYPES",
    "FlaggedTransactionEvent",
    "InvalidNotificationDataError",
    "NewMessageEvent",
    "NewSponsorshipEvent",
    "NotificationEvent",
    "SponsorshipConfirmedEvent",
    "UnknownNotificationKindError",
    "build_notification_event",
    "parse_notification_kind",
]
