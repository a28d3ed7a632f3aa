"""Shared fixtures: a throwaway SQLite database and recording delivery channels."""

from __future__ import annotations

import asyncio
import os
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

TEST_DB_PATH = Path(tempfile.gettempdir()) / "sponsorlink_notifications_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "30"
os.environ.pop("SENDGRID_API_KEY", None)
os.environ.pop("SENDGRID_SENDER", None)

from sponsorlink.config import get_settings  # noqa: E402

get_settings.cache_clear()

from sponsorlink.application.use_cases.notifications import NotificationDispatcher  # noqa: E402
from sponsorlink.domain.entities import User, UserRole  # noqa: E402
from sponsorlink.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from sponsorlink.infrastructure.repositories import UserRepository  # noqa: E402


class RecordingEmailSender:
    """Email channel that remembers every message and can be told to fail."""

    def __init__(self) -> None:
        self.sent: list[tuple[str, str, str]] = []
        self.error: Exception | None = None

    def send(self, recipient: str, subject: str, html_content: str) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, subject, html_content))


class RecordingPushPublisher:
    def __init__(self) -> None:
        self.published: list[tuple[int, dict]] = []
        self.error: Exception | None = None

    def publish(self, user_id: int, message: dict) -> None:
        if self.error is not None:
            raise self.error
        self.published.append((user_id, message))


class FakeWebSocket:
    """Minimal stand-in for a Starlette websocket used by the registry."""

    def __init__(self, *, fail: bool = False, delay: float = 0.0) -> None:
        self.accepted = False
        self.received: list[dict] = []
        self._fail = fail
        self._delay = delay

    async def accept(self) -> None:
        self.accepted = True

    async def send_json(self, message: dict) -> None:
        if self._delay:
            await asyncio.sleep(self._delay)
        if self._fail:
            raise RuntimeError("connection closed")
        self.received.append(message)


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def session():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture()
def make_user(session):
    """Return a factory inserting users with unique email addresses."""

    counter = {"value": 0}

    def _make_user(
        name: str = "Test User",
        *,
        role: UserRole = UserRole.SPONSEE,
        is_active: bool = True,
    ) -> User:
        counter["value"] += 1
        email = f"user{counter['value']}@example.com"
        return UserRepository(session).create(
            User(id=None, name=name, email=email, role=role, is_active=is_active)
        )

    return _make_user


@pytest.fixture()
def email_sender() -> RecordingEmailSender:
    return RecordingEmailSender()


@pytest.fixture()
def push_publisher() -> RecordingPushPublisher:
    return RecordingPushPublisher()


@pytest.fixture()
def dispatcher(email_sender, push_publisher) -> NotificationDispatcher:
    return NotificationDispatcher(email_sender, push_publisher)


@pytest.fixture()
def fake_websocket_factory():
    return FakeWebSocket
