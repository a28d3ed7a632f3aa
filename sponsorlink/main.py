import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sponsorlink.application.use_cases.notifications import NotificationDispatcher
from sponsorlink.config import get_settings
from sponsorlink.infrastructure.database import engine, initialize_database
from sponsorlink.infrastructure.email import EmailSender, SendGridEmailSender
from sponsorlink.infrastructure.notifications import ConnectionRegistry, PushPublisher
from sponsorlink.interfaces.api.routes import register_routes


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the tables on start-up and release the pool on shutdown."""

    initialize_database()
    yield
    engine.dispose()


def create_app(*, email_sender: EmailSender | None = None) -> FastAPI:
    """Build the API with its own connection registry and dispatcher."""

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())

    app = FastAPI(title="SponsorLink Notifications", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    registry = ConnectionRegistry(send_timeout=settings.push_send_timeout_seconds)
    app.state.connection_registry = registry
    app.state.notification_dispatcher = NotificationDispatcher(
        email_sender or SendGridEmailSender.from_settings(settings),
        PushPublisher(registry),
    )

    register_routes(app)
    return app
