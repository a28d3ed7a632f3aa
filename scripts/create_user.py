"""Create a user and print an access token for the notification API."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from sponsorlink.domain.entities import User, UserRole
from sponsorlink.infrastructure.database import SessionLocal, initialize_database
from sponsorlink.infrastructure.repositories import UserRepository
from sponsorlink.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Create a SponsorLink user and print a bearer token for it.",
    )
    parser.add_argument("--name", required=True, help="Display name of the user")
    parser.add_argument("--email", required=True, help="Email address notifications are sent to")
    parser.add_argument(
        "--role",
        choices=[role.value for role in UserRole],
        default=UserRole.SPONSEE.value,
        help="Role of the user (default: sponsee)",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        repository = UserRepository(session)
        if repository.get_by_email(args.email) is not None:
            raise SystemExit(f"A user with email {args.email} already exists.")
        user = repository.create(
            User(id=None, name=args.name, email=args.email, role=UserRole(args.role))
        )
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Could not store the user: {exc}") from exc
    finally:
        session.close()

    print(
        "User created:\n"
        f"  ID: {user.id}\n"
        f"  Name: {user.name}\n"
        f"  Email: {user.email}\n"
        f"  Role: {user.role.value}\n"
        f"  Token: {create_access_token(user.id)}"
    )


if __name__ == "__main__":
    main()
