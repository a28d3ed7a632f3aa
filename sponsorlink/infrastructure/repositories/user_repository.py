"""Persistence layer for user data."""

from __future__ import annotations

from sqlalchemy.orm import Session

from sponsorlink.domain.entities import User, UserRole
from sponsorlink.infrastructure.models import UserModel
from sponsorlink.utils import ensure_app_naive_datetime, ensure_app_timezone


class UserRepository:
    """Provide lookups for user entities."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, user_id: int) -> User | None:
        model = self.session.get(UserModel, user_id)
        return self._to_entity(model) if model else None

    def get_by_email(self, email: str) -> User | None:
        model = self.session.query(UserModel).filter_by(email=email).first()
        return self._to_entity(model) if model else None

    def create(self, user: User) -> User:
        model = UserModel(
            name=user.name,
            email=user.email,
            role=user.role,
            is_active=user.is_active,
        )
        if user.created_at is not None:
            model.created_at = ensure_app_naive_datetime(user.created_at)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def list_ids_by_role(self, role: UserRole, *, active_only: bool = True) -> list[int]:
        query = self.session.query(UserModel.id).filter(UserModel.role == role)
        if active_only:
            query = query.filter(UserModel.is_active.is_(True))
        return [user_id for (user_id,) in query.order_by(UserModel.id).all()]

    @staticmethod
    def _to_entity(model: UserModel) -> User:
        return User(
            id=model.id,
            name=model.name,
            email=model.email,
            role=UserRole(model.role),
            is_active=model.is_active,
            created_at=ensure_app_timezone(model.created_at),
        )


__all__ = ["UserRepository"]
