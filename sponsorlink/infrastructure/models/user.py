"""SQLAlchemy model for the users table."""

from sqlalchemy import Boolean, Column, DateTime, Enum, Integer, String, func

from sponsorlink.domain.entities import UserRole
from sponsorlink.infrastructure.database import Base


class UserModel(Base):
    """Database representation of a sponsor, sponsee or administrator."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    role = Column(
        Enum(UserRole, values_callable=lambda roles: [role.value for role in roles]),
        nullable=False,
    )
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, server_default=func.now())


__all__ = ["UserModel"]
