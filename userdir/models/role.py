"""ORM model for user roles."""

from enum import Enum

from sqlalchemy import Column, DateTime, Integer, String, func

from userdir.models.base import Base


class RoleType(str, Enum):
    """Symbolic role types known to the directory."""

    SUBSCRIBER = "subscriber"
    ADMIN = "admin"


class Role(Base):
    """Role referenced by every user; looked up by its symbolic type."""

    __tablename__ = "roles"

    id = Column(Integer, primary_key=True, autoincrement=True)
    type = Column(String(32), nullable=False, unique=True, index=True)
    description = Column(String(255), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
