"""ORM model for directory users."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from userdir.models.base import Base


class User(Base):
    """
    User account with exactly one role.

    id is an opaque 36-char token assigned by the service, not by the database.
    password_hash holds a bcrypt hash, never the plain password.
    """

    __tablename__ = "users"

    id = Column(String(36), primary_key=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    role_id = Column(Integer, ForeignKey("roles.id"), nullable=False, index=True)
    name = Column(String(255), nullable=True)
    avatar_url = Column(String(2048), nullable=True)
    bio = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
