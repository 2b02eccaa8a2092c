"""ORM model for user bans."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from userdir.models.base import Base


class Ban(Base):
    """
    One ban in a user's history. The ban is active while unbanned_at is NULL.
    """

    __tablename__ = "bans"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    reason = Column(Text, nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    unbanned_at = Column(DateTime(timezone=True), nullable=True)
