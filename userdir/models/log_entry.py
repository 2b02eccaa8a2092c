"""ORM model for the append-only audit log."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, func

from userdir.models.base import Base


class LogEntry(Base):
    """Audit record: which operation was performed and by whom."""

    __tablename__ = "logs"

    id = Column(Integer, primary_key=True, autoincrement=True)
    operation = Column(String(255), nullable=False)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
