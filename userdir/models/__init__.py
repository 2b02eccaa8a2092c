"""SQLAlchemy ORM models."""

from userdir.models.ban import Ban
from userdir.models.base import Base
from userdir.models.log_entry import LogEntry
from userdir.models.role import Role, RoleType
from userdir.models.user import User

__all__ = ["Ban", "Base", "LogEntry", "Role", "RoleType", "User"]
