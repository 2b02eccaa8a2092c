"""Service layer: the user directory and its role, ban and audit collaborators."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy.orm import Session

from userdir.core.security import BcryptPasswordHasher, new_user_id
from userdir.services.audit_log import AuditLogService
from userdir.services.bans import BanService
from userdir.services.roles import RoleService
from userdir.services.users import UserService

if TYPE_CHECKING:
    from userdir.core.config import Settings


def build_user_service(session: Session, settings: Settings | None = None) -> UserService:
    """Wire a UserService and its collaborators around one session."""
    if settings is None:
        from userdir.core.config import get_settings

        settings = get_settings()
    return UserService(
        session,
        roles=RoleService(session),
        bans=BanService(session),
        audit_log=AuditLogService(session),
        hasher=BcryptPasswordHasher(),
        settings=settings,
        id_source=new_user_id,
    )


__all__ = [
    "AuditLogService",
    "BanService",
    "RoleService",
    "UserService",
    "build_user_service",
]
