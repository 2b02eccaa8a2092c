"""Role lookup and seeding."""

import logging
from collections.abc import Iterable

from sqlalchemy.orm import Session

from userdir.models import Role, RoleType

logger = logging.getLogger(__name__)


def _role_value(role_type: RoleType | str) -> str:
    if isinstance(role_type, RoleType):
        return role_type.value
    return role_type.strip().lower()


class RoleService:
    """Reads and seeds rows of the roles table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def get_by_type(self, role_type: RoleType | str) -> Role | None:
        """Return the role with this symbolic type, or None if it was never seeded."""
        return (
            self._session.query(Role)
            .filter(Role.type == _role_value(role_type))
            .first()
        )

    def ensure_roles(self, role_types: Iterable[RoleType | str] = tuple(RoleType)) -> list[Role]:
        """
        Insert any of role_types that do not exist yet. Idempotent: safe to run repeatedly.

        Returns only the roles created by this call.
        """
        wanted = list(dict.fromkeys(_role_value(t) for t in role_types))
        existing = {
            row.type
            for row in self._session.query(Role.type).filter(Role.type.in_(wanted))
        }
        created = [Role(type=value) for value in wanted if value not in existing]
        if not created:
            return []
        self._session.add_all(created)
        self._session.commit()
        logger.info("Seeded roles: %s", ", ".join(r.type for r in created))
        return created
