"""
Seed the roles table with every known role type. Idempotent; run from project root:

  python -m userdir.scripts.seed_roles
"""

import logging
import sys

from userdir.core.config import get_settings
from userdir.core.database import SessionLocal
from userdir.models import RoleType
from userdir.services.roles import RoleService

logger = logging.getLogger(__name__)


def main() -> int:
    """Insert missing roles, including the configured default role."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    db = SessionLocal()
    try:
        role_types = [t.value for t in RoleType] + [settings.DEFAULT_ROLE_TYPE]
        created = RoleService(db).ensure_roles(role_types)
        logger.info("Role seeding completed: roles_created=%s", len(created))
        return 0
    except Exception as e:
        logger.exception("Role seeding failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
