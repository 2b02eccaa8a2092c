"""
Create a user with the default role. Run from project root:
  python -m userdir.scripts.create_user EMAIL PASSWORD [--name NAME]
Example:
  python -m userdir.scripts.create_user admin@example.com your-secure-password --name Admin

The default role must exist first (python -m userdir.scripts.seed_roles).
"""
import argparse
import logging
import sys

from userdir.core.config import get_settings
from userdir.core.database import SessionLocal, check_db_connected
from userdir.core.security import (
    EMAIL_MAX_LEN,
    EMAIL_MIN_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from userdir.services import build_user_service
from userdir.services.users import UserServiceError

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a directory user with the default role.")
    parser.add_argument("email", help=f"Email ({EMAIL_MIN_LEN}-{EMAIL_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--name", default=None, help="Display name")
    args = parser.parse_args(argv)

    email = args.email.strip().lower()
    if not (EMAIL_MIN_LEN <= len(email) <= EMAIL_MAX_LEN) or "@" not in email:
        print("Invalid email.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )

    db = SessionLocal()
    try:
        if not check_db_connected(db):
            print("Database is not reachable.", file=sys.stderr)
            return 1
        users = build_user_service(db, settings)
        if users.get_by_email(email) is not None:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        user = users.create({"email": email, "password": args.password, "name": args.name})
        if user is None:
            print(
                f"Default role '{settings.DEFAULT_ROLE_TYPE}' is missing; "
                "run python -m userdir.scripts.seed_roles first.",
                file=sys.stderr,
            )
            return 1
        print(f"Created user '{email}' with id {user.id}.")
        return 0
    except UserServiceError as e:
        logger.error("User creation failed: %s", e.message)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
