"""Tests for UserService.generate_user_id: bounded retry until an unused id is drawn."""

import re
import unittest
from unittest.mock import MagicMock, patch

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userdir.core.config import Settings
from userdir.models import Base, Role, User
from userdir.services.users import IdentifierSpaceExhaustedError, UserService

UUID_PATTERN = re.compile(r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$")


def _service(session: object, id_source=None, max_attempts: int = 5) -> UserService:
    kwargs = {}
    if id_source is not None:
        kwargs["id_source"] = id_source
    return UserService(
        session,
        roles=MagicMock(),
        bans=MagicMock(),
        audit_log=MagicMock(),
        hasher=MagicMock(),
        settings=Settings(USER_ID_MAX_ATTEMPTS=max_attempts),
        **kwargs,
    )


class TestGenerateUserIdWithMocks(unittest.TestCase):
    def test_first_free_id_is_returned(self) -> None:
        ids = iter(["taken-1", "taken-2", "free"])
        service = _service(MagicMock(), id_source=lambda: next(ids))
        with patch.object(
            UserService, "_user_exists", side_effect=[True, True, False]
        ) as exists:
            self.assertEqual(service.generate_user_id(), "free")
        self.assertEqual(exists.call_count, 3)

    def test_exhaustion_raises_after_max_attempts(self) -> None:
        id_source = MagicMock(return_value="always-taken")
        service = _service(MagicMock(), id_source=id_source, max_attempts=3)
        with patch.object(UserService, "_user_exists", return_value=True):
            with self.assertRaises(IdentifierSpaceExhaustedError) as ctx:
                service.generate_user_id()
        self.assertEqual(id_source.call_count, 3)
        self.assertEqual(ctx.exception.attempts, 3)
        self.assertEqual(ctx.exception.status_code, 500)

    def test_default_source_yields_canonical_uuid(self) -> None:
        service = _service(MagicMock())
        with patch.object(UserService, "_user_exists", return_value=False):
            user_id = service.generate_user_id()
        self.assertRegex(user_id, UUID_PATTERN)


class TestGenerateUserIdDb(unittest.TestCase):
    """Existence is checked against the users table."""

    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.session = sessionmaker(bind=engine, autoflush=False)()
        role = Role(type="subscriber")
        self.session.add(role)
        self.session.flush()
        self.session.add_all(
            [
                User(id="existing-1", email="a@x.com", password_hash="h", role_id=role.id),
                User(id="existing-2", email="b@x.com", password_hash="h", role_id=role.id),
            ]
        )
        self.session.commit()

    def tearDown(self) -> None:
        self.session.close()

    def test_skips_existing_ids(self) -> None:
        ids = iter(["existing-1", "existing-2", "new-id"])
        service = _service(self.session, id_source=lambda: next(ids))
        self.assertEqual(service.generate_user_id(), "new-id")

    def test_never_returns_existing_id(self) -> None:
        ids = iter(["existing-2"] * 4)
        service = _service(self.session, id_source=lambda: next(ids), max_attempts=4)
        with self.assertRaises(IdentifierSpaceExhaustedError):
            service.generate_user_id()


if __name__ == "__main__":
    unittest.main()
