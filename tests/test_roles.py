"""Tests for userdir.services.roles.RoleService."""

import unittest

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userdir.models import Base, Role, RoleType
from userdir.services.roles import RoleService


class TestRoleService(unittest.TestCase):
    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.session = sessionmaker(bind=engine, autoflush=False)()
        self.roles = RoleService(self.session)

    def tearDown(self) -> None:
        self.session.close()

    def test_missing_role(self) -> None:
        self.assertIsNone(self.roles.get_by_type(RoleType.SUBSCRIBER))

    def test_ensure_roles_seeds_all_types(self) -> None:
        created = self.roles.ensure_roles()
        self.assertEqual({r.type for r in created}, {"subscriber", "admin"})
        self.assertEqual(self.roles.get_by_type(RoleType.ADMIN).type, "admin")

    def test_ensure_roles_is_idempotent(self) -> None:
        self.roles.ensure_roles()
        self.assertEqual(self.roles.ensure_roles(), [])
        self.assertEqual(self.session.query(Role).count(), 2)

    def test_lookup_by_enum_or_string(self) -> None:
        self.roles.ensure_roles([RoleType.SUBSCRIBER])
        by_enum = self.roles.get_by_type(RoleType.SUBSCRIBER)
        by_str = self.roles.get_by_type(" Subscriber ")
        self.assertIsNotNone(by_enum)
        self.assertEqual(by_enum.id, by_str.id)

    def test_duplicate_types_seeded_once(self) -> None:
        created = self.roles.ensure_roles(["member", "member", RoleType.ADMIN])
        self.assertEqual(sorted(r.type for r in created), ["admin", "member"])


if __name__ == "__main__":
    unittest.main()
