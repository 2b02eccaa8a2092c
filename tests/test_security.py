"""Unit tests for userdir.core.security: bcrypt hashing and user id generation."""

import unittest
import uuid

from userdir.core.security import (
    BcryptPasswordHasher,
    hash_password,
    new_user_id,
    verify_password,
)


class TestHashPassword(unittest.TestCase):
    def test_hash_is_not_plaintext_and_verifies(self) -> None:
        hashed = hash_password("correct horse", 4)
        self.assertNotEqual(hashed, "correct horse")
        self.assertTrue(verify_password("correct horse", hashed))
        self.assertFalse(verify_password("wrong horse", hashed))

    def test_salted(self) -> None:
        self.assertNotEqual(hash_password("same", 4), hash_password("same", 4))

    def test_cost_is_encoded_in_hash(self) -> None:
        self.assertTrue(hash_password("pw", 5).startswith("$2b$05$"))

    def test_malformed_hash_does_not_raise(self) -> None:
        self.assertFalse(verify_password("pw", "not-a-bcrypt-hash"))


class TestBcryptPasswordHasher(unittest.TestCase):
    def test_hash_and_compare(self) -> None:
        hasher = BcryptPasswordHasher()
        hashed = hasher.hash("secret", 4)
        self.assertTrue(hasher.compare("secret", hashed))
        self.assertFalse(hasher.compare("other", hashed))


class TestNewUserId(unittest.TestCase):
    def test_canonical_uuid_string(self) -> None:
        user_id = new_user_id()
        self.assertEqual(len(user_id), 36)
        self.assertEqual(str(uuid.UUID(user_id)), user_id)

    def test_unique(self) -> None:
        self.assertEqual(len({new_user_id() for _ in range(100)}), 100)


if __name__ == "__main__":
    unittest.main()
