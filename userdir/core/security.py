"""Password hashing and user identifier generation."""

import uuid

import bcrypt

# Min/max lengths for email and password validation at the CLI boundary.
EMAIL_MIN_LEN = 3
EMAIL_MAX_LEN = 255
PASSWORD_MIN_LEN = 8
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


class BcryptPasswordHasher:
    """PasswordHasher backed by bcrypt."""

    def hash(self, plaintext: str, cost: int) -> str:
        return hash_password(plaintext, cost)

    def compare(self, plaintext: str, hashed: str) -> bool:
        return verify_password(plaintext, hashed)


def new_user_id() -> str:
    """Random 128-bit token in canonical dashed hex form (36 chars)."""
    return str(uuid.uuid4())
