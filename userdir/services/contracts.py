"""Narrow collaborator contracts consumed by the user directory."""

from collections.abc import Callable, Sequence
from typing import Protocol

from userdir.models import Ban, LogEntry, Role


class RoleLookup(Protocol):
    def get_by_type(self, role_type: str) -> Role | None: ...


class BanLookup(Protocol):
    def list_by_user_id(self, user_id: str) -> Sequence[Ban]:
        """Return the user's bans in creation order (oldest first)."""
        ...


class AuditLog(Protocol):
    def append(self, operation: str, created_by: str) -> LogEntry: ...


class PasswordHasher(Protocol):
    def hash(self, plaintext: str, cost: int) -> str: ...

    def compare(self, plaintext: str, hashed: str) -> bool: ...


# Produces a random 128-bit token rendered as a canonical string.
IdentifierSource = Callable[[], str]
