"""User directory: create, look up, list and update users; ban status and id generation."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import Select, select
from sqlalchemy.orm import Session

from userdir.core.security import new_user_id
from userdir.models import Ban, Role, User
from userdir.services.contracts import (
    AuditLog,
    BanLookup,
    IdentifierSource,
    PasswordHasher,
    RoleLookup,
)

if TYPE_CHECKING:
    from userdir.core.config import Settings

logger = logging.getLogger(__name__)

# Audit operation labels.
OP_LIST_USERS = "Get all the users"
OP_CHANGE_PASSWORD = "Change the password"

PASSWORD_CHANGED_MESSAGE = "The password has been changed successfully!"

# Everything except the password hash; "role" is the role's type.
SAFE_USER_SELECTION: dict[str, bool] = {
    "id": True,
    "email": True,
    "name": True,
    "avatar_url": True,
    "bio": True,
    "role_id": True,
    "role": True,
    "created_at": True,
    "updated_at": True,
}

_USER_COLUMNS = frozenset(User.__table__.columns.keys())

# Fields create() discards so the default role always wins.
_ROLE_FIELDS = ("role", "role_id")


class UserServiceError(Exception):
    """Base error carrying an HTTP-equivalent status code and a user-facing message."""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class UserNotFoundError(UserServiceError):
    def __init__(self, message: str = "The user was not found.") -> None:
        super().__init__(message, status_code=404)


class IncorrectDataError(UserServiceError):
    def __init__(self, message: str = "Incorrect data.") -> None:
        super().__init__(message, status_code=400)


class IdentifierSpaceExhaustedError(UserServiceError):
    """Raised when every drawn user id within the attempt limit was already taken."""

    def __init__(self, attempts: int) -> None:
        self.attempts = attempts
        super().__init__("Identifier space exhausted.", status_code=500)


def _check_user_fields(fields: Mapping[str, Any]) -> None:
    unknown = sorted(set(fields) - _USER_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown user field(s): {', '.join(unknown)}")


def _selected_columns(selection: Mapping[str, bool]) -> list[Any]:
    columns: list[Any] = []
    for field, included in selection.items():
        if not included:
            continue
        if field == "role":
            columns.append(Role.type.label("role"))
        elif field in _USER_COLUMNS:
            columns.append(getattr(User, field))
        else:
            raise ValueError(f"Unknown user field: {field!r}")
    if not columns:
        raise ValueError("Selection must include at least one field")
    return columns


def _projection(selection: Mapping[str, bool]) -> Select:
    return (
        select(*_selected_columns(selection))
        .select_from(User)
        .outerjoin(Role, User.role_id == Role.id)
    )


def _user_id(user: User | Mapping[str, Any]) -> str:
    if isinstance(user, Mapping):
        return user["id"]
    return user.id


class UserService:
    """
    Orchestrates user records over one request-scoped session.

    Collaborators are injected at wiring time (see build_user_service). No call
    holds a transaction across steps; each write commits on its own.
    """

    def __init__(
        self,
        session: Session,
        *,
        roles: RoleLookup,
        bans: BanLookup,
        audit_log: AuditLog,
        hasher: PasswordHasher,
        settings: Settings,
        id_source: IdentifierSource = new_user_id,
    ) -> None:
        self._session = session
        self._roles = roles
        self._bans = bans
        self._audit_log = audit_log
        self._hasher = hasher
        self._settings = settings
        self._id_source = id_source

    def create(self, data: Mapping[str, Any]) -> User | None:
        """
        Create a user with the default role.

        Any role supplied in data is ignored. A plain "password" is hashed; an
        explicit "password_hash" is stored as given. Returns None, without
        writing anything, when the default role does not exist.
        """
        role_type = self._settings.DEFAULT_ROLE_TYPE
        role = self._roles.get_by_type(role_type)
        if role is None:
            logger.warning("Default role %r is missing; user not created", role_type)
            return None

        fields = {k: v for k, v in data.items() if k not in _ROLE_FIELDS}
        password = fields.pop("password", None)
        if password is not None:
            fields["password_hash"] = self._hasher.hash(
                password, self._settings.PASSWORD_HASH_ROUNDS
            )
        _check_user_fields(fields)
        if not fields.get("id"):
            fields["id"] = self.generate_user_id()

        user = User(**fields, role_id=role.id)
        self._session.add(user)
        self._session.commit()
        self._session.refresh(user)
        logger.info("User created", extra={"user_id": user.id, "role_type": role.type})
        return user

    def get_by_email(self, email: str) -> User | None:
        return self._session.query(User).filter(User.email == email).first()

    def get_by_id(self, user_id: str, selection: Mapping[str, bool]) -> dict[str, Any] | None:
        """
        Return only the selected fields of a user, or None if no user has this id.

        selection maps field names (user columns, or "role" for the role type)
        to inclusion flags. Raises ValueError for unknown fields.
        """
        stmt = _projection(selection).where(User.id == user_id)
        row = self._session.execute(stmt).first()
        if row is None:
            return None
        return dict(row._mapping)

    def list_all(self, actor_id: str) -> list[dict[str, Any]]:
        """Every user projected through SAFE_USER_SELECTION; the read is audited."""
        actor = self._session.get(User, actor_id)
        if actor is None:
            raise UserNotFoundError()
        self._audit_log.append(OP_LIST_USERS, actor.id)
        stmt = _projection(SAFE_USER_SELECTION).order_by(User.created_at, User.id)
        return [dict(row._mapping) for row in self._session.execute(stmt)]

    def change_password(
        self, actor_id: str, old_password: str, new_password: str
    ) -> dict[str, str]:
        actor = self._session.get(User, actor_id)
        if actor is None:
            raise UserNotFoundError()
        if not self._hasher.compare(old_password, actor.password_hash):
            logger.info("Password change rejected", extra={"user_id": actor.id})
            raise IncorrectDataError()

        password_hash = self._hasher.hash(new_password, self._settings.PASSWORD_HASH_ROUNDS)
        self.update({"password_hash": password_hash}, actor)
        self._audit_log.append(OP_CHANGE_PASSWORD, actor.id)
        return {"message": PASSWORD_CHANGED_MESSAGE}

    def update(self, patch: Mapping[str, Any], user: User | Mapping[str, Any]) -> User:
        """Apply patch to the user's row and return the refreshed full record. No validation beyond field names."""
        _check_user_fields(patch)
        row = self._session.get(User, _user_id(user))
        if row is None:
            raise UserNotFoundError()
        for field, value in patch.items():
            setattr(row, field, value)
        self._session.commit()
        self._session.refresh(row)
        return row

    def is_banned(self, user: User | Mapping[str, Any]) -> Ban | None:
        """
        Return the active ban, or None.

        Only the most recent ban decides: an unlifted older ban does not count
        once a newer ban has been lifted.
        """
        bans = self._bans.list_by_user_id(_user_id(user))
        if not bans:
            return None
        last_ban = bans[-1]
        if last_ban.unbanned_at is not None:
            return None
        return last_ban

    def generate_user_id(self) -> str:
        """Draw ids until one is not taken, at most USER_ID_MAX_ATTEMPTS times."""
        max_attempts = self._settings.USER_ID_MAX_ATTEMPTS
        for attempt in range(1, max_attempts + 1):
            candidate = self._id_source()
            if not self._user_exists(candidate):
                return candidate
            logger.warning(
                "Generated user id already taken; retrying",
                extra={"attempt": attempt, "max_attempts": max_attempts},
            )
        logger.error("No free user id after %s attempts", max_attempts)
        raise IdentifierSpaceExhaustedError(max_attempts)

    def _user_exists(self, user_id: str) -> bool:
        return (
            self._session.query(User.id).filter(User.id == user_id).first()
            is not None
        )
