"""Ban history: list, create and lift bans."""

import logging
from datetime import datetime, timezone

from sqlalchemy.orm import Session

from userdir.models import Ban

logger = logging.getLogger(__name__)


class BanNotFoundError(Exception):
    """Raised when lifting a ban id that does not exist."""

    def __init__(self, message: str = "The ban was not found.") -> None:
        self.message = message
        self.status_code = 404
        super().__init__(message)


class BanService:
    """Reads and writes rows of the bans table."""

    def __init__(self, session: Session) -> None:
        self._session = session

    def list_by_user_id(self, user_id: str) -> list[Ban]:
        """All bans of a user, oldest first."""
        return (
            self._session.query(Ban)
            .filter(Ban.user_id == user_id)
            .order_by(Ban.created_at, Ban.id)
            .all()
        )

    def ban(self, user_id: str, reason: str | None = None) -> Ban:
        ban = Ban(user_id=user_id, reason=reason)
        self._session.add(ban)
        self._session.commit()
        self._session.refresh(ban)
        logger.info("User banned", extra={"user_id": user_id, "ban_id": ban.id})
        return ban

    def lift(self, ban_id: int) -> Ban:
        """Set unbanned_at on a ban. Lifting an already lifted ban keeps its original timestamp."""
        ban = self._session.get(Ban, ban_id)
        if ban is None:
            raise BanNotFoundError()
        if ban.unbanned_at is None:
            ban.unbanned_at = datetime.now(timezone.utc)
            self._session.commit()
            self._session.refresh(ban)
            logger.info("Ban lifted", extra={"user_id": ban.user_id, "ban_id": ban.id})
        return ban
