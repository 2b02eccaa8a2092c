"""Append-only audit log of sensitive user operations."""

import logging

from sqlalchemy.orm import Session

from userdir.models import LogEntry

logger = logging.getLogger(__name__)


class AuditLogService:
    def __init__(self, session: Session) -> None:
        self._session = session

    def append(self, operation: str, created_by: str) -> LogEntry:
        """Persist one audit entry attributed to created_by."""
        entry = LogEntry(operation=operation, created_by=created_by)
        self._session.add(entry)
        self._session.commit()
        logger.debug(
            "Audit entry appended",
            extra={"operation": operation, "created_by": created_by},
        )
        return entry
