"""
Bounded, most-recent-first audit trail of console actions.
"""
from datetime import datetime, timezone
from typing import List, Optional

from docuflow.core.repository import Repository, new_id
from docuflow.features.activity.schemas import ActivityLogEntry
from docuflow.utils import get_logger


log = get_logger(__name__)

ACTIVITY_LOG_LIMIT = 50


def prepend_entry(
    entries: List[ActivityLogEntry],
    entry: ActivityLogEntry,
    limit: int = ACTIVITY_LOG_LIMIT,
) -> List[ActivityLogEntry]:
    """New entry first; anything past ``limit`` (the oldest) is dropped."""
    return [entry, *entries][:limit]


class ActivityLogger:
    def __init__(self, repository: Repository[ActivityLogEntry], limit: int = ACTIVITY_LOG_LIMIT):
        self._repository = repository
        self.limit = limit

    @property
    def entries(self) -> List[ActivityLogEntry]:
        return self._repository.all()

    def last_activity(self) -> Optional[ActivityLogEntry]:
        entries = self._repository.all()
        return entries[0] if entries else None

    async def record(self, acting_user_name: Optional[str], action: str) -> Optional[ActivityLogEntry]:
        """
        Append ``action`` attributed to ``acting_user_name``.

        Actions without an acting user are not logged.
        """
        if not acting_user_name:
            return None
        entry = ActivityLogEntry(
            id=new_id("log"),
            timestamp=datetime.now(timezone.utc),
            user_name=acting_user_name,
            action=action,
        )
        await self._repository.replace(prepend_entry(self._repository.all(), entry, self.limit))
        log.info("Audit: user=%r action=%r", acting_user_name, action)
        return entry
