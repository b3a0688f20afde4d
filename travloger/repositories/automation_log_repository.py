from typing import Any, List

from sqlalchemy import select

from travloger.models.automation_log import AutomationLog
from travloger.repositories.base import BaseRepository


class AutomationLogRepository(BaseRepository):
    """Encapsulates queries against the ``automation_log`` table."""

    async def append(self, **kwargs: Any) -> AutomationLog:
        """Insert a new audit entry.  Entries are never updated."""
        entry = AutomationLog(**kwargs)
        self._db.add(entry)
        return entry

    async def list_for_lead(self, lead_id: int, limit: int = 50) -> List[AutomationLog]:
        """Return the most recent entries for a lead, newest first."""
        result = await self._execute(
            select(AutomationLog)
            .where(AutomationLog.lead_id == lead_id)
            .order_by(AutomationLog.created_at.desc())
            .limit(limit)
        )
        return list(result.scalars().all())
