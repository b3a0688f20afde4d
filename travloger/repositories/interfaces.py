"""Storage capabilities the scoring services depend on.

The SQLAlchemy repositories in this package satisfy these protocols;
tests substitute ``AsyncMock`` objects with the same methods.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol


class RuleStore(Protocol):
    async def get_applicable_rules(self, lead_type: str, trigger_type: str) -> List[Any]:
        ...


class LeadStore(Protocol):
    async def get_fields(self, lead_id: int) -> Optional[Dict[str, Any]]:
        ...

    async def update_score(
        self, lead_id: int, score: int, priority: str, calculated_at: datetime
    ) -> None:
        ...

    async def commit(self) -> None:
        ...


class AuditLogStore(Protocol):
    async def append(self, **kwargs: Any) -> Any:
        ...

    async def list_for_lead(self, lead_id: int, limit: int) -> List[Any]:
        ...

    async def commit(self) -> None:
        ...

    async def rollback(self) -> None:
        ...
