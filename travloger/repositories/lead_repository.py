from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, update, func, case

from travloger.models.lead import Lead
from travloger.repositories.base import BaseRepository


class LeadRepository(BaseRepository):
    """Encapsulates every SQL query that touches the ``leads`` table."""

    async def get_fields(self, lead_id: int) -> Optional[Dict[str, Any]]:
        """Return a lead as a plain ``{column: value}`` dict, or ``None``."""
        result = await self._execute(
            select(Lead.__table__).where(Lead.id == lead_id)
        )
        row = result.mappings().one_or_none()
        return dict(row) if row is not None else None

    async def update_score(
        self, lead_id: int, score: int, priority: str, calculated_at: datetime
    ) -> None:
        """Write the derived score cache columns for a lead."""
        await self._execute(
            update(Lead)
            .where(Lead.id == lead_id)
            .values(
                lead_score=score,
                lead_priority=priority,
                last_score_calculated=calculated_at,
            )
        )

    async def get_score_distribution(self) -> List[Dict[str, Any]]:
        """Count, average, max and min score per priority (Hot, Warm, Cold)."""
        priority_order = case(
            (Lead.lead_priority == "Hot", 1),
            (Lead.lead_priority == "Warm", 2),
            (Lead.lead_priority == "Cold", 3),
            else_=4,
        )
        result = await self._execute(
            select(
                Lead.lead_priority.label("priority"),
                func.count().label("count"),
                func.avg(Lead.lead_score).label("avg_score"),
                func.max(Lead.lead_score).label("max_score"),
                func.min(Lead.lead_score).label("min_score"),
            )
            .where(Lead.lead_score.is_not(None))
            .group_by(Lead.lead_priority)
            .order_by(priority_order)
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_type_breakdown(self) -> List[Dict[str, Any]]:
        result = await self._execute(
            select(
                Lead.lead_type,
                Lead.lead_priority.label("priority"),
                func.count().label("count"),
            )
            .where(Lead.lead_score.is_not(None))
            .group_by(Lead.lead_type, Lead.lead_priority)
            .order_by(Lead.lead_type, Lead.lead_priority)
        )
        return [dict(row) for row in result.mappings().all()]

    async def get_top_scored(self, limit: int = 10) -> List[Dict[str, Any]]:
        result = await self._execute(
            select(
                Lead.id,
                Lead.name,
                Lead.email,
                Lead.phone,
                Lead.lead_score,
                Lead.lead_priority,
                Lead.lead_type,
            )
            .where(Lead.lead_score.is_not(None))
            .order_by(Lead.lead_score.desc())
            .limit(limit)
        )
        return [dict(row) for row in result.mappings().all()]
