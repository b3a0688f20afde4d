import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func, or_

from travloger.core.constants import TRIGGER_BOTH
from travloger.models.scoring_rule import LeadScoringRule
from travloger.repositories.base import BaseRepository

logger = logging.getLogger(__name__)


class ScoringRuleRepository(BaseRepository):
    """Encapsulates queries against the ``lead_scoring_master`` table."""

    async def get_applicable_rules(
        self, lead_type: str, trigger_type: str
    ) -> List[LeadScoringRule]:
        """Return Active rules for *lead_type* and *trigger_type*.

        A NULL or empty ``lead_type`` matches every lead type and a
        ``Both`` trigger matches every trigger.  Highest ``score_value``
        first; ``id`` breaks ties so the first row is stable.
        """
        result = await self._execute(
            select(LeadScoringRule)
            .where(
                LeadScoringRule.status == "Active",
                or_(
                    LeadScoringRule.lead_type == lead_type,
                    LeadScoringRule.lead_type.is_(None),
                    LeadScoringRule.lead_type == "",
                ),
                or_(
                    LeadScoringRule.automation_trigger == trigger_type,
                    LeadScoringRule.automation_trigger == TRIGGER_BOTH,
                ),
            )
            .order_by(LeadScoringRule.score_value.desc(), LeadScoringRule.id)
        )
        return list(result.scalars().all())

    async def list_rules(
        self, status: str = "Active", lead_type: Optional[str] = None
    ) -> List[LeadScoringRule]:
        query = select(LeadScoringRule).where(LeadScoringRule.status == status)
        if lead_type:
            query = query.where(LeadScoringRule.lead_type == lead_type)
        query = query.order_by(
            LeadScoringRule.lead_type,
            LeadScoringRule.score_value.desc(),
            LeadScoringRule.scoring_criteria_name.asc(),
        )
        result = await self._execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, rule_id: int) -> Optional[LeadScoringRule]:
        """Return a single rule by primary key, or ``None``."""
        result = await self._execute(
            select(LeadScoringRule).where(LeadScoringRule.id == rule_id)
        )
        return result.scalar_one_or_none()

    async def create(self, **kwargs: Any) -> LeadScoringRule:
        """Insert a new rule and load its generated id and timestamps."""
        rule = LeadScoringRule(**kwargs)
        self._db.add(rule)
        await self.flush()
        await self._db.refresh(rule)
        return rule

    async def update(
        self, rule: LeadScoringRule, values: Dict[str, Any]
    ) -> LeadScoringRule:
        """Apply *values* onto an existing rule instance."""
        for key, value in values.items():
            setattr(rule, key, value)
        await self.flush()
        await self._db.refresh(rule)
        return rule

    async def deactivate(self, rule: LeadScoringRule) -> LeadScoringRule:
        """Soft delete: rules are never removed, only made Inactive."""
        rule.status = "Inactive"
        await self.flush()
        await self._db.refresh(rule)
        return rule

    async def get_existing_names(self) -> List[str]:
        result = await self._execute(select(LeadScoringRule.scoring_criteria_name))
        return list(result.scalars().all())

    async def seed_missing(self, rules: List[Dict[str, Any]]) -> List[str]:
        """Insert every rule in *rules* whose name is not already stored.

        Idempotent: calling it twice inserts nothing the second time.
        Returns the names that were added.
        """
        existing = set(await self.get_existing_names())
        added: List[str] = []
        for rule_data in rules:
            if rule_data["scoring_criteria_name"] in existing:
                continue
            self._db.add(LeadScoringRule(created_by="System", **rule_data))
            added.append(rule_data["scoring_criteria_name"])
        await self.flush()
        if added:
            logger.info("Seeded %d default scoring rules", len(added))
        return added

    async def count_active_by_lead_type(self) -> Dict[str, int]:
        """Return Active rule counts keyed by ``total`` and lower-cased lead type."""
        result = await self._execute(
            select(LeadScoringRule.lead_type, func.count())
            .where(LeadScoringRule.status == "Active")
            .group_by(LeadScoringRule.lead_type)
        )
        counts: Dict[str, int] = {"total": 0}
        for lead_type, count in result.all():
            counts["total"] += count
            if lead_type:
                counts[lead_type.lower()] = count
        return counts
