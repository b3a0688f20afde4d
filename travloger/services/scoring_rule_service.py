import logging
from typing import Any, List, Optional

from travloger.core.constants import UPDATABLE_RULE_FIELDS
from travloger.core.exceptions import ScoringRuleNotFoundError, ValidationError
from travloger.models.scoring_rule import LeadScoringRule
from travloger.repositories.scoring_rule_repository import ScoringRuleRepository
from travloger.schemas.scoring_rule import ScoringRuleCreate, ScoringRuleUpdate

logger = logging.getLogger(__name__)

# Sending null for these clears them; null elsewhere is ignored
_NULLABLE_RULE_FIELDS = frozenset({"lead_type", "notes"})


def _plain(value: Any) -> Any:
    """Store enum members by their value."""
    return getattr(value, "value", value)


class ScoringRuleService:
    """CRUD over scoring rules.  Deleting a rule only deactivates it."""

    def __init__(self, rule_repo: ScoringRuleRepository) -> None:
        self._rule_repo = rule_repo

    async def list_rules(
        self, lead_type: Optional[str] = None, status: str = "Active"
    ) -> List[LeadScoringRule]:
        return await self._rule_repo.list_rules(status=status, lead_type=lead_type)

    async def get_rule(self, rule_id: int) -> LeadScoringRule:
        rule = await self._rule_repo.get_by_id(rule_id)
        if rule is None:
            raise ScoringRuleNotFoundError(f"Scoring rule {rule_id} not found")
        return rule

    async def create_rule(self, data: ScoringRuleCreate) -> LeadScoringRule:
        values = {key: _plain(value) for key, value in data.model_dump().items()}
        rule = await self._rule_repo.create(**values)
        await self._rule_repo.commit()
        logger.info("Created scoring rule %s (%s)", rule.id, rule.scoring_criteria_name)
        return rule

    async def update_rule(
        self, rule_id: int, data: ScoringRuleUpdate
    ) -> LeadScoringRule:
        values = {
            key: _plain(value)
            for key, value in data.model_dump(exclude_unset=True).items()
            if key in UPDATABLE_RULE_FIELDS
            and (value is not None or key in _NULLABLE_RULE_FIELDS)
        }
        if not values:
            raise ValidationError("No valid fields to update")

        rule = await self.get_rule(rule_id)
        hot = values.get("priority_range_hot", rule.priority_range_hot)
        warm_min = values.get("priority_range_warm_min", rule.priority_range_warm_min)
        if hot is not None and warm_min is not None and warm_min > hot:
            raise ValidationError(
                f"priority_range_warm_min ({warm_min}) must not exceed "
                f"priority_range_hot ({hot})"
            )

        rule = await self._rule_repo.update(rule, values)
        await self._rule_repo.commit()
        logger.info("Updated scoring rule %s: %s", rule_id, sorted(values))
        return rule

    async def deactivate_rule(self, rule_id: int) -> LeadScoringRule:
        rule = await self.get_rule(rule_id)
        rule = await self._rule_repo.deactivate(rule)
        await self._rule_repo.commit()
        logger.info("Deactivated scoring rule %s", rule_id)
        return rule
