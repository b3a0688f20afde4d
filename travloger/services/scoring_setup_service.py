import logging
from datetime import datetime, timezone
from typing import Any, Dict

from travloger.core.default_scoring_rules import DEFAULT_SCORING_RULES
from travloger.repositories.schema_repository import SchemaRepository
from travloger.repositories.scoring_rule_repository import ScoringRuleRepository

logger = logging.getLogger(__name__)

SCORING_TABLES = ["lead_scoring_master", "leads", "automation_log"]


class ScoringSetupService:
    """Seeds the default rule set and reports whether scoring is ready.

    Tables are created by the Alembic migrations; setup only fills
    ``lead_scoring_master`` with the Group, FIT and Corporate defaults.
    """

    def __init__(
        self, rule_repo: ScoringRuleRepository, schema_repo: SchemaRepository
    ) -> None:
        self._rule_repo = rule_repo
        self._schema_repo = schema_repo

    async def run_setup(self) -> Dict[str, Any]:
        added = await self._rule_repo.seed_missing(DEFAULT_SCORING_RULES)
        await self._rule_repo.commit()
        return {
            "message": "Lead scoring setup completed successfully",
            "rules_added": added,
            "timestamp": datetime.now(timezone.utc),
        }

    async def get_status(self) -> Dict[str, Any]:
        tables_present = await self._schema_repo.get_existing_tables(SCORING_TABLES)
        rules_count = {"total": 0, "group": 0, "fit": 0, "corporate": 0}
        if "lead_scoring_master" in tables_present:
            rules_count.update(await self._rule_repo.count_active_by_lead_type())
        return {
            "tables_present": tables_present,
            "rules_count": rules_count,
            "setup_complete": len(tables_present) == len(SCORING_TABLES)
            and rules_count["total"] > 0,
        }
