"""Repository layer: all database access goes through here.

Repositories encapsulate SQLAlchemy queries so that the service layer
only contains business logic.
"""

from travloger.repositories.lead_repository import LeadRepository
from travloger.repositories.scoring_rule_repository import ScoringRuleRepository
from travloger.repositories.automation_log_repository import AutomationLogRepository
from travloger.repositories.schema_repository import SchemaRepository

__all__ = [
    "LeadRepository",
    "ScoringRuleRepository",
    "AutomationLogRepository",
    "SchemaRepository",
]
