from travloger.models.base import Base
from travloger.models.lead import Lead
from travloger.models.scoring_rule import LeadScoringRule
from travloger.models.automation_log import AutomationLog

__all__ = [
    "Base",
    "Lead",
    "LeadScoringRule",
    "AutomationLog",
]
