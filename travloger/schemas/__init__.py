"""Pydantic schemas package: re-exports for convenience."""

# Common enums
from travloger.schemas.common import (
    LeadType as LeadType,
    AutomationTrigger as AutomationTrigger,
    LeadPriority as LeadPriority,
    RuleStatus as RuleStatus,
    ConditionType as ConditionType,
    SuccessResponse as SuccessResponse,
)

# Scoring rule schemas
from travloger.schemas.scoring_rule import (
    ScoringRuleCreate as ScoringRuleCreate,
    ScoringRuleUpdate as ScoringRuleUpdate,
    ScoringRuleOut as ScoringRuleOut,
    ScoringRuleListResponse as ScoringRuleListResponse,
    ScoringRuleResponse as ScoringRuleResponse,
)

# Score calculation schemas
from travloger.schemas.scoring import (
    PriorityThresholds as PriorityThresholds,
    MatchedRule as MatchedRule,
    ScoreResult as ScoreResult,
    ScoreCalculationRequest as ScoreCalculationRequest,
    ScoreCalculationResponse as ScoreCalculationResponse,
    ScoreSummaryResponse as ScoreSummaryResponse,
)

# Automation schemas
from travloger.schemas.automation import (
    AutomationRequest as AutomationRequest,
    AutomationResponse as AutomationResponse,
    AutomationLogEntryOut as AutomationLogEntryOut,
    AutomationLogResponse as AutomationLogResponse,
)

# Setup schemas
from travloger.schemas.setup import (
    SetupResponse as SetupResponse,
    SetupStatusResponse as SetupStatusResponse,
)
