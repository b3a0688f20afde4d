"""Scoring-rule Pydantic schemas (create, update, response)."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from travloger.schemas.common import (
    AutomationTrigger,
    ConditionType,
    LeadType,
    RuleStatus,
    SuccessResponse,
)


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class ScoringRuleCreate(BaseModel):
    """Request body for POST /api/v1/lead-scoring."""

    scoring_criteria_name: str = Field(..., min_length=1, max_length=255)
    field_checked: str = Field(..., min_length=1, max_length=100)
    condition_type: ConditionType
    condition_value: str = Field("", max_length=255)
    score_value: int
    lead_type: Optional[LeadType] = None
    automation_trigger: AutomationTrigger = AutomationTrigger.ON_CREATE
    priority_range_hot: int = 40
    priority_range_warm_min: int = 25
    priority_range_warm_max: int = 39
    priority_range_cold_max: int = 24
    status: RuleStatus = RuleStatus.ACTIVE
    notes: str = ""
    created_by: str = "System"

    @model_validator(mode="after")
    def validate_thresholds(self) -> Self:
        """Warm band must sit below the hot threshold."""
        if self.priority_range_warm_min > self.priority_range_hot:
            raise ValueError(
                f"priority_range_warm_min ({self.priority_range_warm_min}) must "
                f"not exceed priority_range_hot ({self.priority_range_hot})"
            )
        return self


class ScoringRuleUpdate(BaseModel):
    """Request body for PUT /api/v1/lead-scoring/{rule_id}.

    Every field is optional; only the ones sent are written.
    """

    scoring_criteria_name: Optional[str] = Field(None, min_length=1, max_length=255)
    field_checked: Optional[str] = Field(None, min_length=1, max_length=100)
    condition_type: Optional[ConditionType] = None
    condition_value: Optional[str] = Field(None, max_length=255)
    score_value: Optional[int] = None
    lead_type: Optional[LeadType] = None
    automation_trigger: Optional[AutomationTrigger] = None
    priority_range_hot: Optional[int] = None
    priority_range_warm_min: Optional[int] = None
    priority_range_warm_max: Optional[int] = None
    priority_range_cold_max: Optional[int] = None
    status: Optional[RuleStatus] = None
    notes: Optional[str] = None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class ScoringRuleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    scoring_criteria_name: str
    field_checked: str
    condition_type: str
    condition_value: str = ""
    score_value: int = 0
    lead_type: Optional[str] = None
    automation_trigger: str = AutomationTrigger.ON_CREATE.value
    priority_range_hot: int = 40
    priority_range_warm_min: int = 25
    priority_range_warm_max: int = 39
    priority_range_cold_max: int = 24
    status: str = RuleStatus.ACTIVE.value
    notes: Optional[str] = None
    created_by: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ScoringRuleListResponse(BaseModel):
    scoring_rules: List[ScoringRuleOut]
    total: int


class ScoringRuleResponse(SuccessResponse):
    """Returned after a rule is created, updated or deactivated."""

    scoring_rule: ScoringRuleOut
    message: str
