"""Score calculation schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from travloger.core.config import settings
from travloger.schemas.common import AutomationTrigger, LeadPriority


class PriorityThresholds(BaseModel):
    """Score bands used to classify a lead.

    Defaults: Hot at 40 and above, Warm from 25 to 39, Cold at 24 and
    below.  Only ``hot`` and ``warm_min`` take part in classification;
    the two upper bounds are informational.
    """

    hot: int = 40
    warm_min: int = 25
    warm_max: int = 39
    cold_max: int = 24

    @classmethod
    def from_rule(cls, rule: Any) -> "PriorityThresholds":
        """Read thresholds off a rule row, falling back to defaults for NULLs."""
        defaults = cls.from_settings()
        return cls(
            hot=rule.priority_range_hot or defaults.hot,
            warm_min=rule.priority_range_warm_min or defaults.warm_min,
            warm_max=rule.priority_range_warm_max or defaults.warm_max,
            cold_max=rule.priority_range_cold_max or defaults.cold_max,
        )

    @classmethod
    def from_settings(cls) -> "PriorityThresholds":
        return cls(
            hot=settings.DEFAULT_HOT_THRESHOLD,
            warm_min=settings.DEFAULT_WARM_MIN,
            warm_max=settings.DEFAULT_HOT_THRESHOLD - 1,
            cold_max=settings.DEFAULT_WARM_MIN - 1,
        )

    def classify(self, total_score: int) -> LeadPriority:
        if total_score >= self.hot:
            return LeadPriority.HOT
        if total_score >= self.warm_min:
            return LeadPriority.WARM
        return LeadPriority.COLD


class MatchedRule(BaseModel):
    rule_name: str
    score_added: int
    field_checked: str
    field_value: Any = None


class ScoreResult(BaseModel):
    """Outcome of one scoring pass over a lead."""

    total_score: int
    priority: LeadPriority
    matched_rules: List[MatchedRule] = Field(default_factory=list)
    rules_evaluated: int


class ScoreCalculationRequest(BaseModel):
    """Request body for POST /api/v1/leads/calculate-score.

    Either ``lead_id`` (score and persist) or ``lead_data`` (dry run) is
    required; that check lives in the service so it reports HTTP 400.
    """

    lead_id: Optional[int] = None
    lead_data: Optional[Dict[str, Any]] = None
    trigger_type: AutomationTrigger = AutomationTrigger.ON_CREATE


class ScoreCalculationResponse(ScoreResult):
    success: bool = True
    lead_id: Optional[int] = None
    calculated_at: datetime


# ---------------------------------------------------------------------------
# Score summary
# ---------------------------------------------------------------------------


class PriorityDistribution(BaseModel):
    priority: Optional[str] = None
    count: int
    avg_score: float
    max_score: int
    min_score: int


class LeadTypeBreakdown(BaseModel):
    lead_type: Optional[str] = None
    priority: Optional[str] = None
    count: int


class TopLead(BaseModel):
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    lead_score: Optional[int] = None
    lead_priority: Optional[str] = None
    lead_type: Optional[str] = None


class ScoreSummaryResponse(BaseModel):
    score_distribution: List[PriorityDistribution]
    type_breakdown: List[LeadTypeBreakdown]
    top_leads: List[TopLead]
