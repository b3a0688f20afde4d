from typing import FrozenSet, Tuple

from travloger.schemas.common import (
    AutomationTrigger,
    ConditionType,
    LeadPriority,
    LeadType,
    RuleStatus,
)

CONDITION_TYPES: FrozenSet[str] = frozenset(c.value for c in ConditionType)
LEAD_TYPES: FrozenSet[str] = frozenset(t.value for t in LeadType)
AUTOMATION_TRIGGERS: FrozenSet[str] = frozenset(t.value for t in AutomationTrigger)
LEAD_PRIORITIES: FrozenSet[str] = frozenset(p.value for p in LeadPriority)
RULE_STATUSES: FrozenSet[str] = frozenset(s.value for s in RuleStatus)

# Rules with this trigger run on both lead creation and update
TRIGGER_BOTH: str = AutomationTrigger.BOTH.value

# Destinations with an active group campaign (``matches_campaign``)
GROUP_CAMPAIGN_DESTINATIONS: Tuple[str, ...] = (
    "kashmir",
    "ladakh",
    "kerala",
    "rajasthan",
    "himachal",
    "goa",
)

# High-inquiry FIT destinations (``high_inquiry_fit``)
HIGH_INQUIRY_FIT_DESTINATIONS: Tuple[str, ...] = (
    "dubai",
    "bali",
    "maldives",
    "thailand",
    "singapore",
    "europe",
    "paris",
    "switzerland",
)

# Updatable columns on ``lead_scoring_master``
UPDATABLE_RULE_FIELDS: FrozenSet[str] = frozenset(
    {
        "scoring_criteria_name",
        "field_checked",
        "condition_type",
        "condition_value",
        "score_value",
        "lead_type",
        "automation_trigger",
        "priority_range_hot",
        "priority_range_warm_min",
        "priority_range_warm_max",
        "priority_range_cold_max",
        "status",
        "notes",
    }
)
