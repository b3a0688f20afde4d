from enum import Enum
from pydantic import BaseModel


class LeadType(str, Enum):
    GROUP = "Group"
    FIT = "FIT"
    CORPORATE = "Corporate"


class AutomationTrigger(str, Enum):
    ON_CREATE = "On Lead Create"
    ON_UPDATE = "On Lead Update"
    BOTH = "Both"


class LeadPriority(str, Enum):
    HOT = "Hot"
    WARM = "Warm"
    COLD = "Cold"


class RuleStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class ConditionType(str, Enum):
    equals = "equals"
    not_equals = "not_equals"
    greater_than = "greater_than"
    greater_than_or_equal = "greater_than_or_equal"
    less_than = "less_than"
    less_than_or_equal = "less_than_or_equal"
    between = "between"
    contains = "contains"
    not_contains = "not_contains"
    starts_with = "starts_with"
    ends_with = "ends_with"
    not_empty = "not_empty"
    is_empty = "is_empty"
    contains_comma = "contains_comma"
    within_days = "within_days"
    regex_match = "regex_match"
    matches_campaign = "matches_campaign"
    high_inquiry_fit = "high_inquiry_fit"


class SuccessResponse(BaseModel):
    """Generic success response base."""

    success: bool = True
