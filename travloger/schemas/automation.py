from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from travloger.schemas.common import SuccessResponse


class AutomationRequest(BaseModel):
    """Request body for POST /api/v1/lead-scoring/automation-actions.

    ``priority`` is a free string: unknown tiers dispatch nothing.
    """

    lead_id: Optional[int] = None
    priority: Optional[str] = None
    score: Optional[int] = None


class AutomationAction(BaseModel):
    """One dispatched action as reported back to the caller."""

    action: str
    status: str
    message: str
    priority: str = "medium"
    details: Dict[str, Any] = Field(default_factory=dict)


class AutomationResponse(SuccessResponse):
    lead_id: int
    lead_name: Optional[str] = None
    priority: str
    score: Optional[int] = None
    actions_triggered: List[str]
    automation_log: List[AutomationAction]
    message: str


class AutomationLogEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    lead_id: int
    action_type: str
    status: str
    message: Optional[str] = None
    priority: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = Field(
        None, validation_alias=AliasChoices("metadata_", "metadata")
    )
    created_at: Optional[datetime] = None


class AutomationLogResponse(BaseModel):
    lead_id: int
    automation_log: List[AutomationLogEntryOut]
