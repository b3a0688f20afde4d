from typing import Optional

from fastapi import APIRouter, Depends, Query

from travloger.schemas.automation import (
    AutomationLogEntryOut,
    AutomationLogResponse,
    AutomationRequest,
    AutomationResponse,
)
from travloger.services.automation import AutomationDispatcher
from travloger.api.deps import get_automation_dispatcher

router = APIRouter(prefix="/lead-scoring/automation-actions", tags=["Automation"])


@router.post("", response_model=AutomationResponse)
async def trigger_automation_actions(
    request_body: AutomationRequest,
    dispatcher: AutomationDispatcher = Depends(get_automation_dispatcher),
) -> AutomationResponse:
    """Queue the follow-up actions for a lead's priority tier."""
    result = await dispatcher.dispatch(
        lead_id=request_body.lead_id,
        priority=request_body.priority,
        score=request_body.score,
    )
    return AutomationResponse(**result)


@router.get("", response_model=AutomationLogResponse)
async def get_automation_log(
    lead_id: Optional[int] = Query(None, description="Lead whose log to return"),
    dispatcher: AutomationDispatcher = Depends(get_automation_dispatcher),
) -> AutomationLogResponse:
    """Most recent automation log entries for a lead, newest first."""
    entries = await dispatcher.get_log(lead_id)
    return AutomationLogResponse(
        lead_id=lead_id,
        automation_log=[AutomationLogEntryOut.model_validate(e) for e in entries],
    )
