from typing import Optional

from fastapi import APIRouter, Depends, Query

from travloger.schemas.common import LeadType, RuleStatus, SuccessResponse
from travloger.schemas.scoring_rule import (
    ScoringRuleCreate,
    ScoringRuleListResponse,
    ScoringRuleOut,
    ScoringRuleResponse,
    ScoringRuleUpdate,
)
from travloger.services.scoring_rule_service import ScoringRuleService
from travloger.api.deps import get_scoring_rule_service

router = APIRouter(prefix="/lead-scoring", tags=["Scoring Rules"])


@router.get("", response_model=ScoringRuleListResponse)
async def list_scoring_rules(
    lead_type: Optional[LeadType] = Query(None),
    status: RuleStatus = Query(RuleStatus.ACTIVE),
    service: ScoringRuleService = Depends(get_scoring_rule_service),
) -> ScoringRuleListResponse:
    rules = await service.list_rules(
        lead_type=lead_type.value if lead_type else None,
        status=status.value,
    )
    return ScoringRuleListResponse(
        scoring_rules=[ScoringRuleOut.model_validate(r) for r in rules],
        total=len(rules),
    )


@router.get("/{rule_id}", response_model=ScoringRuleOut)
async def get_scoring_rule(
    rule_id: int,
    service: ScoringRuleService = Depends(get_scoring_rule_service),
) -> ScoringRuleOut:
    rule = await service.get_rule(rule_id)
    return ScoringRuleOut.model_validate(rule)


@router.post("", response_model=ScoringRuleResponse, status_code=201)
async def create_scoring_rule(
    rule_data: ScoringRuleCreate,
    service: ScoringRuleService = Depends(get_scoring_rule_service),
) -> ScoringRuleResponse:
    rule = await service.create_rule(rule_data)
    return ScoringRuleResponse(
        scoring_rule=ScoringRuleOut.model_validate(rule),
        message="Scoring rule created successfully",
    )


@router.put("/{rule_id}", response_model=ScoringRuleResponse)
async def update_scoring_rule(
    rule_id: int,
    rule_data: ScoringRuleUpdate,
    service: ScoringRuleService = Depends(get_scoring_rule_service),
) -> ScoringRuleResponse:
    rule = await service.update_rule(rule_id, rule_data)
    return ScoringRuleResponse(
        scoring_rule=ScoringRuleOut.model_validate(rule),
        message="Scoring rule updated successfully",
    )


@router.delete("/{rule_id}", response_model=SuccessResponse)
async def delete_scoring_rule(
    rule_id: int,
    service: ScoringRuleService = Depends(get_scoring_rule_service),
) -> SuccessResponse:
    """Soft delete: the rule is set to ``Inactive`` and kept."""
    await service.deactivate_rule(rule_id)
    return SuccessResponse()
