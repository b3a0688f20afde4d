from fastapi import APIRouter, Depends, Request

from travloger.core.config import settings
from travloger.core.rate_limit import limiter
from travloger.repositories.lead_repository import LeadRepository
from travloger.schemas.scoring import (
    ScoreCalculationRequest,
    ScoreCalculationResponse,
    ScoreSummaryResponse,
)
from travloger.services.score_calculation_service import ScoreCalculationService
from travloger.api.deps import get_lead_repo, get_score_calculation_service

router = APIRouter(prefix="/leads", tags=["Lead Scoring"])


@router.post("/calculate-score", response_model=ScoreCalculationResponse)
@limiter.limit(settings.SCORING_RATE_LIMIT)
async def calculate_score(
    request: Request,
    request_body: ScoreCalculationRequest,
    service: ScoreCalculationService = Depends(get_score_calculation_service),
    lead_repo: LeadRepository = Depends(get_lead_repo),
) -> ScoreCalculationResponse:
    """Score a stored lead (``lead_id``) or preview a score for ``lead_data``.

    Only the ``lead_id`` form writes the score back onto the lead.
    """
    result = await service.score_lead(
        lead_store=lead_repo,
        lead_id=request_body.lead_id,
        lead_data=request_body.lead_data,
        trigger_type=request_body.trigger_type.value,
    )
    return ScoreCalculationResponse(**result)


@router.get("/calculate-score", response_model=ScoreSummaryResponse)
async def score_summary(
    service: ScoreCalculationService = Depends(get_score_calculation_service),
    lead_repo: LeadRepository = Depends(get_lead_repo),
) -> ScoreSummaryResponse:
    """Score distribution by priority, lead-type breakdown and top leads."""
    summary = await service.get_score_summary(lead_repo)
    return ScoreSummaryResponse(**summary)
