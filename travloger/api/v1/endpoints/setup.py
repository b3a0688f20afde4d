from fastapi import APIRouter, Depends

from travloger.schemas.setup import SetupResponse, SetupStatusResponse
from travloger.services.scoring_setup_service import ScoringSetupService
from travloger.api.deps import get_scoring_setup_service

router = APIRouter(prefix="/lead-scoring-setup", tags=["Scoring Setup"])


@router.post("", response_model=SetupResponse)
async def run_scoring_setup(
    service: ScoringSetupService = Depends(get_scoring_setup_service),
) -> SetupResponse:
    """Insert the default Group, FIT and Corporate rules that are missing."""
    result = await service.run_setup()
    return SetupResponse(**result)


@router.get("", response_model=SetupStatusResponse)
async def scoring_setup_status(
    service: ScoringSetupService = Depends(get_scoring_setup_service),
) -> SetupStatusResponse:
    status = await service.get_status()
    return SetupStatusResponse(**status)
