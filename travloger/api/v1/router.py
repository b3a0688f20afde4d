from fastapi import APIRouter

from travloger.api.v1.endpoints import scoring, automation, scoring_rules, setup, health

router = APIRouter(prefix="/api/v1")

router.include_router(scoring.router)
router.include_router(automation.router)
router.include_router(scoring_rules.router)
router.include_router(setup.router)
router.include_router(health.router)
