import logging
from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from redis.asyncio import Redis
from redis.exceptions import RedisError

from travloger.core.config import settings
from travloger.core.database import get_db
from travloger.services.lead_scoring import LeadScoringEngine

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Redis client factory
# ---------------------------------------------------------------------------


async def open_redis_client() -> Optional[Redis]:
    """Connect to Redis once at startup; ``None`` disables caching."""
    client = Redis.from_url(settings.REDIS_URL, decode_responses=True)
    try:
        await client.ping()
    except (RedisError, OSError):
        logger.warning("Redis unavailable, score summary caching disabled")
        await client.aclose()
        return None
    return client


async def get_redis_client(request: Request) -> Optional[Redis]:
    """The Redis client opened at startup, or ``None`` when Redis is unreachable."""
    return getattr(request.app.state, "redis", None)


async def get_cache_service(
    redis_client: Optional[Redis] = Depends(get_redis_client),
):
    """Build a :class:`CacheService` backed by the shared Redis client."""
    from travloger.core.cache import CacheService

    return CacheService(redis_client=redis_client)


# ---------------------------------------------------------------------------
# Repository factory functions (one per repository, each gets the shared db)
# ---------------------------------------------------------------------------


async def get_lead_repo(
    db: AsyncSession = Depends(get_db),
):
    from travloger.repositories.lead_repository import LeadRepository

    return LeadRepository(db)


async def get_scoring_rule_repo(
    db: AsyncSession = Depends(get_db),
):
    from travloger.repositories.scoring_rule_repository import ScoringRuleRepository

    return ScoringRuleRepository(db)


async def get_automation_log_repo(
    db: AsyncSession = Depends(get_db),
):
    from travloger.repositories.automation_log_repository import (
        AutomationLogRepository,
    )

    return AutomationLogRepository(db)


async def get_schema_repo(
    db: AsyncSession = Depends(get_db),
):
    from travloger.repositories.schema_repository import SchemaRepository

    return SchemaRepository(db)


# ---------------------------------------------------------------------------
# Service factory functions
# ---------------------------------------------------------------------------


async def get_scoring_engine(
    scoring_rule_repo=Depends(get_scoring_rule_repo),
) -> LeadScoringEngine:
    return LeadScoringEngine(rule_store=scoring_rule_repo)


async def get_score_calculation_service(
    scoring_engine: LeadScoringEngine = Depends(get_scoring_engine),
    cache=Depends(get_cache_service),
):
    """Build a :class:`ScoreCalculationService` with injected dependencies."""
    from travloger.services.score_calculation_service import ScoreCalculationService

    return ScoreCalculationService(scoring_engine=scoring_engine, cache=cache)


async def get_automation_dispatcher(
    lead_repo=Depends(get_lead_repo),
    automation_log_repo=Depends(get_automation_log_repo),
):
    """Build an :class:`AutomationDispatcher` over the lead and audit stores."""
    from travloger.services.automation import AutomationDispatcher

    return AutomationDispatcher(lead_store=lead_repo, audit_log=automation_log_repo)


async def get_scoring_rule_service(
    scoring_rule_repo=Depends(get_scoring_rule_repo),
):
    from travloger.services.scoring_rule_service import ScoringRuleService

    return ScoringRuleService(rule_repo=scoring_rule_repo)


async def get_scoring_setup_service(
    scoring_rule_repo=Depends(get_scoring_rule_repo),
    schema_repo=Depends(get_schema_repo),
):
    from travloger.services.scoring_setup_service import ScoringSetupService

    return ScoringSetupService(rule_repo=scoring_rule_repo, schema_repo=schema_repo)
