import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from travloger.core.cache import CacheService
from travloger.core.config import settings
from travloger.core.exceptions import LeadNotFoundError, ValidationError
from travloger.repositories.interfaces import LeadStore
from travloger.repositories.lead_repository import LeadRepository
from travloger.schemas.common import AutomationTrigger
from travloger.services.lead_scoring import LeadScoringEngine

logger = logging.getLogger(__name__)

SCORE_SUMMARY_CACHE_KEY = "lead_scoring:summary"


class ScoreCalculationService:
    """Orchestrates score calculation for stored leads and ad-hoc lead data.

    Scoring a stored lead writes ``lead_score``, ``lead_priority`` and
    ``last_score_calculated`` back onto it.  Scoring raw ``lead_data``
    is a preview and never touches storage.
    """

    def __init__(
        self,
        scoring_engine: LeadScoringEngine,
        cache: Optional[CacheService] = None,
    ) -> None:
        self._scoring_engine = scoring_engine
        self._cache = cache or CacheService()

    async def score_lead(
        self,
        lead_store: LeadStore,
        lead_id: Optional[int] = None,
        lead_data: Optional[Dict[str, Any]] = None,
        trigger_type: str = AutomationTrigger.ON_CREATE.value,
    ) -> Dict[str, Any]:
        if lead_id is not None:
            lead = await lead_store.get_fields(lead_id)
            if lead is None:
                raise LeadNotFoundError(f"Lead {lead_id} not found")
        elif lead_data is not None:
            lead = lead_data
        else:
            raise ValidationError("Either lead_id or lead_data is required")

        calculated_at = datetime.now(timezone.utc)
        result = await self._scoring_engine.calculate_score(
            lead, trigger_type, now=calculated_at
        )

        if lead_id is not None:
            await lead_store.update_score(
                lead_id,
                result.total_score,
                result.priority.value,
                calculated_at,
            )
            await lead_store.commit()
            await self._cache.invalidate(SCORE_SUMMARY_CACHE_KEY)
            logger.info(
                "Lead %s scored %d (%s)",
                lead_id,
                result.total_score,
                result.priority.value,
            )

        return {
            **result.model_dump(),
            "lead_id": lead_id,
            "calculated_at": calculated_at,
        }

    async def get_score_summary(self, lead_repo: LeadRepository) -> Dict[str, Any]:
        """Score distribution, lead-type breakdown and top 10 scored leads."""
        cached = await self._cache.get_json(SCORE_SUMMARY_CACHE_KEY)
        if cached is not None:
            return cached

        distribution = await lead_repo.get_score_distribution()
        summary = {
            "score_distribution": [
                {
                    "priority": row["priority"],
                    "count": int(row["count"]),
                    "avg_score": round(float(row["avg_score"] or 0), 2),
                    "max_score": int(row["max_score"] or 0),
                    "min_score": int(row["min_score"] or 0),
                }
                for row in distribution
            ],
            "type_breakdown": [
                {
                    "lead_type": row["lead_type"],
                    "priority": row["priority"],
                    "count": int(row["count"]),
                }
                for row in await lead_repo.get_type_breakdown()
            ],
            "top_leads": await lead_repo.get_top_scored(limit=10),
        }
        await self._cache.set_json(
            SCORE_SUMMARY_CACHE_KEY, summary, ttl=settings.SCORE_SUMMARY_CACHE_TTL
        )
        return summary
