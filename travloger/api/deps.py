"""API-layer dependency functions.

Re-exports all dependency factories from ``travloger.dependencies`` so
that endpoint modules only need to import from ``travloger.api.deps``.
"""

from travloger.dependencies import (
    # Repository factories
    get_lead_repo,
    get_scoring_rule_repo,
    get_automation_log_repo,
    get_schema_repo,
    # Service factories
    get_scoring_engine,
    get_score_calculation_service,
    get_automation_dispatcher,
    get_scoring_rule_service,
    get_scoring_setup_service,
    # Redis
    get_redis_client,
    get_cache_service,
)

__all__ = [
    "get_lead_repo",
    "get_scoring_rule_repo",
    "get_automation_log_repo",
    "get_schema_repo",
    "get_scoring_engine",
    "get_score_calculation_service",
    "get_automation_dispatcher",
    "get_scoring_rule_service",
    "get_scoring_setup_service",
    "get_redis_client",
    "get_cache_service",
]
