import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from travloger.core.config import settings
from travloger.repositories.interfaces import RuleStore
from travloger.schemas.common import AutomationTrigger
from travloger.schemas.scoring import MatchedRule, PriorityThresholds, ScoreResult
from travloger.services.condition_evaluator import evaluate_condition

logger = logging.getLogger(__name__)


class LeadScoringEngine:
    """Score a lead against the rules stored in ``lead_scoring_master``.

    A lead is a plain ``{field: value}`` mapping.  The engine loads the
    Active rules that apply to the lead's type and the trigger event,
    evaluates each rule's condition against the named field and sums the
    points of every match.  The total is then classified Hot / Warm /
    Cold against the thresholds of the first rule in the result set.

    The result depends only on the lead fields, the rule set, the
    trigger and the evaluation time, so scoring the same lead twice
    gives the same result.
    """

    def __init__(self, rule_store: RuleStore) -> None:
        self._rule_store = rule_store

    async def calculate_score(
        self,
        lead: Dict[str, Any],
        trigger_type: str = AutomationTrigger.ON_CREATE.value,
        now: Optional[datetime] = None,
    ) -> ScoreResult:
        lead_type = lead.get("lead_type") or settings.DEFAULT_LEAD_TYPE
        rules = await self._rule_store.get_applicable_rules(lead_type, trigger_type)
        if now is None:
            now = datetime.now(timezone.utc)

        total_score = 0
        matched_rules: List[MatchedRule] = []

        for rule in rules:
            field_value = lead.get(rule.field_checked)
            try:
                matches = evaluate_condition(
                    field_value,
                    rule.condition_type,
                    rule.condition_value or "",
                    now=now,
                )
            except Exception:
                logger.warning(
                    "Scoring rule %r failed to evaluate; skipped",
                    rule.scoring_criteria_name,
                    exc_info=True,
                )
                continue

            if matches:
                score_added = int(rule.score_value or 0)
                total_score += score_added
                matched_rules.append(
                    MatchedRule(
                        rule_name=rule.scoring_criteria_name,
                        score_added=score_added,
                        field_checked=rule.field_checked,
                        field_value=field_value,
                    )
                )

        thresholds = self._resolve_thresholds(rules)
        return ScoreResult(
            total_score=total_score,
            priority=thresholds.classify(total_score),
            matched_rules=matched_rules,
            rules_evaluated=len(rules),
        )

    @staticmethod
    def _resolve_thresholds(rules: List[Any]) -> PriorityThresholds:
        """Thresholds come from the first (highest scoring) rule row.

        There is no per-lead-type threshold table yet, so the bands stored
        on whichever rule sorts first are used for the whole rule set.
        """
        if not rules:
            return PriorityThresholds.from_settings()
        return PriorityThresholds.from_rule(rules[0])
