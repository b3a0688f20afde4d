from datetime import datetime, timezone
from unittest.mock import patch

import pytest

from travloger.schemas.common import LeadPriority
from travloger.schemas.scoring import PriorityThresholds
from travloger.services.lead_scoring import LeadScoringEngine
from tests.factories import build_rule

NOW = datetime(2026, 1, 1, tzinfo=timezone.utc)


def _budget_and_travelers_rules():
    return [
        build_rule(
            id=1,
            scoring_criteria_name="Budget at least 1000",
            field_checked="budget",
            condition_type="greater_than_or_equal",
            condition_value="1000",
            score_value=10,
        ),
        build_rule(
            id=2,
            scoring_criteria_name="More than 4 travelers",
            field_checked="travelers",
            condition_type="greater_than",
            condition_value="4",
            score_value=15,
        ),
    ]


@pytest.fixture
def engine(rule_store) -> LeadScoringEngine:
    return LeadScoringEngine(rule_store=rule_store)


class TestCalculateScore:
    """Verify score sums and the matched-rule breakdown."""

    @pytest.mark.asyncio
    async def test_sums_matching_rules(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = _budget_and_travelers_rules()

        result = await engine.calculate_score({"budget": 1200, "travelers": 6}, now=NOW)

        assert result.total_score == 25
        assert result.priority == LeadPriority.WARM
        assert result.rules_evaluated == 2
        assert [m.rule_name for m in result.matched_rules] == [
            "Budget at least 1000",
            "More than 4 travelers",
        ]
        assert result.matched_rules[0].field_value == 1200

    @pytest.mark.asyncio
    async def test_only_matching_rules_count(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = _budget_and_travelers_rules()

        result = await engine.calculate_score({"budget": 800, "travelers": 6}, now=NOW)

        assert result.total_score == 15
        assert len(result.matched_rules) == 1
        assert result.matched_rules[0].field_checked == "travelers"

    @pytest.mark.asyncio
    async def test_missing_fields_score_zero(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = _budget_and_travelers_rules()

        result = await engine.calculate_score({}, now=NOW)

        assert result.total_score == 0
        assert result.priority == LeadPriority.COLD
        assert result.matched_rules == []

    @pytest.mark.asyncio
    async def test_no_rules_gives_cold_zero(self, engine):
        result = await engine.calculate_score({"budget": 5000}, now=NOW)

        assert result.total_score == 0
        assert result.priority == LeadPriority.COLD
        assert result.rules_evaluated == 0

    @pytest.mark.asyncio
    async def test_scoring_is_repeatable(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = _budget_and_travelers_rules()
        lead = {"budget": 1200, "travelers": 6}

        first = await engine.calculate_score(lead, now=NOW)
        second = await engine.calculate_score(lead, now=NOW)

        assert first == second


class TestRuleSelection:
    @pytest.mark.asyncio
    async def test_lead_type_and_trigger_passed_to_store(self, engine, rule_store):
        await engine.calculate_score({"lead_type": "Group"}, "On Lead Update", now=NOW)

        rule_store.get_applicable_rules.assert_awaited_once_with(
            "Group", "On Lead Update"
        )

    @pytest.mark.asyncio
    async def test_missing_lead_type_defaults_to_fit(self, engine, rule_store):
        await engine.calculate_score({"budget": 100}, now=NOW)

        rule_store.get_applicable_rules.assert_awaited_once_with(
            "FIT", "On Lead Create"
        )


class TestPriorityClassification:
    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "score,expected",
        [
            (45, LeadPriority.HOT),
            (40, LeadPriority.HOT),
            (30, LeadPriority.WARM),
            (25, LeadPriority.WARM),
            (10, LeadPriority.COLD),
        ],
    )
    async def test_default_bands(self, engine, rule_store, score, expected):
        rule_store.get_applicable_rules.return_value = [
            build_rule(score_value=score, condition_value="0")
        ]

        result = await engine.calculate_score({"number_of_travelers": 2}, now=NOW)

        assert result.total_score == score
        assert result.priority == expected

    @pytest.mark.asyncio
    async def test_thresholds_come_from_first_rule(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = [
            build_rule(id=1, score_value=20, priority_range_hot=20),
            build_rule(id=2, score_value=5, priority_range_hot=90),
        ]

        result = await engine.calculate_score({"number_of_travelers": 2}, now=NOW)

        assert result.total_score == 25
        assert result.priority == LeadPriority.HOT

    def test_null_thresholds_fall_back_to_defaults(self):
        rule = build_rule(priority_range_hot=None, priority_range_warm_min=None)

        thresholds = PriorityThresholds.from_rule(rule)

        assert thresholds.hot == 40
        assert thresholds.warm_min == 25


class TestFaultIsolation:
    @pytest.mark.asyncio
    async def test_failing_rule_is_skipped(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = _budget_and_travelers_rules()

        with patch(
            "travloger.services.lead_scoring.evaluate_condition",
            side_effect=[RuntimeError("boom"), True],
        ):
            result = await engine.calculate_score(
                {"budget": 1200, "travelers": 6}, now=NOW
            )

        assert result.total_score == 15
        assert result.rules_evaluated == 2
        assert [m.rule_name for m in result.matched_rules] == ["More than 4 travelers"]

    @pytest.mark.asyncio
    async def test_bad_rule_data_does_not_break_scoring(self, engine, rule_store):
        rule_store.get_applicable_rules.return_value = [
            build_rule(id=1, condition_type="regex_match", condition_value="(["),
            build_rule(id=2, score_value=7, condition_value="0"),
        ]

        result = await engine.calculate_score({"number_of_travelers": 3}, now=NOW)

        assert result.total_score == 7
