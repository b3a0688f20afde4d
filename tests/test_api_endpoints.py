from datetime import datetime, timezone
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from travloger.api.deps import (
    get_automation_dispatcher,
    get_lead_repo,
    get_score_calculation_service,
    get_scoring_rule_service,
    get_scoring_setup_service,
)
from travloger.core.exceptions import (
    ConfigurationError,
    LeadNotFoundError,
    ScoringRuleNotFoundError,
    ValidationError,
)
from travloger.main import app


def _override(dependency, value) -> None:
    async def _provide():
        return value

    app.dependency_overrides[dependency] = _provide


@pytest.fixture
def score_service() -> AsyncMock:
    service = AsyncMock()
    service.score_lead = AsyncMock(
        return_value={
            "total_score": 30,
            "priority": "Warm",
            "matched_rules": [
                {
                    "rule_name": "FIT - Pax 2-4 Travelers",
                    "score_added": 30,
                    "field_checked": "number_of_travelers",
                    "field_value": 3,
                }
            ],
            "rules_evaluated": 6,
            "lead_id": None,
            "calculated_at": datetime(2026, 1, 1, tzinfo=timezone.utc),
        }
    )
    _override(get_score_calculation_service, service)
    _override(get_lead_repo, AsyncMock())
    return service


class TestHealthAndCORS:
    @pytest.mark.asyncio
    async def test_health_returns_ok(self, async_client):
        response = await async_client.get("/api/v1/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_cors_headers_on_get(self, async_client):
        response = await async_client.get(
            "/api/v1/health", headers={"Origin": "http://localhost:3000"}
        )
        assert (
            response.headers.get("access-control-allow-origin")
            == "http://localhost:3000"
        )


class TestCalculateScoreEndpoint:
    @pytest.mark.asyncio
    async def test_dry_run(self, async_client, score_service):
        response = await async_client.post(
            "/api/v1/leads/calculate-score",
            json={"lead_data": {"number_of_travelers": 3}},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["total_score"] == 30
        assert body["priority"] == "Warm"
        assert body["matched_rules"][0]["score_added"] == 30
        kwargs = score_service.score_lead.await_args.kwargs
        assert kwargs["lead_data"] == {"number_of_travelers": 3}
        assert kwargs["trigger_type"] == "On Lead Create"

    @pytest.mark.asyncio
    async def test_missing_input_is_400(self, async_client, score_service):
        score_service.score_lead.side_effect = ValidationError(
            "Either lead_id or lead_data is required"
        )

        response = await async_client.post("/api/v1/leads/calculate-score", json={})

        assert response.status_code == 400
        assert response.json() == {
            "detail": "Either lead_id or lead_data is required",
            "type": "validation_error",
        }

    @pytest.mark.asyncio
    async def test_unknown_lead_is_404(self, async_client, score_service):
        score_service.score_lead.side_effect = LeadNotFoundError("Lead 5 not found")

        response = await async_client.post(
            "/api/v1/leads/calculate-score", json={"lead_id": 5}
        )

        assert response.status_code == 404
        assert response.json()["type"] == "lead_not_found"

    @pytest.mark.asyncio
    async def test_database_down_is_500(self, async_client, score_service):
        score_service.score_lead.side_effect = ConfigurationError()

        response = await async_client.post(
            "/api/v1/leads/calculate-score", json={"lead_id": 5}
        )

        assert response.status_code == 500
        assert response.json() == {
            "detail": "Database not configured",
            "type": "configuration_error",
        }

    @pytest.mark.asyncio
    async def test_bad_trigger_is_422(self, async_client, score_service):
        response = await async_client.post(
            "/api/v1/leads/calculate-score",
            json={"lead_id": 5, "trigger_type": "On Lead Delete"},
        )

        assert response.status_code == 422
        body = response.json()
        assert body["type"] == "request_validation_error"
        assert "errors" in body
        score_service.score_lead.assert_not_awaited()


class TestAutomationEndpoint:
    @pytest.mark.asyncio
    async def test_trigger_actions(self, async_client):
        dispatcher = AsyncMock()
        dispatcher.dispatch = AsyncMock(
            return_value={
                "lead_id": 4,
                "lead_name": "Dev",
                "priority": "Cold",
                "score": 5,
                "actions_triggered": ["move_to_low_priority"],
                "automation_log": [
                    {
                        "action": "Move to Low Priority View",
                        "status": "completed",
                        "message": "Lead moved to low priority view",
                        "priority": "low",
                        "details": {},
                    }
                ],
                "message": "1 automation actions triggered for Cold lead",
            }
        )
        _override(get_automation_dispatcher, dispatcher)

        response = await async_client.post(
            "/api/v1/lead-scoring/automation-actions",
            json={"lead_id": 4, "priority": "Cold", "score": 5},
        )

        assert response.status_code == 200
        assert response.json()["actions_triggered"] == ["move_to_low_priority"]
        dispatcher.dispatch.assert_awaited_once_with(lead_id=4, priority="Cold", score=5)

    @pytest.mark.asyncio
    async def test_read_log(self, async_client):
        dispatcher = AsyncMock()
        dispatcher.get_log = AsyncMock(
            return_value=[
                SimpleNamespace(
                    id=1,
                    lead_id=4,
                    action_type="Add to Monthly Broadcast",
                    status="queued",
                    message="Added to monthly broadcast list",
                    priority="low",
                    metadata_={"action": "Add to Monthly Broadcast"},
                    created_at=datetime(2026, 1, 1, tzinfo=timezone.utc),
                )
            ]
        )
        _override(get_automation_dispatcher, dispatcher)

        response = await async_client.get(
            "/api/v1/lead-scoring/automation-actions", params={"lead_id": 4}
        )

        assert response.status_code == 200
        entry = response.json()["automation_log"][0]
        assert entry["action_type"] == "Add to Monthly Broadcast"
        assert entry["metadata"] == {"action": "Add to Monthly Broadcast"}


class TestScoringRulesEndpoints:
    @pytest.fixture
    def rule_service(self, rule_factory) -> AsyncMock:
        service = AsyncMock()
        service.list_rules = AsyncMock(return_value=[rule_factory(id=1)])
        service.get_rule = AsyncMock(return_value=rule_factory(id=2))
        service.create_rule = AsyncMock(return_value=rule_factory(id=3))
        service.update_rule = AsyncMock(return_value=rule_factory(id=2, score_value=99))
        service.deactivate_rule = AsyncMock(return_value=rule_factory(id=2))
        _override(get_scoring_rule_service, service)
        return service

    @pytest.mark.asyncio
    async def test_list_filters(self, async_client, rule_service):
        response = await async_client.get(
            "/api/v1/lead-scoring", params={"lead_type": "Group"}
        )

        assert response.status_code == 200
        assert response.json()["total"] == 1
        rule_service.list_rules.assert_awaited_once_with(
            lead_type="Group", status="Active"
        )

    @pytest.mark.asyncio
    async def test_create_returns_201(self, async_client, rule_service):
        response = await async_client.post(
            "/api/v1/lead-scoring",
            json={
                "scoring_criteria_name": "Group - Goa in December",
                "field_checked": "destination",
                "condition_type": "contains",
                "condition_value": "goa",
                "score_value": 5,
                "lead_type": "Group",
            },
        )

        assert response.status_code == 201
        assert response.json()["scoring_rule"]["id"] == 3

    @pytest.mark.asyncio
    async def test_update(self, async_client, rule_service):
        response = await async_client.put(
            "/api/v1/lead-scoring/2", json={"score_value": 99}
        )

        assert response.status_code == 200
        assert response.json()["scoring_rule"]["score_value"] == 99

    @pytest.mark.asyncio
    async def test_delete_missing_rule_is_404(self, async_client, rule_service):
        rule_service.deactivate_rule.side_effect = ScoringRuleNotFoundError(
            "Scoring rule 77 not found"
        )

        response = await async_client.delete("/api/v1/lead-scoring/77")

        assert response.status_code == 404
        assert response.json()["type"] == "scoring_rule_not_found"

    @pytest.mark.asyncio
    async def test_delete(self, async_client, rule_service):
        response = await async_client.delete("/api/v1/lead-scoring/2")

        assert response.status_code == 200
        assert response.json() == {"success": True}


class TestSetupEndpoints:
    @pytest.mark.asyncio
    async def test_setup_status(self, async_client):
        service = AsyncMock()
        service.get_status = AsyncMock(
            return_value={
                "tables_present": ["lead_scoring_master", "leads", "automation_log"],
                "rules_count": {"total": 16, "group": 6, "fit": 6, "corporate": 4},
                "setup_complete": True,
            }
        )
        _override(get_scoring_setup_service, service)

        response = await async_client.get("/api/v1/lead-scoring-setup")

        assert response.status_code == 200
        assert response.json()["setup_complete"] is True

    @pytest.mark.asyncio
    async def test_run_setup(self, async_client):
        service = AsyncMock()
        service.run_setup = AsyncMock(
            return_value={
                "message": "Lead scoring setup completed successfully",
                "rules_added": [],
                "timestamp": datetime(2026, 1, 1, tzinfo=timezone.utc),
            }
        )
        _override(get_scoring_setup_service, service)

        response = await async_client.post("/api/v1/lead-scoring-setup")

        assert response.status_code == 200
        assert response.json()["rules_added"] == []
