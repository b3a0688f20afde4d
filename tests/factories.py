from types import SimpleNamespace


def build_rule(**overrides) -> SimpleNamespace:
    """A rule row with the column defaults of ``lead_scoring_master``."""
    values = {
        "id": 1,
        "scoring_criteria_name": "Test rule",
        "field_checked": "number_of_travelers",
        "condition_type": "greater_than",
        "condition_value": "0",
        "score_value": 10,
        "lead_type": "FIT",
        "automation_trigger": "On Lead Create",
        "priority_range_hot": 40,
        "priority_range_warm_min": 25,
        "priority_range_warm_max": 39,
        "priority_range_cold_max": 24,
        "status": "Active",
        "notes": "",
        "created_by": "System",
        "created_at": None,
        "updated_at": None,
    }
    values.update(overrides)
    return SimpleNamespace(**values)
