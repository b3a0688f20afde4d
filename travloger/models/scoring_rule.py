from sqlalchemy import Column, String, Integer, Text, DateTime, Index, CheckConstraint
from sqlalchemy.sql import func, text

from travloger.models.base import Base


class LeadScoringRule(Base):
    """Database-driven scoring rule.

    Each rule checks one lead field with a ``condition_type`` /
    ``condition_value`` pair and adds ``score_value`` points on a match.
    ``lead_type`` NULL (or empty) applies the rule to every lead type.
    Rules are soft-deleted by flipping ``status`` to ``Inactive``.

    The four ``priority_range_*`` columns carry the Hot/Warm/Cold bands;
    the scoring engine reads them from the first applicable rule.
    """

    __tablename__ = "lead_scoring_master"
    id = Column(Integer, primary_key=True, autoincrement=True)
    scoring_criteria_name = Column(String(255), nullable=False)
    field_checked = Column(String(100), nullable=False)
    condition_type = Column(String(50), nullable=False)
    condition_value = Column(String(255), nullable=False, server_default="")
    score_value = Column(Integer, nullable=False, server_default=text("0"))
    lead_type = Column(String(50))
    automation_trigger = Column(
        String(50), nullable=False, server_default="On Lead Create"
    )
    priority_range_hot = Column(Integer, nullable=False, server_default=text("40"))
    priority_range_warm_min = Column(Integer, nullable=False, server_default=text("25"))
    priority_range_warm_max = Column(Integer, nullable=False, server_default=text("39"))
    priority_range_cold_max = Column(Integer, nullable=False, server_default=text("24"))
    status = Column(String(20), nullable=False, server_default="Active")
    notes = Column(Text)
    created_by = Column(String(255))
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    __table_args__ = (
        Index("idx_scoring_rules_active", "status", "lead_type"),
        CheckConstraint("status IN ('Active', 'Inactive')", name="ck_rule_status"),
        CheckConstraint(
            "automation_trigger IN ('On Lead Create', 'On Lead Update', 'Both')",
            name="ck_rule_automation_trigger",
        ),
    )
