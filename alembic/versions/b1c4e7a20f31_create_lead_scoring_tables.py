"""create lead scoring tables

Revision ID: b1c4e7a20f31
Revises:
Create Date: 2026-10-18 09:00:00.000000

Creates ``lead_scoring_master`` and ``automation_log``.  The ``leads``
table belongs to the leads subsystem: when it already exists only the
scoring columns are added (``ADD COLUMN IF NOT EXISTS``), otherwise it
is created with the columns the scoring rules read.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "b1c4e7a20f31"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


# Columns the scorer reads or writes on an existing ``leads`` table
_LEAD_SCORING_COLUMNS = [
    ("lead_score", "INTEGER DEFAULT 0"),
    ("lead_priority", "VARCHAR(20) DEFAULT 'Cold'"),
    ("last_score_calculated", "TIMESTAMPTZ"),
    ("response_time_hours", "INTEGER"),
    ("itinerary_created_hours", "INTEGER"),
    ("budget_per_person", "NUMERIC(12,2)"),
    ("travel_date", "DATE"),
    ("lead_type", "VARCHAR(50)"),
    ("budget", "NUMERIC(12,2)"),
]


def upgrade() -> None:
    op.create_table(
        "lead_scoring_master",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("scoring_criteria_name", sa.String(255), nullable=False),
        sa.Column("field_checked", sa.String(100), nullable=False),
        sa.Column("condition_type", sa.String(50), nullable=False),
        sa.Column("condition_value", sa.String(255), nullable=False, server_default=""),
        sa.Column("score_value", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("lead_type", sa.String(50), nullable=True),
        sa.Column(
            "automation_trigger",
            sa.String(50),
            nullable=False,
            server_default="On Lead Create",
        ),
        sa.Column("priority_range_hot", sa.Integer(), nullable=False, server_default=sa.text("40")),
        sa.Column("priority_range_warm_min", sa.Integer(), nullable=False, server_default=sa.text("25")),
        sa.Column("priority_range_warm_max", sa.Integer(), nullable=False, server_default=sa.text("39")),
        sa.Column("priority_range_cold_max", sa.Integer(), nullable=False, server_default=sa.text("24")),
        sa.Column("status", sa.String(20), nullable=False, server_default="Active"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("created_by", sa.String(255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.CheckConstraint("status IN ('Active', 'Inactive')", name="ck_rule_status"),
        sa.CheckConstraint(
            "automation_trigger IN ('On Lead Create', 'On Lead Update', 'Both')",
            name="ck_rule_automation_trigger",
        ),
    )
    op.create_index(
        "idx_scoring_rules_active", "lead_scoring_master", ["status", "lead_type"]
    )

    op.create_table(
        "automation_log",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("lead_id", sa.Integer(), nullable=False),
        sa.Column("action_type", sa.String(100), nullable=False),
        sa.Column("status", sa.String(50), nullable=False),
        sa.Column("message", sa.Text(), nullable=True),
        sa.Column("priority", sa.String(20), server_default="medium"),
        sa.Column("metadata", postgresql.JSONB(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.execute(
        "CREATE INDEX idx_automation_log_lead ON automation_log (lead_id, created_at DESC)"
    )

    bind = op.get_bind()
    if sa.inspect(bind).has_table("leads"):
        for name, ddl in _LEAD_SCORING_COLUMNS:
            op.execute(f"ALTER TABLE leads ADD COLUMN IF NOT EXISTS {name} {ddl}")
    else:
        op.create_table(
            "leads",
            sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
            sa.Column("name", sa.String(255)),
            sa.Column("email", sa.String(255)),
            sa.Column("phone", sa.String(50)),
            sa.Column("number_of_travelers", sa.Integer()),
            sa.Column("travel_dates", sa.String(255)),
            sa.Column("travel_date", sa.Date()),
            sa.Column("source", sa.String(100)),
            sa.Column("destination", sa.String(255)),
            sa.Column("custom_notes", sa.Text()),
            sa.Column("utm_source", sa.String(255)),
            sa.Column("utm_medium", sa.String(255)),
            sa.Column("utm_campaign", sa.String(255)),
            sa.Column("lead_type", sa.String(50)),
            sa.Column("budget", sa.Numeric(12, 2)),
            sa.Column("budget_per_person", sa.Numeric(12, 2)),
            sa.Column("response_time_hours", sa.Integer()),
            sa.Column("itinerary_created_hours", sa.Integer()),
            sa.Column("assigned_employee_name", sa.String(255)),
            sa.Column("lead_score", sa.Integer(), server_default="0"),
            sa.Column("lead_priority", sa.String(20), server_default="Cold"),
            sa.Column("last_score_calculated", sa.DateTime(timezone=True)),
            sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        )
    op.execute(
        "CREATE INDEX IF NOT EXISTS idx_leads_score_priority "
        "ON leads (lead_score DESC, lead_priority)"
    )


def downgrade() -> None:
    # ``leads`` is left in place; it is owned by the leads subsystem
    op.execute("DROP INDEX IF EXISTS idx_leads_score_priority")
    op.execute("DROP INDEX IF EXISTS idx_automation_log_lead")
    op.drop_table("automation_log")
    op.drop_index("idx_scoring_rules_active", table_name="lead_scoring_master")
    op.drop_table("lead_scoring_master")
