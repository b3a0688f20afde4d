"""seed default scoring rules

Revision ID: c2d5f8b31a42
Revises: b1c4e7a20f31
Create Date: 2026-10-18 09:30:00.000000

Inserts the Group, FIT and Corporate default rules into
``lead_scoring_master``.  Uses INSERT … WHERE NOT EXISTS on the rule
name so the migration is idempotent.

The rule values come from ``travloger.core.default_scoring_rules``.
Edit them there, not here.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision: str = "c2d5f8b31a42"
down_revision: Union[str, None] = "b1c4e7a20f31"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

from travloger.core.default_scoring_rules import DEFAULT_SCORING_RULES  # noqa: E402

_INSERT = sa.text(
    """
    INSERT INTO lead_scoring_master
        (scoring_criteria_name, field_checked, condition_type, condition_value,
         score_value, lead_type, automation_trigger, status, notes, created_by)
    SELECT :scoring_criteria_name, :field_checked, :condition_type, :condition_value,
           :score_value, :lead_type, :automation_trigger, :status, :notes, 'System'
    WHERE NOT EXISTS (
        SELECT 1 FROM lead_scoring_master
        WHERE scoring_criteria_name = :scoring_criteria_name
    )
    """
)


def upgrade() -> None:
    bind = op.get_bind()
    for rule in DEFAULT_SCORING_RULES:
        bind.execute(_INSERT, rule)


def downgrade() -> None:
    bind = op.get_bind()
    for rule in DEFAULT_SCORING_RULES:
        bind.execute(
            sa.text("DELETE FROM lead_scoring_master WHERE scoring_criteria_name = :name"),
            {"name": rule["scoring_criteria_name"]},
        )
