from sqlalchemy import Column, String, Integer, Text, DateTime, Index
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from travloger.models.base import Base


class AutomationLog(Base):
    """Append-only audit trail of dispatched automation actions."""

    __tablename__ = "automation_log"
    id = Column(Integer, primary_key=True, autoincrement=True)
    lead_id = Column(Integer, nullable=False)
    action_type = Column(String(100), nullable=False)
    status = Column(String(50), nullable=False)
    message = Column(Text)
    priority = Column(String(20), server_default="medium")
    # ``metadata`` is reserved on declarative classes
    metadata_ = Column("metadata", JSONB)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_automation_log_lead", "lead_id", created_at.desc()),
    )
