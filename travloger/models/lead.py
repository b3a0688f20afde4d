from sqlalchemy import Column, String, Integer, Numeric, Date, DateTime, Text, Index
from sqlalchemy.sql import func

from travloger.models.base import Base


class Lead(Base):
    """Travel enquiry owned by the leads subsystem.

    The scoring engine treats a lead as a bag of named fields: rules
    refer to columns by name through ``field_checked``.  Only
    ``lead_score``, ``lead_priority`` and ``last_score_calculated`` are
    written by this service; they are a derived cache, recomputed on
    every calculation.
    """

    __tablename__ = "leads"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255))
    email = Column(String(255))
    phone = Column(String(50))
    number_of_travelers = Column(Integer)
    travel_dates = Column(String(255))
    travel_date = Column(Date)
    source = Column(String(100))
    destination = Column(String(255))
    custom_notes = Column(Text)
    utm_source = Column(String(255))
    utm_medium = Column(String(255))
    utm_campaign = Column(String(255))
    lead_type = Column(String(50))
    budget = Column(Numeric(12, 2))
    budget_per_person = Column(Numeric(12, 2))
    response_time_hours = Column(Integer)
    itinerary_created_hours = Column(Integer)
    assigned_employee_name = Column(String(255))
    lead_score = Column(Integer, server_default="0")
    lead_priority = Column(String(20), server_default="Cold")
    last_score_calculated = Column(DateTime(timezone=True))
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_leads_score_priority", lead_score.desc(), "lead_priority"),
    )
