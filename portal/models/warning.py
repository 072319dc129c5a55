from sqlalchemy import Boolean, Column, DateTime, Integer, String, Text
from portal.core.database import Base
from portal.core.time import utcnow

URGENCY_LEVELS = ("low", "medium", "high")


class DashboardWarning(Base):
    """Banner shown on the dashboard; at most one row is active."""

    __tablename__ = "warnings"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    urgency = Column(String(20), nullable=False, default="low")
    target_audience = Column(String(50), nullable=False, default="all")
    active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, default=utcnow)
