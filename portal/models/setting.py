from sqlalchemy import Column, DateTime, String, Text
from portal.core.database import Base
from portal.core.time import utcnow


class SystemSetting(Base):
    __tablename__ = "system_settings"

    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=False)  # JSON document
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
