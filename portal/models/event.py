from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, Time, UniqueConstraint
from sqlalchemy.orm import relationship
from portal.core.database import Base
from portal.core.time import utcnow

VISIBILITY_PUBLIC = "public"
VISIBILITY_PRIVATE = "private"
VISIBILITY_SHARED = "shared"
EVENT_VISIBILITIES = (VISIBILITY_PUBLIC, VISIBILITY_PRIVATE, VISIBILITY_SHARED)


class CalendarEvent(Base):
    __tablename__ = "calendar_events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(300), nullable=False)
    description = Column(Text, nullable=True)
    event_date = Column(Date, nullable=False)
    event_end_date = Column(Date, nullable=True)
    event_time = Column(Time, nullable=True)
    event_end_time = Column(Time, nullable=True)
    visibility = Column(String(20), nullable=False, default=VISIBILITY_PUBLIC)  # public, private, shared
    event_type = Column(String(50), nullable=False, default="other")
    meeting_link = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationships
    shares = relationship("EventShare", back_populates="event", cascade="all, delete-orphan", passive_deletes=True)


class EventShare(Base):
    __tablename__ = "event_shares"
    __table_args__ = (UniqueConstraint("event_id", "user_id", name="uq_event_shares_event_user"),)

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("calendar_events.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow)

    event = relationship("CalendarEvent", back_populates="shares")
