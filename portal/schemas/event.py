from pydantic import BaseModel
from datetime import date, datetime, time
from typing import Literal, Optional, List


class EventBase(BaseModel):
    title: str
    description: Optional[str] = None
    event_date: date
    event_end_date: Optional[date] = None
    event_time: Optional[time] = None
    event_end_time: Optional[time] = None
    visibility: Literal["public", "private", "shared"] = "public"
    event_type: str = "other"
    meeting_link: Optional[str] = None
    shared_with: List[int] = []


class EventCreate(EventBase):
    pass


class EventUpdate(EventBase):
    pass


class EventResponse(BaseModel):
    id: int
    user_id: int
    title: str
    description: Optional[str] = None
    event_date: date
    event_end_date: Optional[date] = None
    event_time: Optional[time] = None
    event_end_time: Optional[time] = None
    visibility: str
    event_type: str
    meeting_link: Optional[str] = None
    created_at: datetime
    author_name: Optional[str] = None
    author_role: Optional[str] = None
    author_avatar: Optional[str] = None
    shared_with: List[int] = []  # ids of users the event is shared with
