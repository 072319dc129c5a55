from typing import Dict, Iterable, List

from loguru import logger
from sqlalchemy import delete, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller, can_read_event, can_write_event
from portal.core.errors import Forbidden, NotFound
from portal.models.event import VISIBILITY_PUBLIC, CalendarEvent, EventShare
from portal.models.user import User
from portal.schemas.event import EventCreate, EventUpdate
from portal.services.notifications import KIND_CALENDAR_INVITE, send_notification

_EVENT_FIELDS = (
    "title",
    "description",
    "event_date",
    "event_end_date",
    "event_time",
    "event_end_time",
    "visibility",
    "event_type",
    "meeting_link",
)


def visible_to(caller: Caller):
    """SQL criterion matching the events a non-admin caller may read."""
    shared_ids = select(EventShare.event_id).where(EventShare.user_id == caller.id)
    return or_(
        CalendarEvent.visibility == VISIBILITY_PUBLIC,
        CalendarEvent.user_id == caller.id,
        CalendarEvent.id.in_(shared_ids),
    )


def distinct_sharees(user_ids: Iterable[int], author_id: int) -> List[int]:
    sharees = []
    for user_id in user_ids:
        if user_id != author_id and user_id not in sharees:
            sharees.append(user_id)
    return sharees


async def shares_for(db: AsyncSession, event_ids: List[int]) -> Dict[int, List[int]]:
    if not event_ids:
        return {}
    result = await db.execute(
        select(EventShare.event_id, EventShare.user_id)
        .where(EventShare.event_id.in_(event_ids))
        .order_by(EventShare.id)
    )
    shares: Dict[int, List[int]] = {}
    for event_id, user_id in result.all():
        shares.setdefault(event_id, []).append(user_id)
    return shares


def event_dict(event: CalendarEvent, author_name, author_role, author_avatar, shared_with) -> dict:
    data = {field: getattr(event, field) for field in _EVENT_FIELDS}
    data.update({
        "id": event.id,
        "user_id": event.user_id,
        "created_at": event.created_at,
        "author_name": author_name,
        "author_role": author_role,
        "author_avatar": author_avatar,
        "shared_with": shared_with,
    })
    return data


async def list_events(db: AsyncSession, caller: Caller) -> List[dict]:
    query = (
        select(CalendarEvent, User.name, User.position, User.avatar)
        .join(User, User.id == CalendarEvent.user_id)
        .order_by(CalendarEvent.event_date.asc(), CalendarEvent.event_time.asc(), CalendarEvent.id.asc())
    )
    # Administrators see the whole calendar
    if not caller.is_admin:
        query = query.where(visible_to(caller))

    rows = (await db.execute(query)).all()
    shares = await shares_for(db, [row[0].id for row in rows])
    return [
        event_dict(event, name, position, avatar, shares.get(event.id, []))
        for event, name, position, avatar in rows
    ]


async def _get_event(db: AsyncSession, event_id: int) -> CalendarEvent:
    event = await db.get(CalendarEvent, event_id)
    if event is None:
        raise NotFound("Event not found")
    return event


async def get_event(db: AsyncSession, caller: Caller, event_id: int) -> dict:
    event = await _get_event(db, event_id)
    shared_with = (await shares_for(db, [event.id])).get(event.id, [])
    if not can_read_event(caller, event, shared_with):
        raise Forbidden()
    author = await db.get(User, event.user_id)
    return event_dict(event, author.name, author.position, author.avatar, shared_with)


def _invite(db: AsyncSession, user_id: int, title: str) -> None:
    send_notification(
        db,
        user_id,
        KIND_CALENDAR_INVITE,
        "Convite de Calendário",
        f"Você foi convidado para o evento: {title}",
        "calendario",
    )


async def create_event(db: AsyncSession, caller: Caller, payload: EventCreate) -> int:
    event = CalendarEvent(user_id=caller.id, **payload.model_dump(include=set(_EVENT_FIELDS)))
    db.add(event)
    await db.flush()

    for user_id in distinct_sharees(payload.shared_with, caller.id):
        db.add(EventShare(event_id=event.id, user_id=user_id))
        _invite(db, user_id, event.title)

    await db.commit()
    logger.info("User {} created event {} ({})", caller.id, event.id, event.visibility)
    return event.id


async def update_event(db: AsyncSession, caller: Caller, event_id: int, payload: EventUpdate) -> None:
    event = await _get_event(db, event_id)
    if not can_write_event(caller, event):
        raise Forbidden()

    previous = set((await shares_for(db, [event.id])).get(event.id, []))
    for field, value in payload.model_dump(include=set(_EVENT_FIELDS)).items():
        setattr(event, field, value)

    # Replace the share set wholesale; only newcomers get an invite
    await db.execute(delete(EventShare).where(EventShare.event_id == event.id))
    for user_id in distinct_sharees(payload.shared_with, event.user_id):
        db.add(EventShare(event_id=event.id, user_id=user_id))
        if user_id not in previous:
            _invite(db, user_id, event.title)

    await db.commit()
    logger.info("User {} updated event {}", caller.id, event_id)


async def delete_event(db: AsyncSession, caller: Caller, event_id: int) -> None:
    event = await _get_event(db, event_id)
    if not can_write_event(caller, event):
        raise Forbidden()
    await db.execute(delete(CalendarEvent).where(CalendarEvent.id == event_id))
    await db.commit()
    logger.info("User {} deleted event {}", caller.id, event_id)
