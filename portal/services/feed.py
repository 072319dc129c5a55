"""Mural feed: posts and visible events merged into one timeline."""
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.models.event import CalendarEvent
from portal.models.user import User
from portal.services.events import event_dict, shares_for, visible_to
from portal.services.posts import load_posts

# Posts win ties against events with the same timestamp and id
_TYPE_RANK = {"post": 1, "event": 0}


def _feed_key(item: dict):
    return (item["created_at"], item["id"], _TYPE_RANK[item["type"]])


async def get_feed(db: AsyncSession, caller: Caller) -> List[dict]:
    posts = await load_posts(db)

    # Administrators get the same feed as everyone else
    rows = (
        await db.execute(
            select(CalendarEvent, User.name, User.position, User.avatar)
            .join(User, User.id == CalendarEvent.user_id)
            .where(visible_to(caller))
        )
    ).all()
    shares = await shares_for(db, [row[0].id for row in rows])

    events = []
    for event, name, position, avatar in rows:
        item = event_dict(event, name, position, avatar, shares.get(event.id, []))
        item["type"] = "event"
        item["content"] = event.title
        events.append(item)

    return sorted(posts + events, key=_feed_key, reverse=True)
