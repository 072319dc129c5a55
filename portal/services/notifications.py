"""In-app notifications.

Notifications are plain rows; there is no delivery transport. Senders stage
rows on the caller's session so they commit (or roll back) together with the
change that triggered them.
"""
import re
from typing import List, Optional

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.errors import NotFound
from portal.models.notification import Notification
from portal.models.user import User

MENTION_PATTERN = re.compile(r"@(\w+)")
LIST_LIMIT = 50

KIND_MENTION = "mural_mention"
KIND_CALENDAR_INVITE = "calendar_invite"
KIND_DRIVE_SHARE = "drive_share"
KIND_PROJECT_INVITE = "project_invite"
KIND_TASK_ASSIGNMENT = "project_task_assignment"


def send_notification(
    db: AsyncSession,
    user_id: int,
    kind: str,
    title: str,
    message: str,
    link: Optional[str] = None,
) -> None:
    db.add(Notification(user_id=user_id, type=kind, title=title, message=message, link=link))
    logger.debug("Queued {} notification for user {}", kind, user_id)


def contains_pattern(word: str) -> str:
    escaped = word.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def extract_mentions(content: str) -> List[str]:
    """Unique `@word` tokens in order of first appearance."""
    seen = []
    for word in MENTION_PATTERN.findall(content or ""):
        if word not in seen:
            seen.append(word)
    return seen


async def process_mentions(db: AsyncSession, content: str, sender_id: int, sender_name: str) -> int:
    sent = 0
    for word in extract_mentions(content):
        result = await db.execute(
            select(User.id)
            .where(User.name.ilike(contains_pattern(word), escape="\\"))
            .order_by(User.id)
            .limit(1)
        )
        user_id = result.scalar_one_or_none()
        if user_id is None or user_id == sender_id:
            continue
        send_notification(
            db,
            user_id,
            KIND_MENTION,
            "Você foi mencionado",
            f"{sender_name} mencionou você no Mural",
            "mural",
        )
        sent += 1
    return sent


async def list_notifications(db: AsyncSession, caller: Caller) -> List[Notification]:
    result = await db.execute(
        select(Notification)
        .where(Notification.user_id == caller.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .limit(LIST_LIMIT)
    )
    return list(result.scalars().all())


async def mark_read(db: AsyncSession, caller: Caller, notification_id: int) -> None:
    notification = await db.get(Notification, notification_id)
    # Someone else's notification is reported as missing
    if notification is None or notification.user_id != caller.id:
        raise NotFound("Notification not found")
    notification.is_read = True
    await db.commit()


async def mark_all_read(db: AsyncSession, caller: Caller) -> None:
    await db.execute(
        update(Notification)
        .where(Notification.user_id == caller.id, Notification.is_read.is_(False))
        .values(is_read=True)
    )
    await db.commit()
