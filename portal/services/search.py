"""Global search across the directory, the calendar and the drive.

Results honour the same visibility rules as the listings they come from:
events the caller may read, and folders and files the caller owns or
that sit in a folder shared with them. Trashed drive items never match.
"""
from typing import Dict, List

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.models.drive import DriveFile, Folder, FolderShare
from portal.models.event import CalendarEvent
from portal.models.user import User
from portal.services.events import visible_to
from portal.services.notifications import contains_pattern

MIN_QUERY_LENGTH = 2
USER_LIMIT = 10
EVENT_LIMIT = 10
FOLDER_LIMIT = 5
FILE_LIMIT = 10


def _empty() -> Dict[str, List[dict]]:
    return {"users": [], "events": [], "documents": []}


def _shared_with(caller: Caller):
    return select(FolderShare.folder_id).where(FolderShare.user_id == caller.id)


async def _users(db: AsyncSession, pattern: str) -> List[dict]:
    result = await db.execute(
        select(User.id, User.name, User.department, User.position, User.avatar)
        .where(or_(
            User.name.ilike(pattern, escape="\\"),
            User.department.ilike(pattern, escape="\\"),
            User.position.ilike(pattern, escape="\\"),
        ))
        .order_by(User.name.asc(), User.id.asc())
        .limit(USER_LIMIT)
    )
    return [
        {"id": uid, "name": name, "department": department, "position": position, "avatar": avatar, "type": "user"}
        for uid, name, department, position, avatar in result.all()
    ]


async def _events(db: AsyncSession, caller: Caller, pattern: str) -> List[dict]:
    query = (
        select(CalendarEvent.id, CalendarEvent.title, CalendarEvent.event_date)
        .where(or_(
            CalendarEvent.title.ilike(pattern, escape="\\"),
            CalendarEvent.description.ilike(pattern, escape="\\"),
        ))
        .order_by(CalendarEvent.event_date.asc(), CalendarEvent.id.asc())
        .limit(EVENT_LIMIT)
    )
    if not caller.is_admin:
        query = query.where(visible_to(caller))
    result = await db.execute(query)
    return [
        {"id": event_id, "name": title, "date": event_date, "type": "event"}
        for event_id, title, event_date in result.all()
    ]


async def _documents(db: AsyncSession, caller: Caller, pattern: str) -> List[dict]:
    folders = (
        select(Folder.id, Folder.name, Folder.user_id)
        .where(Folder.name.ilike(pattern, escape="\\"), Folder.is_deleted.is_(False))
        .order_by(Folder.name.asc(), Folder.id.asc())
        .limit(FOLDER_LIMIT)
    )
    files = (
        select(DriveFile.id, DriveFile.original_name, DriveFile.user_id, DriveFile.folder_id)
        .where(DriveFile.original_name.ilike(pattern, escape="\\"), DriveFile.is_deleted.is_(False))
        .order_by(DriveFile.original_name.asc(), DriveFile.id.asc())
        .limit(FILE_LIMIT)
    )
    if not caller.is_admin:
        folders = folders.where(or_(Folder.user_id == caller.id, Folder.id.in_(_shared_with(caller))))
        files = files.where(or_(DriveFile.user_id == caller.id, DriveFile.folder_id.in_(_shared_with(caller))))

    documents = [
        {"id": folder_id, "name": name, "user_id": user_id, "type": "folder"}
        for folder_id, name, user_id in (await db.execute(folders)).all()
    ]
    documents += [
        {"id": file_id, "name": name, "user_id": user_id, "folder_id": folder_id, "type": "file"}
        for file_id, name, user_id, folder_id in (await db.execute(files)).all()
    ]
    return documents


async def search(db: AsyncSession, caller: Caller, q: str) -> Dict[str, List[dict]]:
    term = (q or "").strip()
    if len(term) < MIN_QUERY_LENGTH:
        return _empty()
    pattern = contains_pattern(term)
    return {
        "users": await _users(db, pattern),
        "events": await _events(db, caller, pattern),
        "documents": await _documents(db, caller, pattern),
    }
