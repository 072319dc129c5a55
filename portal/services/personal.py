"""Dashboard widgets: shortcuts, system shortcuts, todos and the personal note.

Personal rows are private to their owner; someone else's id is reported as
missing rather than forbidden.
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.errors import Forbidden, NotFound, ValidationFailed
from portal.models.personal import SystemShortcut, Todo, UserNote, UserShortcut
from portal.schemas.personal import ShortcutCreate, ShortcutUpdate


async def _owned(db: AsyncSession, model, caller: Caller, row_id: int, label: str):
    row = await db.get(model, row_id)
    if row is None or row.user_id != caller.id:
        raise NotFound(f"{label} not found")
    return row


def _shortcut_fields(payload) -> dict:
    fields = payload.model_dump(exclude_unset=True)
    # Null icon/color fall back to the column defaults; name and url stay required
    for key in ("name", "url", "icon_name", "color"):
        if key in fields and fields[key] is None:
            del fields[key]
    return fields


# Shortcuts

async def list_shortcuts(db: AsyncSession, caller: Caller) -> List[UserShortcut]:
    result = await db.execute(
        select(UserShortcut)
        .where(UserShortcut.user_id == caller.id)
        .order_by(UserShortcut.is_favorite.desc(), UserShortcut.created_at.desc(), UserShortcut.id.desc())
    )
    return list(result.scalars().all())


async def create_shortcut(db: AsyncSession, caller: Caller, payload: ShortcutCreate) -> int:
    shortcut = UserShortcut(user_id=caller.id, **_shortcut_fields(payload))
    db.add(shortcut)
    await db.commit()
    return shortcut.id


async def update_shortcut(db: AsyncSession, caller: Caller, shortcut_id: int, payload: ShortcutUpdate) -> None:
    shortcut = await _owned(db, UserShortcut, caller, shortcut_id, "Shortcut")
    for field, value in _shortcut_fields(payload).items():
        setattr(shortcut, field, value)
    await db.commit()


async def set_shortcut_favorite(db: AsyncSession, caller: Caller, shortcut_id: int, is_favorite: bool) -> None:
    shortcut = await _owned(db, UserShortcut, caller, shortcut_id, "Shortcut")
    shortcut.is_favorite = is_favorite
    await db.commit()


async def delete_shortcut(db: AsyncSession, caller: Caller, shortcut_id: int) -> None:
    shortcut = await _owned(db, UserShortcut, caller, shortcut_id, "Shortcut")
    await db.delete(shortcut)
    await db.commit()


# System shortcuts, shared by everyone and curated by administrators

def _require_admin(caller: Caller) -> None:
    if not caller.is_admin:
        raise Forbidden()


async def list_system_shortcuts(db: AsyncSession) -> List[SystemShortcut]:
    result = await db.execute(
        select(SystemShortcut).order_by(SystemShortcut.is_favorite.desc(), SystemShortcut.id.asc())
    )
    return list(result.scalars().all())


async def _get_system_shortcut(db: AsyncSession, shortcut_id: int) -> SystemShortcut:
    shortcut = await db.get(SystemShortcut, shortcut_id)
    if shortcut is None:
        raise NotFound("Shortcut not found")
    return shortcut


async def _commit_unique_name(db: AsyncSession, name: Optional[str]) -> None:
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ValidationFailed(f"A system shortcut named {name!r} already exists")


async def create_system_shortcut(db: AsyncSession, caller: Caller, payload: ShortcutCreate) -> int:
    _require_admin(caller)
    shortcut = SystemShortcut(**_shortcut_fields(payload))
    db.add(shortcut)
    await _commit_unique_name(db, payload.name)
    logger.info("Admin {} created system shortcut {}", caller.id, shortcut.id)
    return shortcut.id


async def update_system_shortcut(db: AsyncSession, caller: Caller, shortcut_id: int, payload: ShortcutUpdate) -> None:
    _require_admin(caller)
    shortcut = await _get_system_shortcut(db, shortcut_id)
    for field, value in _shortcut_fields(payload).items():
        setattr(shortcut, field, value)
    await _commit_unique_name(db, payload.name)


async def set_system_shortcut_favorite(db: AsyncSession, caller: Caller, shortcut_id: int, is_favorite: bool) -> None:
    _require_admin(caller)
    shortcut = await _get_system_shortcut(db, shortcut_id)
    shortcut.is_favorite = is_favorite
    await db.commit()


async def delete_system_shortcut(db: AsyncSession, caller: Caller, shortcut_id: int) -> None:
    _require_admin(caller)
    shortcut = await _get_system_shortcut(db, shortcut_id)
    await db.delete(shortcut)
    await db.commit()
    logger.info("Admin {} deleted system shortcut {}", caller.id, shortcut_id)


# Todos

async def list_todos(db: AsyncSession, caller: Caller) -> List[Todo]:
    result = await db.execute(
        select(Todo).where(Todo.user_id == caller.id).order_by(Todo.created_at.desc(), Todo.id.desc())
    )
    return list(result.scalars().all())


async def create_todo(db: AsyncSession, caller: Caller, text: str) -> int:
    if not text or not text.strip():
        raise ValidationFailed("Todo text is required")
    todo = Todo(user_id=caller.id, text=text.strip())
    db.add(todo)
    await db.commit()
    return todo.id


async def set_todo_completed(db: AsyncSession, caller: Caller, todo_id: int, completed: bool) -> None:
    todo = await _owned(db, Todo, caller, todo_id, "Todo")
    todo.completed = completed
    await db.commit()


async def delete_todo(db: AsyncSession, caller: Caller, todo_id: int) -> None:
    todo = await _owned(db, Todo, caller, todo_id, "Todo")
    await db.delete(todo)
    await db.commit()


# Note

async def get_note(db: AsyncSession, caller: Caller) -> dict:
    result = await db.execute(select(UserNote).where(UserNote.user_id == caller.id))
    note = result.scalar_one_or_none()
    if note is None:
        return {"content": "", "updated_at": None}
    return {"content": note.content or "", "updated_at": note.updated_at}


async def save_note(db: AsyncSession, caller: Caller, content: Optional[str]) -> None:
    result = await db.execute(select(UserNote).where(UserNote.user_id == caller.id))
    note = result.scalar_one_or_none()
    if note is None:
        db.add(UserNote(user_id=caller.id, content=content or ""))
    else:
        note.content = content or ""
    await db.commit()
