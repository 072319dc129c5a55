from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.personal import FavoriteToggle, ShortcutCreate, ShortcutResponse, ShortcutUpdate
from portal.services import personal

router = APIRouter()
system_router = APIRouter()


@router.get("", response_model=List[ShortcutResponse])
async def list_shortcuts(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """The caller's shortcuts, favorites first"""
    return await personal.list_shortcuts(db, caller)


@router.post("")
async def create_shortcut(payload: ShortcutCreate, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    shortcut_id = await personal.create_shortcut(db, caller, payload)
    return {"success": True, "id": shortcut_id}


@router.put("/{shortcut_id}")
async def update_shortcut(
    shortcut_id: int,
    payload: ShortcutUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await personal.update_shortcut(db, caller, shortcut_id, payload)
    return {"success": True}


@router.patch("/{shortcut_id}/favorite")
async def favorite_shortcut(
    shortcut_id: int,
    payload: FavoriteToggle,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await personal.set_shortcut_favorite(db, caller, shortcut_id, payload.is_favorite)
    return {"success": True}


@router.delete("/{shortcut_id}")
async def delete_shortcut(shortcut_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await personal.delete_shortcut(db, caller, shortcut_id)
    return {"success": True}


# System shortcuts

@system_router.get("", response_model=List[ShortcutResponse])
async def list_system_shortcuts(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await personal.list_system_shortcuts(db)


@system_router.post("")
async def create_system_shortcut(
    payload: ShortcutCreate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Administrators only; names are unique"""
    shortcut_id = await personal.create_system_shortcut(db, caller, payload)
    return {"success": True, "id": shortcut_id}


@system_router.put("/{shortcut_id}")
async def update_system_shortcut(
    shortcut_id: int,
    payload: ShortcutUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await personal.update_system_shortcut(db, caller, shortcut_id, payload)
    return {"success": True}


@system_router.patch("/{shortcut_id}/favorite")
async def favorite_system_shortcut(
    shortcut_id: int,
    payload: FavoriteToggle,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await personal.set_system_shortcut_favorite(db, caller, shortcut_id, payload.is_favorite)
    return {"success": True}


@system_router.delete("/{shortcut_id}")
async def delete_system_shortcut(shortcut_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await personal.delete_system_shortcut(db, caller, shortcut_id)
    return {"success": True}
