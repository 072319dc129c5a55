from enum import Enum
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.drive import (
    FavoriteRequest,
    FileResponse,
    FolderCreate,
    FolderResponse,
    RenameRequest,
    ShareRequest,
    ShareResponse,
    StorageStats,
)
from portal.services import drive

router = APIRouter()


class ItemKind(str, Enum):
    folders = drive.KIND_FOLDERS
    files = drive.KIND_FILES


# Folders

@router.get("/folders", response_model=List[FolderResponse])
async def list_folders(
    parent_id: Optional[int] = Query(None),
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Root folders (own and shared with me) or the children of `parent_id`"""
    return await drive.list_folders(db, caller, parent_id)


@router.get("/folders/{folder_id}", response_model=FolderResponse)
async def get_folder(folder_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.get_folder(db, caller, folder_id)


@router.post("/folders")
async def create_folder(payload: FolderCreate, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    folder_id = await drive.create_folder(db, caller, payload.name, payload.parent_id)
    return {"success": True, "id": folder_id}


@router.put("/folders/{folder_id}")
async def rename_folder(
    folder_id: int,
    payload: RenameRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.rename_folder(db, caller, folder_id, payload.name)
    return {"success": True}


@router.delete("/folders/{folder_id}")
async def delete_folder(
    folder_id: int,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Delete a folder with everything below it (owner only)"""
    await drive.delete_folder(db, caller, folder_id, settings)
    return {"success": True}


@router.post("/folders/{folder_id}/favorite")
async def favorite_folder(
    folder_id: int,
    payload: FavoriteRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.set_favorite(db, caller, drive.KIND_FOLDERS, folder_id, payload.is_favorite)
    return {"success": True}


# Files

@router.get("/files", response_model=List[FileResponse])
async def list_files(
    folder_id: Optional[int] = Query(None),
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    return await drive.list_files(db, caller, folder_id)


@router.get("/files/{file_id}", response_model=FileResponse)
async def get_file(file_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.get_file(db, caller, file_id)


@router.post("/upload")
async def upload_file(
    file: UploadFile = File(...),
    folder_id: Optional[int] = Form(None),
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Upload into a folder the caller can write to (or the caller's root)"""
    file_id = await drive.upload_file(db, caller, file, settings, folder_id)
    return {"success": True, "id": file_id}


@router.put("/files/{file_id}")
async def rename_file(
    file_id: int,
    payload: RenameRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.rename_file(db, caller, file_id, payload.name)
    return {"success": True}


@router.delete("/files/{file_id}")
async def delete_file(
    file_id: int,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    await drive.delete_file(db, caller, file_id, settings)
    return {"success": True}


@router.post("/files/{file_id}/favorite")
async def favorite_file(
    file_id: int,
    payload: FavoriteRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.set_favorite(db, caller, drive.KIND_FILES, file_id, payload.is_favorite)
    return {"success": True}


# Views

@router.get("/recent")
async def recent(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.recent(db, caller)


@router.get("/favorites")
async def favorites(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.favorites(db, caller)


@router.get("/trash")
async def trash(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.trash(db, caller)


@router.get("/shared", response_model=List[FolderResponse])
async def shared_with_me(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.shared_with_me(db, caller)


@router.get("/storage-stats", response_model=StorageStats)
async def storage_stats(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.storage_stats(db, caller)


@router.post("/{kind}/{item_id}/trash")
async def move_to_trash(
    kind: ItemKind,
    item_id: int,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.move_to_trash(db, caller, kind.value, item_id)
    return {"success": True}


@router.post("/{kind}/{item_id}/restore")
async def restore(
    kind: ItemKind,
    item_id: int,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.restore(db, caller, kind.value, item_id)
    return {"success": True}


# Sharing

@router.post("/folders/{folder_id}/share")
async def share_folder(
    folder_id: int,
    payload: ShareRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Grant (or change) a user's READ/WRITE access to a folder"""
    await drive.share_folder(db, caller, folder_id, payload.target_user_id, payload.permission)
    return {"success": True}


@router.get("/folders/{folder_id}/shares", response_model=List[ShareResponse])
async def list_shares(folder_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await drive.list_shares(db, caller, folder_id)


@router.delete("/folders/{folder_id}/shares/{target_user_id}")
async def remove_share(
    folder_id: int,
    target_user_id: int,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await drive.remove_share(db, caller, folder_id, target_user_id)
    return {"success": True}
