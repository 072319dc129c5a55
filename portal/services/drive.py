"""Personal and shared file drive.

Folders form a tree through `parent_id`. A share row on a folder applies to
the whole subtree below it; the nearest share row on the way up to the root
decides the caller's permission.
"""
from typing import List, Optional, Set

from fastapi import UploadFile
from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import (
    Caller,
    can_delete_file,
    can_delete_folder,
    can_manage_drive_item,
    can_read_file,
    can_read_folder,
    can_remove_share,
    can_write_folder,
)
from portal.core.config import Settings
from portal.core.errors import Forbidden, NotFound, ValidationFailed
from portal.core.uploads import discard_upload, remove_stored, store_upload
from portal.models.drive import PERMISSION_OWNER, DriveFile, Folder, FolderShare
from portal.models.user import DEFAULT_STORAGE_QUOTA, User
from portal.schemas.drive import FileResponse, FolderResponse
from portal.services.notifications import KIND_DRIVE_SHARE, send_notification

KIND_FOLDERS = "folders"
KIND_FILES = "files"

RECENT_FOLDERS = 10
RECENT_FILES = 20
RECENT_LIMIT = 30


def folder_dict(folder: Folder, permission: Optional[str] = None, share_id: Optional[int] = None) -> dict:
    data = FolderResponse.model_validate(folder).model_dump()
    data.update(permission=permission, share_id=share_id)
    return data


def file_dict(file: DriveFile) -> dict:
    return FileResponse.model_validate(file).model_dump()


async def _get_folder(db: AsyncSession, folder_id: int) -> Folder:
    folder = await db.get(Folder, folder_id)
    if folder is None:
        raise NotFound("Folder not found")
    return folder


async def _get_file(db: AsyncSession, file_id: int) -> DriveFile:
    file = await db.get(DriveFile, file_id)
    if file is None:
        raise NotFound("File not found")
    return file


async def effective_permission(db: AsyncSession, caller: Caller, folder: Folder) -> Optional[str]:
    """The caller's inherited share permission on `folder`, or None."""
    if folder.user_id == caller.id:
        return PERMISSION_OWNER

    current: Optional[Folder] = folder
    seen: Set[int] = set()
    while current is not None and current.id not in seen:
        seen.add(current.id)
        result = await db.execute(
            select(FolderShare.permission).where(
                FolderShare.folder_id == current.id,
                FolderShare.user_id == caller.id,
            )
        )
        permission = result.scalar_one_or_none()
        if permission is not None:
            return permission
        current = await db.get(Folder, current.parent_id) if current.parent_id is not None else None
    return None


async def _share_permission(db: AsyncSession, caller: Caller, folder: Folder) -> Optional[str]:
    # OWNER is a display value; the resolver only understands share permissions
    permission = await effective_permission(db, caller, folder)
    return None if permission == PERMISSION_OWNER else permission


async def _readable_folder(db: AsyncSession, caller: Caller, folder_id: int) -> Folder:
    folder = await _get_folder(db, folder_id)
    if not can_read_folder(caller, folder, await _share_permission(db, caller, folder)):
        raise Forbidden("Access denied")
    return folder


async def _writable_folder(db: AsyncSession, caller: Caller, folder_id: int) -> Folder:
    folder = await _get_folder(db, folder_id)
    if not can_write_folder(caller, folder, await _share_permission(db, caller, folder)):
        raise Forbidden("Access denied")
    return folder


# Folders

async def list_folders(db: AsyncSession, caller: Caller, parent_id: Optional[int] = None) -> List[dict]:
    if parent_id is None:
        own = (
            await db.execute(
                select(Folder).where(
                    Folder.user_id == caller.id,
                    Folder.parent_id.is_(None),
                    Folder.is_deleted.is_(False),
                )
            )
        ).scalars().all()
        shared = (
            await db.execute(
                select(Folder, FolderShare.permission, FolderShare.id)
                .join(FolderShare, FolderShare.folder_id == Folder.id)
                .where(FolderShare.user_id == caller.id, Folder.is_deleted.is_(False))
            )
        ).all()
        folders = [folder_dict(f, PERMISSION_OWNER) for f in own]
        folders += [folder_dict(f, permission, share_id) for f, permission, share_id in shared]
    else:
        parent = await _readable_folder(db, caller, parent_id)
        inherited = await effective_permission(db, caller, parent)
        children = (
            await db.execute(
                select(Folder).where(Folder.parent_id == parent.id, Folder.is_deleted.is_(False))
            )
        ).scalars().all()
        folders = []
        for child in children:
            permission = PERMISSION_OWNER if child.user_id == caller.id else await effective_permission(db, caller, child)
            folders.append(folder_dict(child, permission or inherited))

    return sorted(folders, key=lambda f: (not f["is_favorite"], f["name"].lower()))


async def get_folder(db: AsyncSession, caller: Caller, folder_id: int) -> dict:
    folder = await _readable_folder(db, caller, folder_id)
    return folder_dict(folder, await effective_permission(db, caller, folder))


async def create_folder(db: AsyncSession, caller: Caller, name: str, parent_id: Optional[int] = None) -> int:
    if not name or not name.strip():
        raise ValidationFailed("Folder name is required")
    if parent_id is not None:
        await _writable_folder(db, caller, parent_id)

    folder = Folder(user_id=caller.id, parent_id=parent_id, name=name.strip())
    db.add(folder)
    await db.commit()
    logger.info("User {} created folder {} under {}", caller.id, folder.id, parent_id)
    return folder.id


async def rename_folder(db: AsyncSession, caller: Caller, folder_id: int, name: str) -> None:
    folder = await _get_folder(db, folder_id)
    if not can_manage_drive_item(caller, folder):
        raise Forbidden()
    if not name or not name.strip():
        raise ValidationFailed("Folder name is required")
    folder.name = name.strip()
    await db.commit()


async def descendant_folder_ids(db: AsyncSession, folder_id: int) -> List[int]:
    """The folder itself plus every folder below it."""
    ids = [folder_id]
    frontier = [folder_id]
    while frontier:
        result = await db.execute(select(Folder.id).where(Folder.parent_id.in_(frontier)))
        frontier = [child for child in result.scalars().all() if child not in ids]
        ids.extend(frontier)
    return ids


async def delete_folder(db: AsyncSession, caller: Caller, folder_id: int, settings: Settings) -> None:
    folder = await _get_folder(db, folder_id)
    if not can_delete_folder(caller, folder):
        raise Forbidden()

    ids = await descendant_folder_ids(db, folder.id)
    stored = (
        await db.execute(select(DriveFile.filename).where(DriveFile.folder_id.in_(ids)))
    ).scalars().all()

    await db.execute(delete(DriveFile).where(DriveFile.folder_id.in_(ids)))
    await db.execute(delete(FolderShare).where(FolderShare.folder_id.in_(ids)))
    await db.execute(delete(Folder).where(Folder.id.in_(ids)))
    await db.commit()

    for filename in stored:
        remove_stored(filename, settings)
    logger.info("User {} deleted folder {} ({} folders, {} files)", caller.id, folder_id, len(ids), len(stored))


# Files

async def list_files(db: AsyncSession, caller: Caller, folder_id: Optional[int] = None) -> List[dict]:
    query = select(DriveFile).where(DriveFile.is_deleted.is_(False))
    if folder_id is None:
        # Root files are private to their owner
        query = query.where(DriveFile.user_id == caller.id, DriveFile.folder_id.is_(None))
    else:
        await _readable_folder(db, caller, folder_id)
        query = query.where(DriveFile.folder_id == folder_id)

    result = await db.execute(query.order_by(DriveFile.is_favorite.desc(), DriveFile.updated_at.desc()))
    return [file_dict(f) for f in result.scalars().all()]


async def get_file(db: AsyncSession, caller: Caller, file_id: int) -> dict:
    file = await _get_file(db, file_id)
    folder = await db.get(Folder, file.folder_id) if file.folder_id is not None else None
    permission = await _share_permission(db, caller, folder) if folder is not None else None
    if not can_read_file(caller, file, folder, permission):
        raise Forbidden("Access denied")
    return file_dict(file)


async def storage_used(db: AsyncSession, user_id: int) -> int:
    result = await db.execute(
        select(func.coalesce(func.sum(DriveFile.file_size), 0)).where(
            DriveFile.user_id == user_id,
            DriveFile.is_deleted.is_(False),
        )
    )
    return int(result.scalar_one())


async def storage_stats(db: AsyncSession, caller: Caller) -> dict:
    user = await db.get(User, caller.id)
    quota = user.storage_quota if user is not None and user.storage_quota else DEFAULT_STORAGE_QUOTA
    return {"used": await storage_used(db, caller.id), "quota": quota}


async def upload_file(
    db: AsyncSession,
    caller: Caller,
    upload: UploadFile,
    settings: Settings,
    folder_id: Optional[int] = None,
) -> int:
    if folder_id is not None:
        await _writable_folder(db, caller, folder_id)

    stats = await storage_stats(db, caller)
    stored = await store_upload(upload, settings)
    if stats["used"] + stored.size > stats["quota"]:
        discard_upload(stored, settings)
        raise ValidationFailed("Storage quota exceeded")

    file = DriveFile(
        user_id=caller.id,
        folder_id=folder_id,
        filename=stored.filename,
        original_name=stored.original_name,
        file_type=stored.content_type,
        file_size=stored.size,
    )
    db.add(file)
    try:
        await db.commit()
    except Exception:
        discard_upload(stored, settings)
        raise
    logger.info("User {} uploaded file {} ({} bytes) into folder {}", caller.id, file.id, stored.size, folder_id)
    return file.id


async def rename_file(db: AsyncSession, caller: Caller, file_id: int, name: str) -> None:
    file = await _get_file(db, file_id)
    if not can_manage_drive_item(caller, file):
        raise Forbidden()
    if not name or not name.strip():
        raise ValidationFailed("File name is required")
    file.original_name = name.strip()
    await db.commit()


async def delete_file(db: AsyncSession, caller: Caller, file_id: int, settings: Settings) -> None:
    file = await _get_file(db, file_id)
    if not can_delete_file(caller, file):
        raise Forbidden()
    filename = file.filename
    await db.delete(file)
    await db.commit()
    remove_stored(filename, settings)
    logger.info("User {} deleted file {}", caller.id, file_id)


# Favorites and trash

async def _owned_item(db: AsyncSession, caller: Caller, kind: str, item_id: int):
    if kind == KIND_FOLDERS:
        item = await _get_folder(db, item_id)
    elif kind == KIND_FILES:
        item = await _get_file(db, item_id)
    else:
        raise NotFound(f"Unknown drive item type: {kind}")
    if not can_manage_drive_item(caller, item):
        raise Forbidden()
    return item


async def set_favorite(db: AsyncSession, caller: Caller, kind: str, item_id: int, is_favorite: bool) -> None:
    item = await _owned_item(db, caller, kind, item_id)
    item.is_favorite = is_favorite
    await db.commit()


async def move_to_trash(db: AsyncSession, caller: Caller, kind: str, item_id: int) -> None:
    item = await _owned_item(db, caller, kind, item_id)
    item.is_deleted = True
    await db.commit()


async def restore(db: AsyncSession, caller: Caller, kind: str, item_id: int) -> None:
    item = await _owned_item(db, caller, kind, item_id)
    item.is_deleted = False
    await db.commit()


async def _own_items(db: AsyncSession, caller: Caller, *criteria, folder_limit=None, file_limit=None) -> List[dict]:
    folders = (
        await db.execute(
            select(Folder)
            .where(Folder.user_id == caller.id, *[c(Folder) for c in criteria])
            .order_by(Folder.updated_at.desc())
            .limit(folder_limit)
        )
    ).scalars().all()
    files = (
        await db.execute(
            select(DriveFile)
            .where(DriveFile.user_id == caller.id, *[c(DriveFile) for c in criteria])
            .order_by(DriveFile.updated_at.desc())
            .limit(file_limit)
        )
    ).scalars().all()
    items = [folder_dict(f, PERMISSION_OWNER) for f in folders] + [file_dict(f) for f in files]
    return sorted(items, key=lambda item: item["updated_at"], reverse=True)


async def recent(db: AsyncSession, caller: Caller) -> List[dict]:
    items = await _own_items(
        db,
        caller,
        lambda model: model.is_deleted.is_(False),
        folder_limit=RECENT_FOLDERS,
        file_limit=RECENT_FILES,
    )
    return items[:RECENT_LIMIT]


async def favorites(db: AsyncSession, caller: Caller) -> List[dict]:
    return await _own_items(
        db,
        caller,
        lambda model: model.is_favorite.is_(True),
        lambda model: model.is_deleted.is_(False),
    )


async def trash(db: AsyncSession, caller: Caller) -> List[dict]:
    return await _own_items(db, caller, lambda model: model.is_deleted.is_(True))


async def shared_with_me(db: AsyncSession, caller: Caller) -> List[dict]:
    result = await db.execute(
        select(Folder, FolderShare.permission, FolderShare.id)
        .join(FolderShare, FolderShare.folder_id == Folder.id)
        .where(FolderShare.user_id == caller.id, Folder.is_deleted.is_(False))
        .order_by(Folder.updated_at.desc())
    )
    return [folder_dict(f, permission, share_id) for f, permission, share_id in result.all()]


# Sharing

async def share_folder(db: AsyncSession, caller: Caller, folder_id: int, target_user_id: int, permission: str) -> None:
    folder = await _get_folder(db, folder_id)
    if folder.user_id != caller.id:
        raise Forbidden("Only the owner can share a folder")
    if target_user_id == caller.id:
        raise ValidationFailed("Cannot share a folder with its owner")
    if await db.get(User, target_user_id) is None:
        raise NotFound("User not found")

    result = await db.execute(
        select(FolderShare).where(FolderShare.folder_id == folder.id, FolderShare.user_id == target_user_id)
    )
    share = result.scalar_one_or_none()
    if share is None:
        db.add(FolderShare(folder_id=folder.id, user_id=target_user_id, permission=permission))
    else:
        share.permission = permission

    send_notification(
        db,
        target_user_id,
        KIND_DRIVE_SHARE,
        "Nova pasta compartilhada",
        f"Uma pasta foi compartilhada com você: {folder.name}",
        "diretorio",
    )
    await db.commit()
    logger.info("User {} shared folder {} with user {} ({})", caller.id, folder_id, target_user_id, permission)


async def list_shares(db: AsyncSession, caller: Caller, folder_id: int) -> List[dict]:
    await _readable_folder(db, caller, folder_id)
    result = await db.execute(
        select(FolderShare, User.name, User.email, User.avatar)
        .join(User, User.id == FolderShare.user_id)
        .where(FolderShare.folder_id == folder_id)
        .order_by(FolderShare.id)
    )
    return [
        {
            "id": share.id,
            "folder_id": share.folder_id,
            "user_id": share.user_id,
            "permission": share.permission,
            "created_at": share.created_at,
            "user_name": name,
            "user_email": email,
            "user_avatar": avatar,
        }
        for share, name, email, avatar in result.all()
    ]


async def remove_share(db: AsyncSession, caller: Caller, folder_id: int, target_user_id: int) -> None:
    folder = await _get_folder(db, folder_id)
    if not can_remove_share(caller, folder, target_user_id):
        raise Forbidden()
    await db.execute(
        delete(FolderShare).where(FolderShare.folder_id == folder_id, FolderShare.user_id == target_user_id)
    )
    await db.commit()
    logger.info("User {} removed share of folder {} for user {}", caller.id, folder_id, target_user_id)
