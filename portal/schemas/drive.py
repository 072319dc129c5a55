from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Literal, Optional


class FolderCreate(BaseModel):
    name: str
    parent_id: Optional[int] = None


class RenameRequest(BaseModel):
    name: str


class FavoriteRequest(BaseModel):
    is_favorite: bool


class ShareRequest(BaseModel):
    target_user_id: int
    permission: Literal["READ", "WRITE"] = "READ"


class FolderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    parent_id: Optional[int] = None
    name: str
    is_favorite: bool
    is_deleted: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    permission: Optional[str] = None  # OWNER, READ or WRITE for the caller
    share_id: Optional[int] = None
    item_type: str = "folder"


class FileResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    folder_id: Optional[int] = None
    filename: str
    original_name: str
    file_type: Optional[str] = None
    file_size: int
    is_favorite: bool
    is_deleted: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    item_type: str = "file"


class ShareResponse(BaseModel):
    id: int
    folder_id: int
    user_id: int
    permission: str
    created_at: datetime
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_avatar: Optional[str] = None


class StorageStats(BaseModel):
    used: int
    quota: int
