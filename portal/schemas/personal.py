from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class ShortcutBase(BaseModel):
    name: str
    description: Optional[str] = None
    url: str
    icon_name: Optional[str] = None
    color: Optional[str] = None
    is_favorite: bool = False


class ShortcutCreate(ShortcutBase):
    pass


class ShortcutUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    icon_name: Optional[str] = None
    color: Optional[str] = None


class FavoriteToggle(BaseModel):
    is_favorite: bool


class ShortcutResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: Optional[str] = None
    url: str
    icon_name: str
    color: str
    is_favorite: bool
    created_at: datetime


class TodoCreate(BaseModel):
    text: str


class TodoUpdate(BaseModel):
    completed: bool


class TodoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    text: str
    completed: bool
    created_at: datetime


class NoteSave(BaseModel):
    content: Optional[str] = ""


class NoteResponse(BaseModel):
    content: str = ""
    updated_at: Optional[datetime] = None
