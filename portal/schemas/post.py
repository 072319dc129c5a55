from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional, List


class AttachmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    filename: str
    original_name: str
    file_type: str
    file_size: int
    is_image: bool


class PostUpdate(BaseModel):
    content: str


class PostResponse(BaseModel):
    id: int
    user_id: int
    type: str = "post"
    content: str
    is_urgent: bool
    created_at: datetime
    author_name: Optional[str] = None
    author_role: Optional[str] = None
    author_avatar: Optional[str] = None
    like_count: int = 0
    comment_count: int = 0
    attachments: List[AttachmentResponse] = []


class CommentCreate(BaseModel):
    content: str


class CommentUpdate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: int
    post_id: int
    user_id: int
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    author_name: Optional[str] = None
    author_role: Optional[str] = None
    author_avatar: Optional[str] = None
