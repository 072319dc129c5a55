from pydantic import BaseModel, ConfigDict
from datetime import date, datetime
from typing import Literal, Optional, List

Visibility = Literal["public", "private", "team"]
MemberRole = Literal["owner", "admin", "member", "viewer"]


class ProjectCreate(BaseModel):
    name: str
    description: Optional[str] = None
    status: str = "active"
    priority: str = "medium"
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    visibility: Visibility = "public"
    color: str = "#3B82F6"
    members: List[int] = []


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    visibility: Optional[Visibility] = None
    color: Optional[str] = None


class ArchiveRequest(BaseModel):
    is_archived: bool


class DuplicateRequest(BaseModel):
    new_name: Optional[str] = None


class ProjectResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: int
    name: str
    description: Optional[str] = None
    status: str
    priority: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    visibility: str
    color: str
    is_archived: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
    owner_name: Optional[str] = None
    owner_avatar: Optional[str] = None
    member_count: Optional[int] = None
    task_count: Optional[int] = None
    completed_tasks: Optional[int] = None


class ProjectStats(BaseModel):
    total_tasks: int = 0
    completed_tasks: int = 0
    in_progress_tasks: int = 0
    todo_tasks: int = 0
    review_tasks: int = 0


class MemberAdd(BaseModel):
    user_id: int
    role: MemberRole = "member"


class MemberRoleUpdate(BaseModel):
    role: MemberRole


class MemberResponse(BaseModel):
    id: int
    project_id: int
    user_id: int
    role: str
    joined_at: datetime
    user_name: Optional[str] = None
    user_avatar: Optional[str] = None
    user_position: Optional[str] = None
