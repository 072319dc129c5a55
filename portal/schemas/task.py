from pydantic import BaseModel, field_validator
from datetime import date, datetime
from typing import Literal, Optional, List

TaskStatus = Literal["todo", "in_progress", "review", "done"]


class SubtaskIn(BaseModel):
    title: str
    is_completed: bool = False


def _normalize_subtasks(value):
    # Clients send either plain titles or {"title": ...} objects
    if value is None:
        return value
    return [{"title": item} if isinstance(item, str) else item for item in value]


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None
    assignees: List[int] = []
    status: TaskStatus = "todo"
    priority: str = "medium"
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    subtasks: List[SubtaskIn] = []

    @field_validator("subtasks", mode="before")
    @classmethod
    def normalize_subtasks(cls, value):
        return _normalize_subtasks(value)


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    assignees: Optional[List[int]] = None
    status: Optional[TaskStatus] = None
    priority: Optional[str] = None
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    subtasks: Optional[List[SubtaskIn]] = None

    @field_validator("subtasks", mode="before")
    @classmethod
    def normalize_subtasks(cls, value):
        return _normalize_subtasks(value)


class TaskStatusUpdate(BaseModel):
    status: TaskStatus
    order_index: Optional[int] = None


class SubtaskToggle(BaseModel):
    is_completed: bool


class AssigneeResponse(BaseModel):
    id: int
    name: str
    avatar: Optional[str] = None


class SubtaskResponse(BaseModel):
    id: int
    title: str
    is_completed: bool


class TaskResponse(BaseModel):
    id: int
    project_id: int
    title: str
    description: Optional[str] = None
    assigned_to: Optional[int] = None
    created_by: int
    status: str
    priority: str
    due_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    order_index: int
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    assigned_name: Optional[str] = None
    creator_name: Optional[str] = None
    comment_count: int = 0
    assignees: List[AssigneeResponse] = []
    subtasks: List[SubtaskResponse] = []


class TaskCommentCreate(BaseModel):
    content: str


class TaskCommentResponse(BaseModel):
    id: int
    task_id: int
    user_id: int
    content: str
    created_at: datetime
    updated_at: Optional[datetime] = None
    author_name: Optional[str] = None
    author_avatar: Optional[str] = None
    author_role: Optional[str] = None
