from .user import UserResponse, AdminUserResponse
from .post import PostResponse, CommentResponse
from .event import EventCreate, EventUpdate, EventResponse
from .drive import FolderResponse, FileResponse, ShareResponse
from .project import ProjectCreate, ProjectUpdate, ProjectResponse
from .task import TaskCreate, TaskUpdate, TaskResponse
from .notification import NotificationResponse

__all__ = [
    "UserResponse", "AdminUserResponse",
    "PostResponse", "CommentResponse",
    "EventCreate", "EventUpdate", "EventResponse",
    "FolderResponse", "FileResponse", "ShareResponse",
    "ProjectCreate", "ProjectUpdate", "ProjectResponse",
    "TaskCreate", "TaskUpdate", "TaskResponse",
    "NotificationResponse",
]
