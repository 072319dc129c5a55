from .user import User
from .post import Post, PostAttachment, PostLike, PostComment
from .event import CalendarEvent, EventShare
from .drive import Folder, FolderShare, DriveFile
from .project import Project, ProjectMember
from .task import ProjectTask, TaskAssignee, TaskSubtask, TaskComment
from .personal import UserShortcut, SystemShortcut, Todo, UserNote
from .setting import SystemSetting
from .notification import Notification
from .warning import DashboardWarning

__all__ = [
    "User",
    "Post", "PostAttachment", "PostLike", "PostComment",
    "CalendarEvent", "EventShare",
    "Folder", "FolderShare", "DriveFile",
    "Project", "ProjectMember",
    "ProjectTask", "TaskAssignee", "TaskSubtask", "TaskComment",
    "UserShortcut", "SystemShortcut", "Todo", "UserNote",
    "SystemSetting",
    "Notification",
    "DashboardWarning",
]
