from fastapi import APIRouter

from portal.api.endpoints import (
    admin,
    comments,
    drive,
    events,
    holidays,
    mural,
    notes,
    notifications,
    posts,
    projects,
    public,
    search,
    shortcuts,
    tasks,
    todos,
    users,
    warnings,
)

api_router = APIRouter()

api_router.include_router(posts.router, prefix="/posts", tags=["mural"])
api_router.include_router(comments.router, prefix="/comments", tags=["mural"])
api_router.include_router(mural.router, prefix="/mural", tags=["mural"])
api_router.include_router(events.router, prefix="/events", tags=["calendar"])
api_router.include_router(holidays.router, prefix="/holidays", tags=["calendar"])
api_router.include_router(drive.router, prefix="/drive", tags=["drive"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["projects"])
api_router.include_router(tasks.subtasks_router, prefix="/subtasks", tags=["projects"])
api_router.include_router(tasks.comments_router, prefix="/task-comments", tags=["projects"])
api_router.include_router(shortcuts.router, prefix="/shortcuts", tags=["dashboard"])
api_router.include_router(shortcuts.system_router, prefix="/system-shortcuts", tags=["dashboard"])
api_router.include_router(todos.router, prefix="/todos", tags=["dashboard"])
api_router.include_router(notes.router, prefix="/notes", tags=["dashboard"])
api_router.include_router(warnings.router, prefix="/warnings", tags=["dashboard"])
api_router.include_router(notifications.router, prefix="/notifications", tags=["notifications"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(search.router, prefix="/search", tags=["search"])
api_router.include_router(admin.router, prefix="/admin", tags=["admin"])
api_router.include_router(public.router, prefix="/public", tags=["public"])
