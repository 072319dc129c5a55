"""Project tasks, subtasks and task comments.

Task status is a small state machine: every status in TASK_STATUSES is
reachable from every other one, and `completed_at` tracks whether the task is
currently done.
"""
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import aliased

from portal.core.access import Caller, can_contribute_to_project, can_modify_post
from portal.core.errors import Forbidden, NotFound, ValidationFailed
from portal.core.time import utcnow
from portal.models.project import Project
from portal.models.task import (
    STATUS_DONE,
    TASK_STATUSES,
    ProjectTask,
    TaskAssignee,
    TaskComment,
    TaskSubtask,
)
from portal.models.user import User
from portal.schemas.task import SubtaskIn, TaskCreate, TaskUpdate
from portal.services.notifications import KIND_TASK_ASSIGNMENT, send_notification
from portal.services.projects import ensure_users_exist, load_project


def apply_status(task: ProjectTask, status: str, now: Optional[datetime] = None) -> None:
    """Move `task` to `status`, keeping `completed_at` consistent."""
    if status not in TASK_STATUSES:
        raise ValidationFailed(f"Invalid task status: {status}")
    if status == STATUS_DONE:
        if task.status != STATUS_DONE or task.completed_at is None:
            task.completed_at = now or utcnow()
    else:
        task.completed_at = None
    task.status = status


def distinct_assignees(user_ids: Iterable[int]) -> List[int]:
    assignees = []
    for user_id in user_ids:
        if user_id not in assignees:
            assignees.append(user_id)
    return assignees


def primary_assignee(user_ids: Iterable[int]) -> Optional[int]:
    """The first assignee in the order they were given."""
    assignees = distinct_assignees(user_ids)
    return assignees[0] if assignees else None


def _notify_assignment(db: AsyncSession, user_id: int, title: str) -> None:
    send_notification(
        db,
        user_id,
        KIND_TASK_ASSIGNMENT,
        "Nova tarefa atribuída",
        f"Você foi atribuído à tarefa: {title}",
        "projetos",
    )


def _subtask_titles(subtasks: List[SubtaskIn]) -> List[str]:
    return [s.title.strip() for s in subtasks if s.title and s.title.strip()]


async def _get_task(db: AsyncSession, task_id: int) -> ProjectTask:
    task = await db.get(ProjectTask, task_id)
    if task is None:
        raise NotFound("Task not found")
    return task


async def _readable_task(db: AsyncSession, caller: Caller, task_id: int) -> Tuple[ProjectTask, Project]:
    task = await _get_task(db, task_id)
    project, _ = await load_project(db, caller, task.project_id)
    return task, project


async def _contributable_project(db: AsyncSession, caller: Caller, project_id: int) -> Project:
    project, role = await load_project(db, caller, project_id)
    if not can_contribute_to_project(caller, project, role):
        raise Forbidden()
    return project


async def _task_details(db: AsyncSession, tasks: List[ProjectTask]) -> List[dict]:
    if not tasks:
        return []
    ids = [t.id for t in tasks]

    assignees: Dict[int, List[dict]] = {}
    rows = await db.execute(
        select(TaskAssignee.task_id, User.id, User.name, User.avatar)
        .join(User, User.id == TaskAssignee.user_id)
        .where(TaskAssignee.task_id.in_(ids))
        .order_by(TaskAssignee.id)
    )
    for task_id, user_id, name, avatar in rows.all():
        assignees.setdefault(task_id, []).append({"id": user_id, "name": name, "avatar": avatar})

    subtasks: Dict[int, List[dict]] = {}
    rows = await db.execute(select(TaskSubtask).where(TaskSubtask.task_id.in_(ids)).order_by(TaskSubtask.id))
    for subtask in rows.scalars().all():
        subtasks.setdefault(subtask.task_id, []).append(
            {"id": subtask.id, "title": subtask.title, "is_completed": subtask.is_completed}
        )

    rows = await db.execute(
        select(TaskComment.task_id, func.count(TaskComment.id))
        .where(TaskComment.task_id.in_(ids))
        .group_by(TaskComment.task_id)
    )
    comment_counts = dict(rows.all())

    user_ids = {t.created_by for t in tasks} | {t.assigned_to for t in tasks if t.assigned_to}
    rows = await db.execute(select(User.id, User.name).where(User.id.in_(user_ids)))
    names = dict(rows.all())

    details = []
    for task in tasks:
        details.append({
            "id": task.id,
            "project_id": task.project_id,
            "title": task.title,
            "description": task.description,
            "assigned_to": task.assigned_to,
            "created_by": task.created_by,
            "status": task.status,
            "priority": task.priority,
            "due_date": task.due_date,
            "estimated_hours": task.estimated_hours,
            "actual_hours": task.actual_hours,
            "order_index": task.order_index,
            "completed_at": task.completed_at,
            "created_at": task.created_at,
            "updated_at": task.updated_at,
            "assigned_name": names.get(task.assigned_to),
            "creator_name": names.get(task.created_by),
            "comment_count": comment_counts.get(task.id, 0),
            "assignees": assignees.get(task.id, []),
            "subtasks": subtasks.get(task.id, []),
        })
    return details


async def list_tasks(db: AsyncSession, caller: Caller, project_id: int) -> List[dict]:
    await load_project(db, caller, project_id)
    result = await db.execute(
        select(ProjectTask)
        .where(ProjectTask.project_id == project_id)
        .order_by(ProjectTask.order_index.asc(), ProjectTask.created_at.desc(), ProjectTask.id.desc())
    )
    return await _task_details(db, list(result.scalars().all()))


async def get_task(db: AsyncSession, caller: Caller, task_id: int) -> dict:
    task, _ = await _readable_task(db, caller, task_id)
    return (await _task_details(db, [task]))[0]


async def create_task(db: AsyncSession, caller: Caller, project_id: int, payload: TaskCreate) -> int:
    project = await _contributable_project(db, caller, project_id)
    if not payload.title.strip():
        raise ValidationFailed("Task title is required")

    assignees = distinct_assignees(payload.assignees)
    await ensure_users_exist(db, assignees)

    task = ProjectTask(
        project_id=project.id,
        title=payload.title.strip(),
        description=payload.description,
        assigned_to=primary_assignee(assignees),
        created_by=caller.id,
        priority=payload.priority,
        due_date=payload.due_date,
        estimated_hours=payload.estimated_hours,
    )
    apply_status(task, payload.status)
    db.add(task)
    await db.flush()

    for user_id in assignees:
        db.add(TaskAssignee(task_id=task.id, user_id=user_id))
        if user_id != caller.id:
            _notify_assignment(db, user_id, task.title)
    for title in _subtask_titles(payload.subtasks):
        db.add(TaskSubtask(task_id=task.id, title=title))

    await db.commit()
    logger.info("User {} created task {} in project {}", caller.id, task.id, project.id)
    return task.id


async def update_task(db: AsyncSession, caller: Caller, task_id: int, payload: TaskUpdate) -> None:
    task = await _get_task(db, task_id)
    await _contributable_project(db, caller, task.project_id)

    fields = payload.model_dump(exclude_unset=True, exclude={"assignees", "subtasks", "status"})
    if "title" in fields:
        if not fields["title"] or not fields["title"].strip():
            raise ValidationFailed("Task title is required")
        fields["title"] = fields["title"].strip()
    if fields.get("priority", "") is None:
        del fields["priority"]
    for field, value in fields.items():
        setattr(task, field, value)

    if payload.status is not None:
        apply_status(task, payload.status)

    if payload.assignees is not None:
        assignees = distinct_assignees(payload.assignees)
        await ensure_users_exist(db, assignees)
        # Read the previous set before it is replaced
        result = await db.execute(select(TaskAssignee.user_id).where(TaskAssignee.task_id == task.id))
        previous = set(result.scalars().all())

        await db.execute(delete(TaskAssignee).where(TaskAssignee.task_id == task.id))
        for user_id in assignees:
            db.add(TaskAssignee(task_id=task.id, user_id=user_id))
            if user_id not in previous:
                _notify_assignment(db, user_id, task.title)
        task.assigned_to = primary_assignee(assignees)

    if payload.subtasks is not None:
        await db.execute(delete(TaskSubtask).where(TaskSubtask.task_id == task.id))
        for title in _subtask_titles(payload.subtasks):
            db.add(TaskSubtask(task_id=task.id, title=title))

    task.updated_at = utcnow()
    await db.commit()
    logger.info("User {} updated task {}", caller.id, task_id)


async def update_task_status(
    db: AsyncSession,
    caller: Caller,
    task_id: int,
    status: str,
    order_index: Optional[int] = None,
) -> None:
    task = await _get_task(db, task_id)
    await _contributable_project(db, caller, task.project_id)
    apply_status(task, status)
    if order_index is not None:
        task.order_index = order_index
    await db.commit()


async def delete_task(db: AsyncSession, caller: Caller, task_id: int) -> None:
    task = await _get_task(db, task_id)
    await _contributable_project(db, caller, task.project_id)
    await db.execute(delete(ProjectTask).where(ProjectTask.id == task_id))
    await db.commit()
    logger.info("User {} deleted task {}", caller.id, task_id)


async def toggle_subtask(db: AsyncSession, caller: Caller, subtask_id: int, is_completed: bool) -> None:
    subtask = await db.get(TaskSubtask, subtask_id)
    if subtask is None:
        raise NotFound("Subtask not found")
    task = await _get_task(db, subtask.task_id)
    await _contributable_project(db, caller, task.project_id)
    subtask.is_completed = is_completed
    await db.commit()


# Comments

async def list_task_comments(db: AsyncSession, caller: Caller, task_id: int) -> List[dict]:
    await _readable_task(db, caller, task_id)
    author = aliased(User)
    result = await db.execute(
        select(TaskComment, author.name, author.avatar, author.role)
        .join(author, author.id == TaskComment.user_id)
        .where(TaskComment.task_id == task_id)
        .order_by(TaskComment.created_at.asc(), TaskComment.id.asc())
    )
    return [
        {
            "id": comment.id,
            "task_id": comment.task_id,
            "user_id": comment.user_id,
            "content": comment.content,
            "created_at": comment.created_at,
            "updated_at": comment.updated_at,
            "author_name": name,
            "author_avatar": avatar,
            "author_role": role,
        }
        for comment, name, avatar, role in result.all()
    ]


async def add_task_comment(db: AsyncSession, caller: Caller, task_id: int, content: str) -> int:
    task = await _get_task(db, task_id)
    await _contributable_project(db, caller, task.project_id)
    if not content or not content.strip():
        raise ValidationFailed("Content is required")
    comment = TaskComment(task_id=task.id, user_id=caller.id, content=content)
    db.add(comment)
    await db.commit()
    return comment.id


async def _get_task_comment(db: AsyncSession, comment_id: int) -> TaskComment:
    comment = await db.get(TaskComment, comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    return comment


async def update_task_comment(db: AsyncSession, caller: Caller, comment_id: int, content: str) -> None:
    comment = await _get_task_comment(db, comment_id)
    if not can_modify_post(caller, comment.user_id):
        raise Forbidden()
    if not content or not content.strip():
        raise ValidationFailed("Content is required")
    comment.content = content
    await db.commit()


async def delete_task_comment(db: AsyncSession, caller: Caller, comment_id: int) -> None:
    comment = await _get_task_comment(db, comment_id)
    if not can_modify_post(caller, comment.user_id):
        raise Forbidden()
    await db.delete(comment)
    await db.commit()
