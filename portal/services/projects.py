from typing import List, Optional, Tuple

from loguru import logger
from sqlalchemy import case, delete, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import (
    Caller,
    can_delete_project,
    can_manage_project,
    can_read_project,
)
from portal.core.errors import Forbidden, NotFound, ValidationFailed
from portal.models.project import (
    MEMBER_ADMIN,
    MEMBER_MEMBER,
    MEMBER_OWNER,
    Project,
    ProjectMember,
)
from portal.models.task import STATUS_DONE, STATUS_IN_PROGRESS, STATUS_REVIEW, STATUS_TODO, ProjectTask, TaskSubtask
from portal.models.user import User
from portal.schemas.project import ProjectCreate, ProjectResponse, ProjectUpdate
from portal.services.notifications import KIND_PROJECT_INVITE, send_notification

# Columns an update may not null out
_REQUIRED_FIELDS = {"name", "status", "priority", "visibility", "color"}


async def member_role(db: AsyncSession, project_id: int, user_id: int) -> Optional[str]:
    result = await db.execute(
        select(ProjectMember.role).where(
            ProjectMember.project_id == project_id,
            ProjectMember.user_id == user_id,
        )
    )
    return result.scalar_one_or_none()


async def ensure_users_exist(db: AsyncSession, user_ids) -> None:
    wanted = set(user_ids)
    if not wanted:
        return
    result = await db.execute(select(User.id).where(User.id.in_(wanted)))
    missing = wanted - set(result.scalars().all())
    if missing:
        raise ValidationFailed(f"Unknown user id(s): {', '.join(str(i) for i in sorted(missing))}")


async def load_project(db: AsyncSession, caller: Caller, project_id: int) -> Tuple[Project, Optional[str]]:
    """Fetch a project and the caller's member role, checking read access."""
    project = await db.get(Project, project_id)
    if project is None:
        raise NotFound("Project not found")
    role = await member_role(db, project.id, caller.id)
    if not can_read_project(caller, project, role):
        raise Forbidden()
    return project, role


async def _managed_project(db: AsyncSession, caller: Caller, project_id: int) -> Project:
    project, role = await load_project(db, caller, project_id)
    if not can_manage_project(caller, project, role):
        raise Forbidden()
    return project


def _invite(db: AsyncSession, user_id: int, project: Project) -> None:
    send_notification(
        db,
        user_id,
        KIND_PROJECT_INVITE,
        "Convite de Projeto",
        f"Você foi adicionado ao projeto: {project.name}",
        "projetos",
    )


def _project_dict(project: Project, owner_name=None, owner_avatar=None, **counts) -> dict:
    data = ProjectResponse.model_validate(project).model_dump()
    data.update(owner_name=owner_name, owner_avatar=owner_avatar, **counts)
    return data


async def list_projects(db: AsyncSession, caller: Caller) -> List[dict]:
    member_count = (
        select(func.count(ProjectMember.id))
        .where(ProjectMember.project_id == Project.id)
        .correlate(Project)
        .scalar_subquery()
    )
    task_count = (
        select(func.count(ProjectTask.id))
        .where(ProjectTask.project_id == Project.id)
        .correlate(Project)
        .scalar_subquery()
    )
    completed = (
        select(func.count(ProjectTask.id))
        .where(ProjectTask.project_id == Project.id, ProjectTask.status == STATUS_DONE)
        .correlate(Project)
        .scalar_subquery()
    )
    query = (
        select(Project, User.name, User.avatar, member_count, task_count, completed)
        .join(User, User.id == Project.owner_id)
        .order_by(Project.created_at.desc(), Project.id.desc())
    )
    if not caller.is_admin:
        is_member = exists().where(ProjectMember.project_id == Project.id, ProjectMember.user_id == caller.id)
        query = query.where(or_(Project.visibility == "public", Project.owner_id == caller.id, is_member))

    result = await db.execute(query)
    return [
        _project_dict(
            project,
            owner_name,
            owner_avatar,
            member_count=members or 0,
            task_count=tasks or 0,
            completed_tasks=done or 0,
        )
        for project, owner_name, owner_avatar, members, tasks, done in result.all()
    ]


async def get_project(db: AsyncSession, caller: Caller, project_id: int) -> dict:
    project, _ = await load_project(db, caller, project_id)
    owner = await db.get(User, project.owner_id)
    return _project_dict(project, owner.name if owner else None, owner.avatar if owner else None)


async def project_stats(db: AsyncSession, caller: Caller, project_id: int) -> dict:
    await load_project(db, caller, project_id)

    def count_status(status):
        return func.coalesce(func.sum(case((ProjectTask.status == status, 1), else_=0)), 0)

    result = await db.execute(
        select(
            func.count(ProjectTask.id),
            count_status(STATUS_DONE),
            count_status(STATUS_IN_PROGRESS),
            count_status(STATUS_TODO),
            count_status(STATUS_REVIEW),
        ).where(ProjectTask.project_id == project_id)
    )
    total, done, in_progress, todo, review = result.one()
    return {
        "total_tasks": total,
        "completed_tasks": done,
        "in_progress_tasks": in_progress,
        "todo_tasks": todo,
        "review_tasks": review,
    }


async def create_project(db: AsyncSession, caller: Caller, payload: ProjectCreate) -> int:
    if not payload.name.strip():
        raise ValidationFailed("Project name is required")

    await ensure_users_exist(db, payload.members)

    project = Project(owner_id=caller.id, **payload.model_dump(exclude={"members"}))
    db.add(project)
    await db.flush()

    # Exactly one owner row; the creator is never added twice
    db.add(ProjectMember(project_id=project.id, user_id=caller.id, role=MEMBER_OWNER))
    added = {caller.id}
    for user_id in payload.members:
        if user_id in added:
            continue
        added.add(user_id)
        db.add(ProjectMember(project_id=project.id, user_id=user_id, role=MEMBER_MEMBER))
        _invite(db, user_id, project)

    await db.commit()
    logger.info("User {} created project {} with {} member(s)", caller.id, project.id, len(added))
    return project.id


async def update_project(db: AsyncSession, caller: Caller, project_id: int, payload: ProjectUpdate) -> None:
    project = await _managed_project(db, caller, project_id)
    for field, value in payload.model_dump(exclude_unset=True).items():
        if value is None and field in _REQUIRED_FIELDS:
            continue
        setattr(project, field, value)
    await db.commit()
    logger.info("User {} updated project {}", caller.id, project_id)


async def archive_project(db: AsyncSession, caller: Caller, project_id: int, is_archived: bool) -> None:
    project = await _managed_project(db, caller, project_id)
    project.is_archived = is_archived
    await db.commit()


async def delete_project(db: AsyncSession, caller: Caller, project_id: int) -> None:
    project = await db.get(Project, project_id)
    if project is None:
        raise NotFound("Project not found")
    if not can_delete_project(caller, project):
        raise Forbidden()
    await db.execute(delete(Project).where(Project.id == project_id))
    await db.commit()
    logger.info("User {} deleted project {}", caller.id, project_id)


async def duplicate_project(db: AsyncSession, caller: Caller, project_id: int, new_name: Optional[str] = None) -> int:
    original, _ = await load_project(db, caller, project_id)

    copy = Project(
        owner_id=caller.id,
        name=new_name or f"{original.name} (Cópia)",
        description=original.description,
        priority=original.priority,
        start_date=original.start_date,
        end_date=original.end_date,
        visibility=original.visibility,
        color=original.color,
    )
    db.add(copy)
    await db.flush()
    db.add(ProjectMember(project_id=copy.id, user_id=caller.id, role=MEMBER_OWNER))

    tasks = (
        await db.execute(select(ProjectTask).where(ProjectTask.project_id == original.id).order_by(ProjectTask.id))
    ).scalars().all()
    for task in tasks:
        task_copy = ProjectTask(
            project_id=copy.id,
            title=task.title,
            description=task.description,
            created_by=caller.id,
            status=STATUS_TODO,
            priority=task.priority,
            due_date=task.due_date,
            estimated_hours=task.estimated_hours,
            order_index=task.order_index,
        )
        db.add(task_copy)
        await db.flush()

        subtasks = (
            await db.execute(select(TaskSubtask.title).where(TaskSubtask.task_id == task.id).order_by(TaskSubtask.id))
        ).scalars().all()
        for title in subtasks:
            db.add(TaskSubtask(task_id=task_copy.id, title=title))

    await db.commit()
    logger.info("User {} duplicated project {} as {}", caller.id, project_id, copy.id)
    return copy.id


# Members

async def list_members(db: AsyncSession, caller: Caller, project_id: int) -> List[dict]:
    await load_project(db, caller, project_id)
    # owner, admin, member, viewer
    role_rank = case(
        (ProjectMember.role == MEMBER_OWNER, 0),
        (ProjectMember.role == MEMBER_ADMIN, 1),
        (ProjectMember.role == MEMBER_MEMBER, 2),
        else_=3,
    )
    result = await db.execute(
        select(ProjectMember, User.name, User.avatar, User.position)
        .join(User, User.id == ProjectMember.user_id)
        .where(ProjectMember.project_id == project_id)
        .order_by(role_rank, User.name.asc())
    )
    return [
        {
            "id": member.id,
            "project_id": member.project_id,
            "user_id": member.user_id,
            "role": member.role,
            "joined_at": member.joined_at,
            "user_name": name,
            "user_avatar": avatar,
            "user_position": position,
        }
        for member, name, avatar, position in result.all()
    ]


async def add_member(db: AsyncSession, caller: Caller, project_id: int, user_id: int, role: str = MEMBER_MEMBER) -> None:
    project = await _managed_project(db, caller, project_id)
    if await db.get(User, user_id) is None:
        raise NotFound("User not found")
    if await member_role(db, project.id, user_id) is not None:
        raise ValidationFailed("User is already a member of this project")
    if role == MEMBER_OWNER:
        raise ValidationFailed("A project has a single owner")

    db.add(ProjectMember(project_id=project.id, user_id=user_id, role=role))
    _invite(db, user_id, project)
    await db.commit()
    logger.info("User {} added user {} to project {} as {}", caller.id, user_id, project_id, role)


async def _member_row(db: AsyncSession, project_id: int, user_id: int) -> ProjectMember:
    result = await db.execute(
        select(ProjectMember).where(ProjectMember.project_id == project_id, ProjectMember.user_id == user_id)
    )
    member = result.scalar_one_or_none()
    if member is None:
        raise NotFound("Member not found")
    return member


async def update_member_role(db: AsyncSession, caller: Caller, project_id: int, user_id: int, role: str) -> None:
    project = await _managed_project(db, caller, project_id)
    member = await _member_row(db, project.id, user_id)
    if member.role == MEMBER_OWNER or role == MEMBER_OWNER:
        raise ValidationFailed("The project owner cannot be changed")
    member.role = role
    await db.commit()


async def remove_member(db: AsyncSession, caller: Caller, project_id: int, user_id: int) -> None:
    project = await _managed_project(db, caller, project_id)
    member = await _member_row(db, project.id, user_id)
    if member.role == MEMBER_OWNER:
        raise ValidationFailed("The project owner cannot be removed")
    await db.delete(member)
    await db.commit()
    logger.info("User {} removed user {} from project {}", caller.id, user_id, project_id)
