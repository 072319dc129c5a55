from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.project import (
    ArchiveRequest,
    DuplicateRequest,
    MemberAdd,
    MemberResponse,
    MemberRoleUpdate,
    ProjectCreate,
    ProjectResponse,
    ProjectStats,
    ProjectUpdate,
)
from portal.schemas.task import TaskCreate, TaskResponse
from portal.services import projects, tasks

router = APIRouter()


@router.get("", response_model=List[ProjectResponse])
async def list_projects(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Projects the caller can see, newest first"""
    return await projects.list_projects(db, caller)


@router.post("")
async def create_project(payload: ProjectCreate, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    project_id = await projects.create_project(db, caller, payload)
    return {"success": True, "id": project_id}


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await projects.get_project(db, caller, project_id)


@router.put("/{project_id}")
async def update_project(
    project_id: int,
    payload: ProjectUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await projects.update_project(db, caller, project_id, payload)
    return {"success": True}


@router.patch("/{project_id}/archive")
async def archive_project(
    project_id: int,
    payload: ArchiveRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await projects.archive_project(db, caller, project_id, payload.is_archived)
    return {"success": True}


@router.delete("/{project_id}")
async def delete_project(project_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await projects.delete_project(db, caller, project_id)
    return {"success": True}


@router.post("/{project_id}/duplicate")
async def duplicate_project(
    project_id: int,
    payload: DuplicateRequest,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Copy a project with its tasks and subtasks; the caller owns the copy"""
    new_id = await projects.duplicate_project(db, caller, project_id, payload.new_name)
    return {"success": True, "id": new_id}


@router.get("/{project_id}/stats", response_model=ProjectStats)
async def project_stats(project_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await projects.project_stats(db, caller, project_id)


# Members

@router.get("/{project_id}/members", response_model=List[MemberResponse])
async def list_members(project_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await projects.list_members(db, caller, project_id)


@router.post("/{project_id}/members")
async def add_member(
    project_id: int,
    payload: MemberAdd,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await projects.add_member(db, caller, project_id, payload.user_id, payload.role)
    return {"success": True}


@router.put("/{project_id}/members/{user_id}")
async def update_member_role(
    project_id: int,
    user_id: int,
    payload: MemberRoleUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await projects.update_member_role(db, caller, project_id, user_id, payload.role)
    return {"success": True}


@router.delete("/{project_id}/members/{user_id}")
async def remove_member(
    project_id: int,
    user_id: int,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await projects.remove_member(db, caller, project_id, user_id)
    return {"success": True}


# Tasks

@router.get("/{project_id}/tasks", response_model=List[TaskResponse])
async def list_tasks(project_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await tasks.list_tasks(db, caller, project_id)


@router.post("/{project_id}/tasks")
async def create_task(
    project_id: int,
    payload: TaskCreate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    task_id = await tasks.create_task(db, caller, project_id, payload)
    return {"success": True, "id": task_id}
