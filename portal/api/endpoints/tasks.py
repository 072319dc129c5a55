from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.task import (
    SubtaskToggle,
    TaskCommentCreate,
    TaskCommentResponse,
    TaskResponse,
    TaskStatusUpdate,
    TaskUpdate,
)
from portal.services import tasks

router = APIRouter()
subtasks_router = APIRouter()
comments_router = APIRouter()


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(task_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await tasks.get_task(db, caller, task_id)


@router.put("/{task_id}")
async def update_task(
    task_id: int,
    payload: TaskUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Edit a task; assignees and subtasks, when given, replace the current ones"""
    await tasks.update_task(db, caller, task_id, payload)
    return {"success": True}


@router.patch("/{task_id}/status")
async def update_task_status(
    task_id: int,
    payload: TaskStatusUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Board drag and drop"""
    await tasks.update_task_status(db, caller, task_id, payload.status, payload.order_index)
    return {"success": True}


@router.delete("/{task_id}")
async def delete_task(task_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await tasks.delete_task(db, caller, task_id)
    return {"success": True}


@router.get("/{task_id}/comments", response_model=List[TaskCommentResponse])
async def list_task_comments(task_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await tasks.list_task_comments(db, caller, task_id)


@router.post("/{task_id}/comments")
async def add_task_comment(
    task_id: int,
    payload: TaskCommentCreate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    comment_id = await tasks.add_task_comment(db, caller, task_id, payload.content)
    return {"success": True, "id": comment_id}


@subtasks_router.patch("/{subtask_id}/toggle")
async def toggle_subtask(
    subtask_id: int,
    payload: SubtaskToggle,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await tasks.toggle_subtask(db, caller, subtask_id, payload.is_completed)
    return {"success": True}


@comments_router.put("/{comment_id}")
async def update_task_comment(
    comment_id: int,
    payload: TaskCommentCreate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await tasks.update_task_comment(db, caller, comment_id, payload.content)
    return {"success": True}


@comments_router.delete("/{comment_id}")
async def delete_task_comment(comment_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await tasks.delete_task_comment(db, caller, comment_id)
    return {"success": True}
