from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.personal import TodoCreate, TodoResponse, TodoUpdate
from portal.services import personal

router = APIRouter()


@router.get("", response_model=List[TodoResponse])
async def list_todos(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await personal.list_todos(db, caller)


@router.post("")
async def create_todo(payload: TodoCreate, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    todo_id = await personal.create_todo(db, caller, payload.text)
    return {"success": True, "id": todo_id}


@router.patch("/{todo_id}")
async def update_todo(
    todo_id: int,
    payload: TodoUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await personal.set_todo_completed(db, caller, todo_id, payload.completed)
    return {"success": True}


@router.delete("/{todo_id}")
async def delete_todo(todo_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await personal.delete_todo(db, caller, todo_id)
    return {"success": True}
