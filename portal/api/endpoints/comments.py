from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.post import CommentUpdate
from portal.services import posts

router = APIRouter()


@router.put("/{comment_id}")
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Edit a post comment (author or administrator)"""
    await posts.update_comment(db, caller, comment_id, payload.content)
    return {"success": True}


@router.delete("/{comment_id}")
async def delete_comment(comment_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await posts.delete_comment(db, caller, comment_id)
    return {"success": True}
