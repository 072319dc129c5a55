from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.post import CommentCreate, CommentResponse, PostResponse, PostUpdate
from portal.services import posts

router = APIRouter()


@router.get("", response_model=List[PostResponse])
async def list_posts(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """All posts, newest first"""
    return await posts.list_posts(db, caller)


@router.post("")
async def create_post(
    content: str = Form(...),
    is_urgent: bool = Form(False),
    files: Optional[List[UploadFile]] = File(None),
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Publish a post with up to 10 attachments"""
    post_id = await posts.create_post(db, caller, content, is_urgent, files or [], settings)
    return {"success": True, "id": post_id}


@router.get("/liked", response_model=List[int])
async def liked_posts(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Ids of the posts the caller liked"""
    return await posts.liked_post_ids(db, caller)


@router.put("/{post_id}")
async def update_post(
    post_id: int,
    payload: PostUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await posts.update_post(db, caller, post_id, payload.content)
    return {"success": True}


@router.delete("/{post_id}")
async def delete_post(post_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await posts.delete_post(db, caller, post_id)
    return {"success": True}


@router.post("/{post_id}/like")
async def toggle_like(post_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    liked = await posts.toggle_like(db, caller, post_id)
    return {"success": True, "liked": liked}


@router.get("/{post_id}/comments", response_model=List[CommentResponse])
async def list_comments(post_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Comments of a post, oldest first"""
    return await posts.list_comments(db, caller, post_id)


@router.post("/{post_id}/comments")
async def add_comment(
    post_id: int,
    payload: CommentCreate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    comment_id = await posts.add_comment(db, caller, post_id, payload.content)
    return {"success": True, "id": comment_id}
