from typing import List, Optional

from fastapi import UploadFile
from loguru import logger
from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from portal.core.access import Caller, can_modify_post
from portal.core.config import Settings
from portal.core.errors import Forbidden, NotFound, ValidationFailed
from portal.core.uploads import discard_upload, store_upload
from portal.models.post import Post, PostAttachment, PostComment, PostLike
from portal.models.user import User
from portal.services.notifications import process_mentions

MAX_ATTACHMENTS = 10


def _require_content(content: Optional[str]) -> str:
    if content is None or not content.strip():
        raise ValidationFailed("Content is required")
    return content


async def _sender_name(db: AsyncSession, caller: Caller) -> str:
    result = await db.execute(select(User.name).where(User.id == caller.id))
    return result.scalar_one_or_none() or "Alguém"


def _attachment_dict(attachment: PostAttachment) -> dict:
    return {
        "id": attachment.id,
        "filename": attachment.filename,
        "original_name": attachment.original_name,
        "file_type": attachment.file_type,
        "file_size": attachment.file_size,
        "is_image": attachment.is_image,
    }


async def load_posts(db: AsyncSession) -> List[dict]:
    """Every post with author fields, counters and attachments, newest first."""
    like_count = (
        select(func.count(PostLike.id))
        .where(PostLike.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    comment_count = (
        select(func.count(PostComment.id))
        .where(PostComment.post_id == Post.id)
        .correlate(Post)
        .scalar_subquery()
    )
    result = await db.execute(
        select(
            Post,
            User.name,
            User.position,
            User.avatar,
            like_count.label("like_count"),
            comment_count.label("comment_count"),
        )
        .join(User, User.id == Post.user_id)
        .options(selectinload(Post.attachments))
        .order_by(Post.created_at.desc(), Post.id.desc())
    )

    posts = []
    for post, author_name, author_role, author_avatar, likes, comments in result.all():
        posts.append({
            "id": post.id,
            "user_id": post.user_id,
            "type": "post",
            "content": post.content,
            "is_urgent": post.is_urgent,
            "created_at": post.created_at,
            "author_name": author_name,
            "author_role": author_role,
            "author_avatar": author_avatar,
            "like_count": likes or 0,
            "comment_count": comments or 0,
            "attachments": [_attachment_dict(a) for a in post.attachments],
        })
    return posts


async def list_posts(db: AsyncSession, caller: Caller) -> List[dict]:
    return await load_posts(db)


async def create_post(
    db: AsyncSession,
    caller: Caller,
    content: str,
    is_urgent: bool,
    files: List[UploadFile],
    settings: Settings,
) -> int:
    _require_content(content)
    if len(files) > MAX_ATTACHMENTS:
        raise ValidationFailed(f"At most {MAX_ATTACHMENTS} attachments per post")

    stored = []
    try:
        for upload in files:
            stored.append(await store_upload(upload, settings))

        post = Post(user_id=caller.id, content=content, is_urgent=is_urgent)
        post.attachments = [
            PostAttachment(
                filename=item.filename,
                original_name=item.original_name,
                file_type=item.content_type,
                file_size=item.size,
                is_image=item.is_image,
            )
            for item in stored
        ]
        db.add(post)
        await db.flush()

        await process_mentions(db, content, caller.id, await _sender_name(db, caller))
        await db.commit()
    except Exception:
        # Nothing was committed, so the written files are orphans
        for item in stored:
            discard_upload(item, settings)
        raise

    logger.info("User {} created post {} with {} attachment(s)", caller.id, post.id, len(stored))
    return post.id


async def _get_post(db: AsyncSession, post_id: int) -> Post:
    post = await db.get(Post, post_id)
    if post is None:
        raise NotFound("Post not found")
    return post


async def update_post(db: AsyncSession, caller: Caller, post_id: int, content: str) -> None:
    post = await _get_post(db, post_id)
    if not can_modify_post(caller, post.user_id):
        raise Forbidden()
    post.content = _require_content(content)
    await db.commit()
    logger.info("User {} updated post {}", caller.id, post_id)


async def delete_post(db: AsyncSession, caller: Caller, post_id: int) -> None:
    post = await _get_post(db, post_id)
    if not can_modify_post(caller, post.user_id):
        raise Forbidden()
    await db.delete(post)
    await db.commit()
    logger.info("User {} deleted post {}", caller.id, post_id)


async def toggle_like(db: AsyncSession, caller: Caller, post_id: int) -> bool:
    await _get_post(db, post_id)
    result = await db.execute(
        select(PostLike).where(PostLike.post_id == post_id, PostLike.user_id == caller.id)
    )
    like = result.scalar_one_or_none()
    if like is not None:
        await db.delete(like)
        liked = False
    else:
        db.add(PostLike(post_id=post_id, user_id=caller.id))
        liked = True
    await db.commit()
    return liked


async def liked_post_ids(db: AsyncSession, caller: Caller) -> List[int]:
    result = await db.execute(select(PostLike.post_id).where(PostLike.user_id == caller.id))
    return list(result.scalars().all())


# Comments

async def list_comments(db: AsyncSession, caller: Caller, post_id: int) -> List[dict]:
    await _get_post(db, post_id)
    result = await db.execute(
        select(PostComment, User.name, User.position, User.avatar)
        .join(User, User.id == PostComment.user_id)
        .where(PostComment.post_id == post_id)
        .order_by(PostComment.created_at.asc(), PostComment.id.asc())
    )
    return [
        {
            "id": comment.id,
            "post_id": comment.post_id,
            "user_id": comment.user_id,
            "content": comment.content,
            "created_at": comment.created_at,
            "updated_at": comment.updated_at,
            "author_name": name,
            "author_role": position,
            "author_avatar": avatar,
        }
        for comment, name, position, avatar in result.all()
    ]


async def add_comment(db: AsyncSession, caller: Caller, post_id: int, content: str) -> int:
    await _get_post(db, post_id)
    comment = PostComment(post_id=post_id, user_id=caller.id, content=_require_content(content))
    db.add(comment)
    await db.flush()
    await process_mentions(db, content, caller.id, await _sender_name(db, caller))
    await db.commit()
    return comment.id


async def _get_comment(db: AsyncSession, comment_id: int) -> PostComment:
    comment = await db.get(PostComment, comment_id)
    if comment is None:
        raise NotFound("Comment not found")
    return comment


async def update_comment(db: AsyncSession, caller: Caller, comment_id: int, content: str) -> None:
    comment = await _get_comment(db, comment_id)
    if not can_modify_post(caller, comment.user_id):
        raise Forbidden()
    comment.content = _require_content(content)
    await db.commit()


async def delete_comment(db: AsyncSession, caller: Caller, comment_id: int) -> None:
    comment = await _get_comment(db, comment_id)
    if not can_modify_post(caller, comment.user_id):
        raise Forbidden()
    await db.execute(delete(PostComment).where(PostComment.id == comment_id))
    await db.commit()
