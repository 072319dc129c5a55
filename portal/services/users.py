from typing import List

from loguru import logger
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.errors import NotFound, ValidationFailed
from portal.models.drive import DriveFile
from portal.models.post import Post
from portal.models.user import ROLE_ADMIN, ROLES, User
from portal.schemas.admin import MAX_QUOTA, MIN_QUOTA


async def list_users(db: AsyncSession) -> List[User]:
    result = await db.execute(select(User).order_by(User.name.asc(), User.id.asc()))
    return list(result.scalars().all())


async def get_user(db: AsyncSession, user_id: int) -> User:
    user = await db.get(User, user_id)
    if user is None:
        raise NotFound("User not found")
    return user


async def admin_stats(db: AsyncSession) -> dict:
    users = (await db.execute(select(func.count(User.id)))).scalar_one()
    admins = (await db.execute(select(func.count(User.id)).where(User.role == ROLE_ADMIN))).scalar_one()
    posts = (await db.execute(select(func.count(Post.id)))).scalar_one()
    files = (await db.execute(select(func.count(DriveFile.id)))).scalar_one()
    return {"users": users, "non_admin_users": users - admins, "posts": posts, "files": files}


async def set_role(db: AsyncSession, caller: Caller, user_id: int, role: str) -> None:
    if role not in ROLES:
        raise ValidationFailed("Invalid role")
    user = await get_user(db, user_id)
    user.role = role
    await db.commit()
    logger.info("Admin {} set role of user {} to {}", caller.id, user_id, role)


async def set_quota(db: AsyncSession, caller: Caller, user_id: int, quota: int) -> None:
    if not MIN_QUOTA <= quota <= MAX_QUOTA:
        raise ValidationFailed("Quota must be between 1GB and 5GB")
    user = await get_user(db, user_id)
    user.storage_quota = quota
    await db.commit()
    logger.info("Admin {} set storage quota of user {} to {}", caller.id, user_id, quota)
