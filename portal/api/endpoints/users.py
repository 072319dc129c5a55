from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller, get_current_user
from portal.models.user import User
from portal.schemas.user import UserResponse
from portal.services import users

router = APIRouter()


@router.get("", response_model=List[UserResponse])
async def list_users(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Directory used by the sharing and assignment pickers"""
    return await users.list_users(db)


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return current_user


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(user_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await users.get_user(db, user_id)
