from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.database import get_db
from portal.services import settings_store

router = APIRouter()


@router.get("/settings/{key}")
async def get_public_setting(key: str, db: AsyncSession = Depends(get_db)):
    """Settings the login page needs before anyone is signed in"""
    return await settings_store.get_public(db, key)
