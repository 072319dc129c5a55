from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.services.feed import get_feed

router = APIRouter()


@router.get("/feed")
async def mural_feed(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Posts and visible events, newest first"""
    return await get_feed(db, caller)
