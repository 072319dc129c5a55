from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.notification import NotificationResponse
from portal.services import notifications

router = APIRouter()


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """The caller's 50 most recent notifications"""
    return await notifications.list_notifications(db, caller)


@router.put("/read-all")
async def mark_all_read(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await notifications.mark_all_read(db, caller)
    return {"success": True}


@router.put("/{notification_id}/read")
async def mark_read(notification_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await notifications.mark_read(db, caller, notification_id)
    return {"success": True}
