from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.personal import NoteResponse, NoteSave
from portal.services import personal

router = APIRouter()


@router.get("", response_model=NoteResponse)
async def get_note(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """The caller's dashboard note (empty when never saved)"""
    return await personal.get_note(db, caller)


@router.post("")
async def save_note(payload: NoteSave, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await personal.save_note(db, caller, payload.content)
    return {"success": True}
