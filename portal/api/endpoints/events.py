from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.schemas.event import EventCreate, EventResponse, EventUpdate
from portal.services import events

router = APIRouter()


@router.get("", response_model=List[EventResponse])
async def list_events(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Events visible to the caller, in calendar order"""
    return await events.list_events(db, caller)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(event_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    return await events.get_event(db, caller, event_id)


@router.post("")
async def create_event(payload: EventCreate, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """Create an event and invite the users it is shared with"""
    event_id = await events.create_event(db, caller, payload)
    return {"success": True, "id": event_id}


@router.put("/{event_id}")
async def update_event(
    event_id: int,
    payload: EventUpdate,
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    await events.update_event(db, caller, event_id, payload)
    return {"success": True}


@router.delete("/{event_id}")
async def delete_event(event_id: int, caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    await events.delete_event(db, caller, event_id)
    return {"success": True}
