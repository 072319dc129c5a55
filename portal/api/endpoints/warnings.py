from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller, require_admin
from portal.schemas.warning import WarningCreate, WarningResponse, WarningUpdate
from portal.services import warnings

router = APIRouter()


@router.get("", response_model=Optional[WarningResponse])
async def get_active_warning(caller: Caller = Depends(get_caller), db: AsyncSession = Depends(get_db)):
    """The warning currently shown on the dashboard, or null"""
    return await warnings.get_active(db)


@router.post("")
async def create_warning(
    payload: WarningCreate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    warning_id = await warnings.create_warning(db, caller, payload)
    return {"success": True, "id": warning_id}


@router.put("/{warning_id}")
async def update_warning(
    warning_id: int,
    payload: WarningUpdate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await warnings.update_warning(db, caller, warning_id, payload)
    return {"success": True}


@router.delete("/{warning_id}")
async def delete_warning(warning_id: int, caller: Caller = Depends(require_admin), db: AsyncSession = Depends(get_db)):
    await warnings.delete_warning(db, caller, warning_id)
    return {"success": True}
