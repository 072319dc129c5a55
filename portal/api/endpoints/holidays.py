from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from portal.core.access import Caller
from portal.core.config import Settings, get_settings
from portal.core.security import get_caller
from portal.schemas.holiday import Holiday
from portal.services.holidays import fetch_holidays

router = APIRouter()


@router.get("", response_model=List[Holiday])
async def list_holidays(
    year: Optional[int] = Query(None, ge=1900, le=2200),
    caller: Caller = Depends(get_caller),
    settings: Settings = Depends(get_settings),
):
    """National, state and municipal holidays of `year` (default: current year)"""
    return await fetch_holidays(year or date.today().year, settings)
