from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.database import get_db
from portal.core.security import get_caller
from portal.services import search

router = APIRouter()


@router.get("", response_model=Dict[str, List[Dict[str, Any]]])
async def global_search(
    q: str = Query("", max_length=200),
    caller: Caller = Depends(get_caller),
    db: AsyncSession = Depends(get_db),
):
    """Users, visible events and accessible drive items matching `q`"""
    return await search.search(db, caller, q)
