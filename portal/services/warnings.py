"""Dashboard warnings.

Publishing a warning retires the one currently shown, so at most one row is
active at any time.
"""
from typing import Optional

from loguru import logger
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.access import Caller
from portal.core.errors import NotFound, ValidationFailed
from portal.models.warning import DashboardWarning
from portal.schemas.warning import WarningCreate, WarningUpdate


def _check_text(payload) -> None:
    if not payload.title.strip() or not payload.message.strip():
        raise ValidationFailed("Title and message are required")


async def get_active(db: AsyncSession) -> Optional[DashboardWarning]:
    result = await db.execute(
        select(DashboardWarning)
        .where(DashboardWarning.active.is_(True))
        .order_by(DashboardWarning.created_at.desc(), DashboardWarning.id.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def create_warning(db: AsyncSession, caller: Caller, payload: WarningCreate) -> int:
    _check_text(payload)
    await db.execute(
        update(DashboardWarning).where(DashboardWarning.active.is_(True)).values(active=False)
    )
    warning = DashboardWarning(
        title=payload.title.strip(),
        message=payload.message,
        urgency=payload.urgency,
        target_audience=payload.target_audience,
    )
    db.add(warning)
    await db.commit()
    logger.info("Admin {} published warning {}", caller.id, warning.id)
    return warning.id


async def _get_warning(db: AsyncSession, warning_id: int) -> DashboardWarning:
    warning = await db.get(DashboardWarning, warning_id)
    if warning is None:
        raise NotFound("Warning not found")
    return warning


async def update_warning(db: AsyncSession, caller: Caller, warning_id: int, payload: WarningUpdate) -> None:
    warning = await _get_warning(db, warning_id)
    _check_text(payload)
    warning.title = payload.title.strip()
    warning.message = payload.message
    warning.urgency = payload.urgency
    warning.target_audience = payload.target_audience
    await db.commit()


async def delete_warning(db: AsyncSession, caller: Caller, warning_id: int) -> None:
    warning = await _get_warning(db, warning_id)
    await db.delete(warning)
    await db.commit()
    logger.info("Admin {} deleted warning {}", caller.id, warning_id)
