"""System settings: JSON documents keyed by name."""
import json
from typing import Any, Dict

from loguru import logger
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from portal.core.errors import Forbidden, NotFound, ValidationFailed
from portal.models.setting import SystemSetting

# Readable without authentication, e.g. by the login page
PUBLIC_KEYS = ("login_ui", "theme_config")


async def get_all(db: AsyncSession) -> Dict[str, Any]:
    result = await db.execute(select(SystemSetting).order_by(SystemSetting.key))
    return {row.key: json.loads(row.value) for row in result.scalars().all()}


async def get(db: AsyncSession, key: str) -> Any:
    setting = await db.get(SystemSetting, key)
    if setting is None:
        raise NotFound("Setting not found")
    return json.loads(setting.value)


async def get_public(db: AsyncSession, key: str) -> Any:
    if key not in PUBLIC_KEYS:
        raise Forbidden("Access denied")
    return await get(db, key)


async def set(db: AsyncSession, key: str, value: Any) -> None:
    setting = await db.get(SystemSetting, key)
    if setting is None:
        db.add(SystemSetting(key=key, value=json.dumps(value)))
    else:
        setting.value = json.dumps(value)
    await db.commit()
    logger.info("Setting {} updated", key)


async def set_field(db: AsyncSession, key: str, field: str, value: Any) -> None:
    """Update one field of an existing object-valued setting."""
    setting = await db.get(SystemSetting, key)
    if setting is None:
        raise NotFound("Setting not found")
    document = json.loads(setting.value)
    if not isinstance(document, dict):
        raise ValidationFailed(f"Setting {key} is not an object")
    document[field] = value
    setting.value = json.dumps(document)
    await db.commit()
    logger.info("Setting {} field {} updated", key, field)
