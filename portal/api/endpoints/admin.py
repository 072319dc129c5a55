from typing import Any, Dict, List

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from portal.core.access import Caller
from portal.core.config import Settings, get_settings
from portal.core.database import get_db
from portal.core.errors import PortalError
from portal.core.security import require_admin
from portal.core.uploads import discard_upload, public_url, store_upload
from portal.schemas.admin import AdminStats, LdapConfig, QuotaUpdate, RoleUpdate, SettingValue
from portal.schemas.user import AdminUserResponse
from portal.services import ldap, settings_store, users

router = APIRouter(dependencies=[Depends(require_admin)])

LDAP_SETTING = "ldap_config"


@router.get("/settings", response_model=Dict[str, Any])
async def get_settings_documents(db: AsyncSession = Depends(get_db)):
    """Every system setting, keyed by name"""
    return await settings_store.get_all(db)


@router.get("/settings/{key}")
async def get_setting(key: str, db: AsyncSession = Depends(get_db)):
    return await settings_store.get(db, key)


@router.put("/settings/{key}")
async def update_setting(key: str, payload: SettingValue, db: AsyncSession = Depends(get_db)):
    await settings_store.set(db, key, payload.value)
    return {"success": True}


@router.post("/settings/upload/{key}")
async def upload_setting_file(
    key: str,
    request: Request,
    field: str = Form(...),
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Store an image (e.g. the login background) and point `field` of the setting at it"""
    stored = await store_upload(file, settings)
    url = public_url(stored.filename, settings, str(request.base_url))
    try:
        await settings_store.set_field(db, key, field, url)
    except PortalError:
        discard_upload(stored, settings)
        raise
    return {"success": True, "url": url}


@router.get("/stats", response_model=AdminStats)
async def admin_stats(db: AsyncSession = Depends(get_db)):
    return await users.admin_stats(db)


@router.get("/users", response_model=List[AdminUserResponse])
async def list_users(db: AsyncSession = Depends(get_db)):
    return await users.list_users(db)


@router.put("/users/{user_id}/role")
async def update_role(
    user_id: int,
    payload: RoleUpdate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    await users.set_role(db, caller, user_id, payload.role)
    return {"success": True}


@router.put("/users/{user_id}/quota")
async def update_quota(
    user_id: int,
    payload: QuotaUpdate,
    caller: Caller = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Storage quota in bytes, between 1GB and 5GB"""
    await users.set_quota(db, caller, user_id, payload.quota)
    return {"success": True}


@router.post("/ldap/test")
async def test_ldap(db: AsyncSession = Depends(get_db)):
    """Try to bind and search with the stored `ldap_config` setting"""
    documents = await settings_store.get_all(db)
    config = LdapConfig.model_validate(documents.get(LDAP_SETTING) or {})
    result = await run_in_threadpool(ldap.test_connection, config)
    logger.info("LDAP test finished: success={}", result.get("success"))
    return result
