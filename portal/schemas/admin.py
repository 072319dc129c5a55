from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Literal, Optional

MIN_QUOTA = 1024 ** 3  # 1 GiB
MAX_QUOTA = 5 * 1024 ** 3  # 5 GiB


class SettingValue(BaseModel):
    value: Any


class RoleUpdate(BaseModel):
    role: Literal["USER", "ADMIN"]


class QuotaUpdate(BaseModel):
    quota: int = Field(..., ge=MIN_QUOTA, le=MAX_QUOTA)  # bytes


class AdminStats(BaseModel):
    users: int
    non_admin_users: int
    posts: int
    files: int


class LdapConfig(BaseModel):
    """Connection parameters as stored under the `ldap_config` setting."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    enabled: bool = False
    host: Optional[str] = None
    port: int = 389
    bind_dn: Optional[str] = Field(None, alias="bindDn")
    bind_password: Optional[str] = Field(None, alias="bindPassword")
    base_dn: Optional[str] = Field(None, alias="baseDn")
