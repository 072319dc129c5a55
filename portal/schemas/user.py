from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    name: str
    email: Optional[str] = None
    role: str
    department: Optional[str] = None
    position: Optional[str] = None
    avatar: Optional[str] = None


class AdminUserResponse(UserResponse):
    storage_quota: int
    created_at: Optional[datetime] = None
