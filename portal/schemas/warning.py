from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from datetime import datetime
from typing import Literal


class WarningBase(BaseModel):
    title: str
    message: str
    urgency: Literal["low", "medium", "high"] = "low"
    # The dashboard client sends camelCase
    target_audience: str = Field("all", validation_alias=AliasChoices("target_audience", "targetAudience"))


class WarningCreate(WarningBase):
    pass


class WarningUpdate(WarningBase):
    pass


class WarningResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    message: str
    urgency: str
    target_audience: str
    active: bool
    created_at: datetime
