from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class SettingItem(BaseModel):
    id: str
    value: Optional[str] = None
    is_default: bool
    updated_at: Optional[datetime] = None


class SettingsResponse(BaseModel):
    count: int
    settings: list[SettingItem]


class SettingUpdateRequest(BaseModel):
    value: str


class SettingUpdateResponse(BaseModel):
    success: bool
    id: str
    message: str
