# labtrack/schemas/settings.py
from datetime import datetime
from typing import Optional, Any

from pydantic import BaseModel, Field


# ---------- Settings ----------
class SettingsUpdate(BaseModel):
    api_key: Optional[str] = Field(default=None, description="Claude API key (sk-ant-...)")
    clear_api_key: bool = False
    preferences: Optional[dict[str, Any]] = None


class SettingsOut(BaseModel):
    has_api_key: bool
    api_key_masked: Optional[str] = None
    preferences: dict[str, Any] = Field(default_factory=dict)
    updated_at: Optional[datetime] = None
