# labtrack/schemas/audit.py
from datetime import datetime
from typing import Optional, Any

from pydantic import BaseModel, Field


# ---------- Audit log ----------
class AuditLogOut(BaseModel):
    id: str
    action: str
    resource_type: Optional[str] = None
    resource_id: Optional[str] = None
    status: str
    error_message: Optional[str] = None
    metadata: Optional[dict[str, Any]] = Field(default=None, validation_alias="details")
    created_at: datetime

    class Config:
        from_attributes = True
