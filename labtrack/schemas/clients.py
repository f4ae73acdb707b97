# labtrack/schemas/clients.py
from datetime import date, datetime
from typing import Optional, Literal, Any

from pydantic import BaseModel, Field

Gender = Literal["male", "female", "other"]
Status = Literal["active", "past"]


# ---------- Clients ----------
class ClientIn(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    status: Status = "active"
    notes: Optional[str] = None
    tags: list[str] = Field(default_factory=list)


class ClientUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    email: Optional[str] = Field(default=None, max_length=255)
    date_of_birth: Optional[date] = None
    gender: Optional[Gender] = None
    status: Optional[Status] = None
    notes: Optional[str] = None
    tags: Optional[list[str]] = None


class ClientOut(BaseModel):
    id: str
    full_name: str
    email: Optional[str] = None
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    status: str
    notes: Optional[str] = None
    tags: Optional[list[str]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class MergeRequest(BaseModel):
    target_id: str = Field(..., description="Client that receives the analyses")


class PatientInfoIn(BaseModel):
    name: Optional[str] = None
    date_of_birth: Optional[str] = None
    gender: Optional[Gender] = None
    test_date: Optional[str] = None


class ClientMatchOut(BaseModel):
    matched: bool
    client_id: Optional[str] = None
    confidence: Literal["high", "medium", "low"]
    needs_confirmation: bool
    suggested_action: Literal["use-existing", "create-new", "manual-select"]
    score: float = 0.0
    client: Optional[ClientOut] = None
