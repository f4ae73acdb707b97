# labtrack/schemas/analyses.py
from datetime import date, datetime
from typing import Optional, Any

from pydantic import BaseModel, Field

from labtrack.schemas.clients import ClientIn, PatientInfoIn


# ---------- Analyses ----------
class BiomarkerIn(BaseModel):
    name: str = Field(..., min_length=1)
    value: str = ""
    unit: str = ""
    test_date: Optional[str] = None


class AnalysisResult(BaseModel):
    biomarker_name: str
    value: str
    unit: str = ""
    optimal_range: str = ""
    test_date: Optional[str] = None
    status: Optional[str] = None


class AnalysisCreate(BaseModel):
    """Confirmation step after extraction: an existing client or a new one, plus the values."""
    client_id: Optional[str] = None
    new_client: Optional[ClientIn] = None
    patient_info: Optional[PatientInfoIn] = None
    biomarkers: list[BiomarkerIn] = Field(default_factory=list)
    lab_test_date: Optional[date] = None
    notes: Optional[str] = None
    panel_name: Optional[str] = None
    pdf_files: list[str] = Field(default_factory=list)


class AnalysisUpdate(BaseModel):
    results: Optional[list[AnalysisResult]] = None
    notes: Optional[str] = None
    panel_name: Optional[str] = None


class AnalysisOut(BaseModel):
    id: str
    client_id: str
    lab_test_date: Optional[date] = None
    analysis_date: Optional[datetime] = None
    results: Optional[list[AnalysisResult]] = None
    summary: Optional[dict[str, Any]] = None
    panel_name: Optional[str] = None
    notes: Optional[str] = None
    pdf_files: Optional[list[str]] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
