# labtrack/schemas/biomarker_info.py
from typing import Optional

from pydantic import BaseModel, Field


class BiomarkerInfoOut(BaseModel):
    name: str
    description: Optional[str] = None
    optimal_values: Optional[str] = None
    low_reasons: list[str] = Field(default_factory=list)
    high_reasons: list[str] = Field(default_factory=list)
    what_next: list[str] = Field(default_factory=list)
