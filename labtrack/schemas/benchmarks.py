# labtrack/schemas/benchmarks.py
from typing import Optional

from pydantic import BaseModel, Field


# ---------- Benchmarks ----------
class BenchmarkIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    male_range: Optional[str] = Field(default=None, max_length=255)
    female_range: Optional[str] = Field(default=None, max_length=255)
    units: list[str] = Field(default_factory=list)
    category: Optional[str] = Field(default=None, max_length=120)
    aliases: list[str] = Field(default_factory=list)
    is_active: bool = True


class BenchmarkUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    male_range: Optional[str] = Field(default=None, max_length=255)
    female_range: Optional[str] = Field(default=None, max_length=255)
    units: Optional[list[str]] = None
    category: Optional[str] = Field(default=None, max_length=120)
    aliases: Optional[list[str]] = None
    is_active: Optional[bool] = None


class BenchmarkOut(BaseModel):
    id: str
    name: str
    male_range: str = ""
    female_range: str = ""
    units: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    aliases: list[str] = Field(default_factory=list)
    is_active: bool = True
    is_custom: bool = False
