# labtrack/routes/biomarker_routes.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from labtrack.auth.deps import get_current_user
from labtrack.models.user import User
from labtrack.schemas.biomarker_info import BiomarkerInfoOut
from labtrack.services.biomarker_info import biomarker_info_names, get_biomarker_info

router = APIRouter(prefix="/api/biomarkers", tags=["biomarkers"])


@router.get("/info", response_model=List[str])
def list_biomarker_info(current_user: User = Depends(get_current_user)):
    """Names that have reference notes."""
    return biomarker_info_names()


@router.get("/{name}/info", response_model=BiomarkerInfoOut)
def biomarker_info(name: str, current_user: User = Depends(get_current_user)):
    """Description, likely causes of low/high results and suggested follow-up for one biomarker."""
    info = get_biomarker_info(name)
    if info is None:
        raise HTTPException(status_code=404, detail=f"No information available for {name}")
    return info
