# labtrack/routes/analysis_routes.py
import logging
from typing import List

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from labtrack.auth.deps import get_current_user
from labtrack.db.session import get_db
from labtrack.models.user import User
from labtrack.schemas.analyses import AnalysisCreate, AnalysisOut, AnalysisUpdate
from labtrack.schemas.clients import ClientOut
from labtrack.services import analyses as analysis_service
from labtrack.services import clients as client_service
from labtrack.services.analyzer import match_biomarkers_with_ranges
from labtrack.services.client_matcher import PatientInfo
from labtrack.services.benchmarks import all_benchmarks
from labtrack.services.documents import DocumentError, validate_upload
from labtrack.services.extraction import ExtractionError, generate_panel_name, resolve_api_key
from labtrack.services.report_pipeline import Upload, process_uploads
from labtrack.services.settings import get_or_create_settings
from labtrack.utils.rate_limit import limiter, user_rate_key

router = APIRouter(prefix="/api/analyses", tags=["analyses"])
logger = logging.getLogger("labtrack")


def _analysis_or_404(db: Session, user: User, analysis_id: str):
    analysis = analysis_service.get_analysis(db, user.id, analysis_id)
    if not analysis:
        raise HTTPException(status_code=404, detail="Analysis not found")
    return analysis


@router.post("/extract")
@limiter.limit("10/minute", key_func=user_rate_key)
async def extract_analysis(
    request: Request,
    files: List[UploadFile] = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Read one patient's lab files and return the values for review.

    Nothing is stored as an analysis here; the reviewed values come back
    through ``POST /api/analyses``.
    """
    uploads = []
    for f in files:
        data = await f.read()
        uploads.append(Upload(data=data, filename=f.filename or "upload", content_type=(f.content_type or "").lower()))
    try:
        for up in uploads:
            validate_upload(up.data, up.filename, up.content_type)
    except DocumentError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    settings = get_or_create_settings(db, current_user.id)
    try:
        api_key = resolve_api_key(settings.api_key)
    except ExtractionError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    preferences = settings.preferences or {}
    try:
        # OCR and the Claude call are blocking
        result = await run_in_threadpool(
            process_uploads,
            uploads,
            api_key=api_key,
            user_id=current_user.id,
            clients=client_service.list_clients(db, current_user.id),
            benchmarks=all_benchmarks(db, current_user.id),
            default_gender=preferences.get("default_gender"),
        )
    except DocumentError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    except ExtractionError as exc:
        logger.warning({"function": "extract_analysis", "status": "extraction_failed", "error": str(exc)})
        raise HTTPException(status_code=502, detail=str(exc))

    client_id = result["client_match"].get("client_id")
    client = client_service.get_client(db, current_user.id, client_id) if client_id else None
    result["client_match"]["client"] = (
        ClientOut.model_validate(client).model_dump(mode="json") if client else None
    )
    return result


@router.post("", response_model=AnalysisOut, status_code=status.HTTP_201_CREATED)
def create_analysis(
    payload: AnalysisCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store reviewed values against an existing client or a newly created one."""
    if payload.client_id:
        client = client_service.get_client(db, current_user.id, payload.client_id)
        if not client:
            raise HTTPException(status_code=404, detail="Client not found")
    elif payload.new_client is not None:
        try:
            client = client_service.create_client(db, current_user.id, payload.new_client.model_dump())
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    elif payload.patient_info is not None:
        try:
            client = client_service.auto_create_client(
                db, current_user.id, PatientInfo.from_dict(payload.patient_info.model_dump())
            )
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc))
    else:
        raise HTTPException(status_code=400, detail="Either client_id, new_client or patient_info is required")

    biomarkers = [b.model_dump() for b in payload.biomarkers]
    preferences = get_or_create_settings(db, current_user.id).preferences or {}
    gender = client.gender or preferences.get("default_gender")
    results = match_biomarkers_with_ranges(biomarkers, all_benchmarks(db, current_user.id), gender)

    return analysis_service.create_analysis(
        db,
        current_user.id,
        client.id,
        results,
        lab_test_date=payload.lab_test_date,
        notes=payload.notes,
        panel_name=payload.panel_name or generate_panel_name(biomarkers),
        pdf_files=payload.pdf_files,
    )


@router.get("/{analysis_id}", response_model=AnalysisOut)
def get_analysis(
    analysis_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _analysis_or_404(db, current_user, analysis_id)


@router.patch("/{analysis_id}", response_model=AnalysisOut)
def update_analysis(
    analysis_id: str,
    payload: AnalysisUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    analysis = _analysis_or_404(db, current_user, analysis_id)
    return analysis_service.update_analysis(db, analysis, payload.model_dump(exclude_unset=True))


@router.delete("/{analysis_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_analysis(
    analysis_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    analysis_service.delete_analysis(db, _analysis_or_404(db, current_user, analysis_id))
    return None
