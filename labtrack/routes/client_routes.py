# labtrack/routes/client_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from labtrack.auth.deps import get_current_user
from labtrack.db.session import get_db
from labtrack.models.user import User
from labtrack.schemas.analyses import AnalysisOut
from labtrack.schemas.clients import (
    ClientIn,
    ClientMatchOut,
    ClientOut,
    ClientUpdate,
    MergeRequest,
    PatientInfoIn,
)
from labtrack.services import analyses as analysis_service
from labtrack.services import clients as client_service
from labtrack.services.client_matcher import PatientInfo, match_client
from labtrack.services.trends import client_trends

router = APIRouter(prefix="/api/clients", tags=["clients"])


def _client_or_404(db: Session, user: User, client_id: str):
    client = client_service.get_client(db, user.id, client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.get("", response_model=List[ClientOut])
def list_clients(
    status_filter: Optional[str] = Query(default=None, alias="status", pattern="^(active|past)$"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return client_service.list_clients(db, current_user.id, status_filter)


@router.get("/search", response_model=List[ClientOut])
def search_clients(
    q: str = Query(default=""),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return client_service.search_clients(db, current_user.id, q)


@router.post("/match", response_model=ClientMatchOut)
def match_patient(
    payload: PatientInfoIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Suggest an existing client (or a new one) for extracted patient details."""
    info = PatientInfo.from_dict(payload.model_dump())
    result = match_client(info, client_service.list_clients(db, current_user.id))
    body = result.to_dict()
    body["client"] = ClientOut.model_validate(result.client) if result.client is not None else None
    return body


@router.post("", response_model=ClientOut, status_code=status.HTTP_201_CREATED)
def create_client(
    payload: ClientIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        return client_service.create_client(db, current_user.id, payload.model_dump())
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.get("/{client_id}", response_model=ClientOut)
def get_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return _client_or_404(db, current_user, client_id)


@router.patch("/{client_id}", response_model=ClientOut)
def update_client(
    client_id: str,
    payload: ClientUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = _client_or_404(db, current_user, client_id)
    try:
        return client_service.update_client(db, client, payload.model_dump(exclude_unset=True))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))


@router.delete("/{client_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = _client_or_404(db, current_user, client_id)
    client_service.delete_client(db, client)
    return None


@router.post("/{client_id}/archive", response_model=ClientOut)
def archive_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return client_service.archive_client(db, _client_or_404(db, current_user, client_id))


@router.post("/{client_id}/reactivate", response_model=ClientOut)
def reactivate_client(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return client_service.reactivate_client(db, _client_or_404(db, current_user, client_id))


@router.post("/{client_id}/merge")
def merge_client(
    client_id: str,
    payload: MergeRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Move all analyses of ``client_id`` onto ``target_id`` and archive ``client_id``."""
    source = _client_or_404(db, current_user, client_id)
    target = _client_or_404(db, current_user, payload.target_id)
    try:
        result = client_service.merge_clients(db, current_user.id, source, target)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {
        "moved_analyses": result["moved_analyses"],
        "source": ClientOut.model_validate(result["source"]).model_dump(mode="json"),
        "target": ClientOut.model_validate(result["target"]).model_dump(mode="json"),
    }


@router.get("/{client_id}/analyses", response_model=List[AnalysisOut])
def list_client_analyses(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = _client_or_404(db, current_user, client_id)
    return analysis_service.list_client_analyses(db, current_user.id, client.id)


@router.post("/{client_id}/analyses/dedupe")
def dedupe_client_analyses(
    client_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = _client_or_404(db, current_user, client_id)
    deleted = analysis_service.delete_duplicate_analyses(db, current_user.id, client.id)
    return {"deleted": deleted}


@router.get("/{client_id}/trends")
def get_client_trends(
    client_id: str,
    biomarker: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    client = _client_or_404(db, current_user, client_id)
    rows = analysis_service.list_client_analyses(db, current_user.id, client.id)
    return {"client_id": client.id, **client_trends(rows, biomarker or None, limit)}
