# labtrack/routes/benchmark_routes.py
from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from labtrack.auth.deps import get_current_user
from labtrack.db.session import get_db
from labtrack.models.user import User
from labtrack.schemas.benchmarks import BenchmarkIn, BenchmarkOut, BenchmarkUpdate
from labtrack.services import benchmarks as benchmark_service
from labtrack.services.benchmarks import BenchmarkError, BenchmarkImportError

router = APIRouter(prefix="/api/benchmarks", tags=["benchmarks"])


def _custom_or_404(db: Session, user: User, benchmark_id: str):
    row = benchmark_service.get_custom(db, user.id, benchmark_id)
    if not row:
        raise HTTPException(status_code=404, detail="Benchmark not found")
    return row


@router.get("", response_model=List[BenchmarkOut])
def list_benchmarks(
    include_inactive: bool = Query(default=False),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Default catalogue with the user's custom benchmarks applied on top."""
    return benchmark_service.all_benchmarks(db, current_user.id, include_inactive=include_inactive)


@router.post("", response_model=BenchmarkOut, status_code=status.HTTP_201_CREATED)
def create_benchmark(
    payload: BenchmarkIn,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        row = benchmark_service.create_custom(db, current_user.id, payload.model_dump())
    except BenchmarkError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return benchmark_service.serialize(row)


@router.get("/export")
def export_benchmarks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    body = benchmark_service.export_benchmarks(db, current_user.id)
    return Response(
        content=body,
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="benchmarks.json"'},
    )


@router.post("/import")
def import_benchmarks(
    payload: List[Dict[str, Any]] = Body(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Replace the custom set with the ``is_custom`` entries of an export."""
    try:
        imported = benchmark_service.import_benchmarks(db, current_user.id, payload)
    except BenchmarkImportError as exc:
        raise HTTPException(status_code=422, detail=str(exc))
    return {"imported": imported}


@router.post("/seed")
def seed_benchmarks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"added": benchmark_service.seed_defaults(db, current_user.id)}


@router.post("/reset")
def reset_benchmarks(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return {"deleted": benchmark_service.reset_to_defaults(db, current_user.id)}


@router.patch("/{benchmark_id}", response_model=BenchmarkOut)
def update_benchmark(
    benchmark_id: str,
    payload: BenchmarkUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = _custom_or_404(db, current_user, benchmark_id)
    try:
        row = benchmark_service.update_custom(db, row, payload.model_dump(exclude_unset=True))
    except BenchmarkError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return benchmark_service.serialize(row)


@router.delete("/{benchmark_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_benchmark(
    benchmark_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    benchmark_service.delete_custom(db, _custom_or_404(db, current_user, benchmark_id))
    return None
