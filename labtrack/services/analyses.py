from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from labtrack.models.analysis import Analysis
from labtrack.services.analyzer import generate_summary
from labtrack.services.audit import record_event
from labtrack.services.clients import coerce_date

logger = logging.getLogger("labtrack")


def list_client_analyses(db: Session, user_id: str, client_id: str) -> List[Analysis]:
    """Newest analysis first."""
    return (
        db.query(Analysis)
        .filter(Analysis.user_id == str(user_id), Analysis.client_id == str(client_id))
        .order_by(desc(Analysis.analysis_date), desc(Analysis.created_at))
        .all()
    )


def get_analysis(db: Session, user_id: str, analysis_id: str) -> Optional[Analysis]:
    return (
        db.query(Analysis)
        .filter(Analysis.id == str(analysis_id), Analysis.user_id == str(user_id))
        .first()
    )


def get_latest_analysis(db: Session, user_id: str, client_id: str) -> Optional[Analysis]:
    rows = list_client_analyses(db, user_id, client_id)
    return rows[0] if rows else None


def find_analysis_by_date(db: Session, user_id: str, client_id: str, lab_test_date: Any) -> Optional[Analysis]:
    when = coerce_date(lab_test_date)
    if when is None:
        return None
    return (
        db.query(Analysis)
        .filter(
            Analysis.user_id == str(user_id),
            Analysis.client_id == str(client_id),
            Analysis.lab_test_date == when,
        )
        .order_by(desc(Analysis.created_at))
        .first()
    )


def update_analysis(db: Session, analysis: Analysis, changes: Dict[str, Any]) -> Analysis:
    """Apply result/notes/panel changes; the summary is recomputed whenever results change."""
    if changes.get("results") is not None:
        analysis.results = list(changes["results"])
        analysis.summary = generate_summary(analysis.results)
    if "notes" in changes:
        analysis.notes = changes["notes"]
    if changes.get("panel_name"):
        analysis.panel_name = changes["panel_name"]
    if changes.get("pdf_files"):
        analysis.pdf_files = list(analysis.pdf_files or []) + list(changes["pdf_files"])
    record_event(
        db, analysis.user_id, "update_analysis", "analysis", analysis.id,
        metadata={"client_id": analysis.client_id, "fields": sorted(k for k, v in changes.items() if v is not None)},
    )
    db.commit()
    db.refresh(analysis)
    return analysis


def create_analysis(
    db: Session,
    user_id: str,
    client_id: str,
    results: List[Dict[str, Any]],
    lab_test_date: Any = None,
    notes: Optional[str] = None,
    panel_name: Optional[str] = None,
    pdf_files: Optional[List[str]] = None,
) -> Analysis:
    """Store an analysis; a second upload for the same client and test date updates the first."""
    when = coerce_date(lab_test_date)
    if when is not None:
        existing = find_analysis_by_date(db, user_id, client_id, when)
        if existing:
            logger.info({
                "function": "create_analysis",
                "status": "updated_existing",
                "analysis_id": existing.id,
                "lab_test_date": when.isoformat(),
            })
            changes: Dict[str, Any] = {
                "results": results,
                "panel_name": panel_name,
                "pdf_files": pdf_files,
            }
            if notes is not None:
                changes["notes"] = notes
            return update_analysis(db, existing, changes)

    analysis = Analysis(
        user_id=str(user_id),
        client_id=str(client_id),
        lab_test_date=when,
        results=list(results),
        summary=generate_summary(results),
        notes=notes,
        panel_name=panel_name,
        pdf_files=list(pdf_files or []),
    )
    db.add(analysis)
    db.flush()
    record_event(
        db, user_id, "create_analysis", "analysis", analysis.id,
        metadata={"client_id": analysis.client_id, "lab_test_date": when.isoformat() if when else None},
    )
    db.commit()
    db.refresh(analysis)
    logger.info({
        "function": "create_analysis",
        "status": "inserted",
        "analysis_id": analysis.id,
        "client_id": analysis.client_id,
        "biomarkers": len(results),
    })
    return analysis


def delete_analysis(db: Session, analysis: Analysis) -> None:
    record_event(
        db, analysis.user_id, "delete_analysis", "analysis", analysis.id,
        metadata={"client_id": analysis.client_id},
    )
    db.delete(analysis)
    db.commit()


def delete_duplicate_analyses(db: Session, user_id: str, client_id: str) -> int:
    """Keep only the newest analysis per lab test date; undated analyses are left alone."""
    by_date: Dict[Any, List[Analysis]] = defaultdict(list)
    for analysis in list_client_analyses(db, user_id, client_id):
        if analysis.lab_test_date is not None:
            by_date[analysis.lab_test_date].append(analysis)

    deleted = 0
    for group in by_date.values():
        if len(group) < 2:
            continue
        group.sort(key=lambda a: a.created_at, reverse=True)
        for extra in group[1:]:
            record_event(
                db, user_id, "delete_analysis", "analysis", extra.id,
                metadata={"client_id": client_id, "reason": "duplicate"},
            )
            db.delete(extra)
            deleted += 1
    if deleted:
        db.commit()
    logger.info({"function": "delete_duplicate_analyses", "client_id": client_id, "deleted": deleted})
    return deleted


__all__ = [
    "list_client_analyses",
    "get_analysis",
    "get_latest_analysis",
    "find_analysis_by_date",
    "create_analysis",
    "update_analysis",
    "delete_analysis",
    "delete_duplicate_analyses",
]
