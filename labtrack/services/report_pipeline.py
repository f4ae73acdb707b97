"""End-to-end processing of one upload batch (one patient, one or more files)."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from labtrack.services.analyzer import generate_summary, match_biomarkers_with_ranges
from labtrack.services.client_matcher import PatientInfo, match_client
from labtrack.services.documents import (
    DocumentError,
    ProcessedDocument,
    extract_document,
    filter_documents,
    validate_upload,
)
from labtrack.services.extraction import (
    consolidate_patient_info,
    extract_biomarkers,
    generate_panel_name,
    merge_biomarkers,
)
from labtrack.services.normalizer import normalize_biomarkers
from labtrack.services.storage import store_local_upload

logger = logging.getLogger("labtrack")


@dataclass
class Upload:
    data: bytes
    filename: str
    content_type: str = ""


def _read_documents(uploads: Sequence[Upload]):
    docs: List[Tuple[ProcessedDocument, Upload]] = []
    unreadable: List[Dict[str, str]] = []
    for up in uploads:
        try:
            docs.append((extract_document(up.data, up.filename, up.content_type), up))
        except DocumentError as exc:
            unreadable.append({"filename": up.filename, "reason": str(exc)})
    return docs, unreadable


def process_uploads(
    uploads: Sequence[Upload],
    api_key: str,
    user_id: str,
    clients: Sequence[Any],
    benchmarks: List[Dict[str, Any]],
    default_gender: Optional[str] = None,
) -> Dict[str, Any]:
    """Extract, consolidate, range-check and client-match a batch of lab documents.

    Raises ``DocumentError`` when nothing in the batch is a usable lab report and
    lets ``ExtractionError`` from the API call propagate.
    """
    if not uploads:
        raise DocumentError("No files selected")
    for up in uploads:
        validate_upload(up.data, up.filename, up.content_type)

    read, unreadable = _read_documents(uploads)
    batch = filter_documents([doc for doc, _ in read])
    skipped = unreadable + [{"filename": d.filename, "reason": reason} for d, reason in batch.skipped]
    if not batch.processable:
        raise DocumentError(
            "No lab data found in the uploaded files: "
            + "; ".join(f"{s['filename']}: {s['reason']}" for s in skipped)
        )

    extractions = [extract_biomarkers(api_key, doc) for doc in batch.processable]
    # only files that made it through extraction are kept on disk
    kept = {id(doc) for doc in batch.processable}
    stored = [
        store_local_upload(up.data, up.filename, user_id)[1] for doc, up in read if id(doc) in kept
    ]
    consolidation = consolidate_patient_info([e.patient_info for e in extractions])
    patient = consolidation["consolidated"]

    merged = merge_biomarkers(extractions)
    normalized = normalize_biomarkers(merged, benchmarks)
    gender = patient.get("gender") or default_gender
    results = match_biomarkers_with_ranges(normalized, benchmarks, gender)
    match = match_client(PatientInfo.from_dict(patient), clients)

    logger.info({
        "function": "process_uploads",
        "files": len(uploads),
        "processed": len(batch.processable),
        "skipped": len(skipped),
        "biomarkers": len(merged),
        "match": match.suggested_action,
    })
    return {
        "files": [e.to_dict() for e in extractions],
        "skipped": skipped,
        "patient_info": patient,
        "discrepancies": consolidation["discrepancies"],
        "patient_confidence": consolidation["confidence"],
        "biomarkers": normalized,
        "panel_name": generate_panel_name(merged),
        "lab_test_date": patient.get("test_date"),
        "results": results,
        "summary": generate_summary(results),
        "client_match": match.to_dict(),
        "stored_files": stored,
    }


__all__ = ["Upload", "process_uploads"]
