"""Per-user benchmark set: the default catalogue overlaid with the user's custom ranges."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from labtrack.models.benchmark import CustomBenchmark
from labtrack.services.audit import record_event
from labtrack.services.biomarkers import DEFAULT_BENCHMARKS, default_benchmarks

logger = logging.getLogger("labtrack")

FIELDS = ("name", "male_range", "female_range", "units", "category", "aliases", "is_active")


class BenchmarkError(ValueError):
    """Raised for invalid benchmark payloads or imports."""


class BenchmarkImportError(BenchmarkError):
    """Raised when an imported benchmark file cannot be applied."""


def serialize(row: CustomBenchmark) -> Dict[str, Any]:
    return {
        "id": row.id,
        "name": row.name,
        "male_range": row.male_range or "",
        "female_range": row.female_range or "",
        "units": list(row.units or []),
        "category": row.category,
        "aliases": list(row.aliases or []),
        "is_active": bool(row.is_active),
        "is_custom": True,
    }


def list_custom(db: Session, user_id: str) -> List[CustomBenchmark]:
    return (
        db.query(CustomBenchmark)
        .filter(CustomBenchmark.user_id == str(user_id))
        .order_by(CustomBenchmark.name)
        .all()
    )


def get_custom(db: Session, user_id: str, benchmark_id: str) -> Optional[CustomBenchmark]:
    return (
        db.query(CustomBenchmark)
        .filter(CustomBenchmark.id == str(benchmark_id), CustomBenchmark.user_id == str(user_id))
        .first()
    )


def all_benchmarks(db: Session, user_id: str, include_inactive: bool = False) -> List[Dict[str, Any]]:
    """Defaults first, then custom entries; a custom entry replaces a default with the same name."""
    merged: Dict[str, Dict[str, Any]] = {b["name"]: b for b in default_benchmarks()}
    for row in list_custom(db, user_id):
        merged[row.name] = serialize(row)
    out = list(merged.values())
    if not include_inactive:
        out = [b for b in out if b.get("is_active", True)]
    return out


def _clean(fields: Dict[str, Any], partial: bool = False) -> Dict[str, Any]:
    data = {k: v for k, v in fields.items() if k in FIELDS}
    if not partial or "name" in data:
        name = str(data.get("name") or "").strip()
        if not name:
            raise BenchmarkError("Benchmark name is required")
        data["name"] = name
    for key in ("units", "aliases"):
        if key in data:
            data[key] = [str(v).strip() for v in (data[key] or []) if str(v).strip()]
    if "is_active" in data and not isinstance(data["is_active"], bool):
        raise BenchmarkError("is_active must be true or false")
    if not partial and not (data.get("male_range") or data.get("female_range")):
        raise BenchmarkError("At least one range (male or female) is required")
    return data


def create_custom(db: Session, user_id: str, fields: Dict[str, Any]) -> CustomBenchmark:
    data = _clean(fields)
    data.setdefault("units", [])
    data.setdefault("aliases", [])
    row = CustomBenchmark(user_id=str(user_id), **data)
    db.add(row)
    try:
        db.flush()
    except IntegrityError as exc:
        db.rollback()
        raise BenchmarkError(f"A custom benchmark named {data['name']!r} already exists") from exc
    record_event(db, user_id, "create_benchmark", "benchmark", row.id, metadata={"name": row.name})
    db.commit()
    db.refresh(row)
    return row


def update_custom(db: Session, row: CustomBenchmark, fields: Dict[str, Any]) -> CustomBenchmark:
    data = _clean(fields, partial=True)
    for key, value in data.items():
        setattr(row, key, value)
    record_event(
        db, row.user_id, "update_benchmark", "benchmark", row.id,
        metadata={"name": row.name, "fields": sorted(data)},
    )
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise BenchmarkError("A custom benchmark with that name already exists") from exc
    db.refresh(row)
    return row


def delete_custom(db: Session, row: CustomBenchmark) -> None:
    record_event(db, row.user_id, "delete_benchmark", "benchmark", row.id, metadata={"name": row.name})
    db.delete(row)
    db.commit()


def reset_to_defaults(db: Session, user_id: str) -> int:
    deleted = (
        db.query(CustomBenchmark)
        .filter(CustomBenchmark.user_id == str(user_id))
        .delete(synchronize_session=False)
    )
    record_event(db, user_id, "reset_benchmarks", "benchmark", metadata={"deleted": deleted})
    db.commit()
    logger.info({"function": "reset_to_defaults", "user_id": user_id, "deleted": deleted})
    return deleted


def seed_defaults(db: Session, user_id: str) -> int:
    """Copy catalogue entries the user does not have yet into editable custom rows."""
    existing = {row.name for row in list_custom(db, user_id)}
    added = 0
    for b in DEFAULT_BENCHMARKS:
        if b["name"] in existing:
            continue
        db.add(CustomBenchmark(
            user_id=str(user_id),
            name=b["name"],
            male_range=b["male_range"],
            female_range=b["female_range"],
            units=list(b["units"]),
            category=b.get("category"),
            aliases=list(b.get("aliases") or []),
            is_active=True,
        ))
        added += 1
    record_event(db, user_id, "seed_benchmarks", "benchmark", metadata={"added": added})
    db.commit()
    logger.info({"function": "seed_defaults", "user_id": user_id, "added": added})
    return added


def export_benchmarks(db: Session, user_id: str) -> str:
    return json.dumps(all_benchmarks(db, user_id, include_inactive=True), indent=2, ensure_ascii=False)


def import_benchmarks(db: Session, user_id: str, payload: Any) -> int:
    """Replace the user's custom set with the custom entries of an export."""
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as exc:
            raise BenchmarkImportError("Invalid benchmark data") from exc
    if not isinstance(payload, list):
        raise BenchmarkImportError("Invalid benchmark data")

    try:
        entries = [_clean(item) for item in payload if isinstance(item, dict) and item.get("is_custom")]
    except BenchmarkError as exc:
        raise BenchmarkImportError(str(exc)) from exc
    names = [e["name"] for e in entries]
    if len(names) != len(set(names)):
        raise BenchmarkImportError("Imported benchmarks contain duplicate names")

    db.query(CustomBenchmark).filter(CustomBenchmark.user_id == str(user_id)).delete(
        synchronize_session=False
    )
    for entry in entries:
        entry.setdefault("units", [])
        entry.setdefault("aliases", [])
        db.add(CustomBenchmark(user_id=str(user_id), **entry))
    record_event(db, user_id, "import_benchmarks", "benchmark", metadata={"imported": len(entries)})
    db.commit()
    logger.info({"function": "import_benchmarks", "user_id": user_id, "imported": len(entries)})
    return len(entries)


__all__ = [
    "BenchmarkError",
    "BenchmarkImportError",
    "serialize",
    "list_custom",
    "get_custom",
    "all_benchmarks",
    "create_custom",
    "update_custom",
    "delete_custom",
    "reset_to_defaults",
    "seed_defaults",
    "export_benchmarks",
    "import_benchmarks",
]
