from __future__ import annotations

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from labtrack.models.analysis import Analysis
from labtrack.models.client import Client, GENDERS, STATUSES
from labtrack.services.audit import record_event
from labtrack.services.client_matcher import PatientInfo, new_client_fields

logger = logging.getLogger("labtrack")

EDITABLE_FIELDS = ("full_name", "email", "date_of_birth", "gender", "status", "notes", "tags")


def coerce_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid date: {value!r} (expected YYYY-MM-DD)") from exc


def _clean(fields: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS}
    if "full_name" in out:
        name = (out["full_name"] or "").strip()
        if not name:
            raise ValueError("Client name is required")
        out["full_name"] = name
    if "date_of_birth" in out:
        out["date_of_birth"] = coerce_date(out["date_of_birth"])
    if out.get("gender") is not None and out["gender"] not in GENDERS:
        raise ValueError("gender must be male, female or other")
    if "status" in out and out["status"] not in STATUSES:
        raise ValueError("status must be active or past")
    if "tags" in out and out["tags"] is None:
        out["tags"] = []
    return out


def list_clients(db: Session, user_id: str, status: Optional[str] = None) -> List[Client]:
    """Newest first; ``status`` narrows to active or past clients."""
    q = db.query(Client).filter(Client.user_id == str(user_id))
    if status:
        q = q.filter(Client.status == status)
    return q.order_by(desc(Client.created_at), desc(Client.id)).all()


def search_clients(db: Session, user_id: str, query: str) -> List[Client]:
    """Every word in ``query`` must appear in the client's name (case-insensitive)."""
    words = [w for w in (query or "").lower().split() if w]
    q = db.query(Client).filter(Client.user_id == str(user_id))
    for word in words:
        q = q.filter(func.lower(Client.full_name).contains(word))
    return q.order_by(Client.full_name).all()


def get_client(db: Session, user_id: str, client_id: str) -> Optional[Client]:
    return (
        db.query(Client)
        .filter(Client.id == str(client_id), Client.user_id == str(user_id))
        .first()
    )


def create_client(db: Session, user_id: str, fields: Dict[str, Any]) -> Client:
    data = _clean(fields)
    if not data.get("full_name"):
        raise ValueError("Client name is required")
    data.setdefault("status", "active")
    data.setdefault("tags", [])
    client = Client(user_id=str(user_id), **data)
    db.add(client)
    db.flush()
    record_event(db, user_id, "create_client", "client", client.id, metadata={"client_name": client.full_name})
    db.commit()
    db.refresh(client)
    logger.info({"function": "create_client", "status": "inserted", "client_id": client.id})
    return client


def auto_create_client(db: Session, user_id: str, info: PatientInfo) -> Client:
    """Create a client from extracted patient details (name required)."""
    return create_client(db, user_id, new_client_fields(info))


def update_client(db: Session, client: Client, fields: Dict[str, Any]) -> Client:
    data = _clean(fields)
    metadata: Dict[str, Any] = {"client_name": client.full_name, "fields": sorted(data)}
    if "status" in data and data["status"] != client.status:
        metadata["status"] = {"old": client.status, "new": data["status"]}
    for key, value in data.items():
        setattr(client, key, value)
    record_event(db, client.user_id, "update_client", "client", client.id, metadata=metadata)
    db.commit()
    db.refresh(client)
    return client


def delete_client(db: Session, client: Client) -> None:
    """Removes the client and, through the FK cascade, its analyses."""
    record_event(db, client.user_id, "delete_client", "client", client.id, metadata={"client_name": client.full_name})
    db.delete(client)
    db.commit()
    logger.info({"function": "delete_client", "status": "deleted", "client_id": client.id})


def archive_client(db: Session, client: Client) -> Client:
    return update_client(db, client, {"status": "past"})


def reactivate_client(db: Session, client: Client) -> Client:
    return update_client(db, client, {"status": "active"})


def merge_clients(db: Session, user_id: str, source: Client, target: Client) -> Dict[str, Any]:
    """Move every analysis from ``source`` to ``target`` and archive ``source``."""
    if source.id == target.id:
        raise ValueError("Cannot merge a client into itself")
    moved = (
        db.query(Analysis)
        .filter(Analysis.client_id == source.id, Analysis.user_id == str(user_id))
        .update({Analysis.client_id: target.id}, synchronize_session=False)
    )
    source.status = "past"
    note = f"Merged into {target.full_name}"
    source.notes = f"{source.notes}\n{note}" if source.notes else note
    record_event(
        db, user_id, "merge_clients", "client", source.id,
        metadata={"target_id": target.id, "moved_analyses": moved},
    )
    db.commit()
    db.refresh(source)
    db.refresh(target)
    logger.info({
        "function": "merge_clients",
        "source_id": source.id,
        "target_id": target.id,
        "moved": moved,
    })
    return {"moved_analyses": moved, "source": source, "target": target}


__all__ = [
    "coerce_date",
    "list_clients",
    "search_clients",
    "get_client",
    "create_client",
    "auto_create_client",
    "update_client",
    "delete_client",
    "archive_client",
    "reactivate_client",
    "merge_clients",
]
