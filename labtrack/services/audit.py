"""Audit trail of account activity and data changes (``audit_logs``).

``record_event`` only adds the entry to the session, so it lands in the same
transaction as the change it describes and is committed (or rolled back)
with it.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from labtrack.models.audit import AUDIT_STATUSES, AuditLog

logger = logging.getLogger("labtrack")

AUDIT_ACTIONS = {
    "register",
    "login",
    "login_failed",
    "create_client",
    "update_client",
    "delete_client",
    "merge_clients",
    "create_analysis",
    "update_analysis",
    "delete_analysis",
    "update_settings",
    "create_benchmark",
    "update_benchmark",
    "delete_benchmark",
    "seed_benchmarks",
    "reset_benchmarks",
    "import_benchmarks",
}


def record_event(
    db: Session,
    user_id: Optional[str],
    action: str,
    resource_type: Optional[str] = None,
    resource_id: Optional[str] = None,
    status: str = "success",
    error_message: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
    user_email: Optional[str] = None,
) -> AuditLog:
    if action not in AUDIT_ACTIONS:
        raise ValueError(f"Unknown audit action: {action}")
    if status not in AUDIT_STATUSES:
        raise ValueError(f"Unknown audit status: {status}")
    entry = AuditLog(
        user_id=str(user_id) if user_id else None,
        user_email=user_email,
        action=action,
        resource_type=resource_type,
        resource_id=str(resource_id) if resource_id else None,
        status=status,
        error_message=error_message,
        details=dict(metadata or {}),
    )
    db.add(entry)
    logger.info({
        "event": "audit",
        "action": action,
        "resource_type": resource_type,
        "resource_id": entry.resource_id,
        "status": status,
    })
    return entry


def list_events(
    db: Session,
    user_id: str,
    action: Optional[str] = None,
    limit: int = 50,
) -> List[AuditLog]:
    """Newest first."""
    q = db.query(AuditLog).filter(AuditLog.user_id == str(user_id))
    if action:
        q = q.filter(AuditLog.action == action)
    return q.order_by(desc(AuditLog.created_at)).limit(limit).all()


__all__ = ["AUDIT_ACTIONS", "record_event", "list_events"]
