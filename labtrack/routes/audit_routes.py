# labtrack/routes/audit_routes.py
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from labtrack.auth.deps import get_current_user
from labtrack.db.session import get_db
from labtrack.models.user import User
from labtrack.schemas.audit import AuditLogOut
from labtrack.services.audit import list_events

router = APIRouter(prefix="/api/audit-logs", tags=["audit"])


@router.get("", response_model=List[AuditLogOut])
def list_audit_logs(
    action: Optional[str] = Query(default=None),
    limit: int = Query(default=50, ge=1, le=500),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return list_events(db, current_user.id, action=action, limit=limit)
