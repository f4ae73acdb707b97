# labtrack/routes/settings_routes.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from labtrack.auth.deps import get_current_user
from labtrack.db.session import get_db
from labtrack.models.user import User
from labtrack.schemas.settings import SettingsOut, SettingsUpdate
from labtrack.services import settings as settings_service

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=SettingsOut)
def get_settings(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    row = settings_service.get_or_create_settings(db, current_user.id)
    return settings_service.serialize_settings(row)


@router.put("", response_model=SettingsOut)
def update_settings(
    payload: SettingsUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Store the Claude API key (validated, encrypted at rest) and UI preferences."""
    row = settings_service.get_or_create_settings(db, current_user.id)
    try:
        row = settings_service.update_settings(
            db,
            row,
            api_key=payload.api_key,
            clear_api_key=payload.clear_api_key,
            preferences=payload.preferences,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return settings_service.serialize_settings(row)
