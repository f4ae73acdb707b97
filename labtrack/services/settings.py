from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from labtrack.models.client import GENDERS
from labtrack.models.settings import Settings
from labtrack.services.audit import record_event
from labtrack.services.extraction import validate_api_key
from labtrack.utils.encryption import mask_secret

logger = logging.getLogger("labtrack")

KNOWN_PREFERENCES = {"default_gender", "auto_accept_high_confidence", "show_missing_biomarkers"}
BOOLEAN_PREFERENCES = ("auto_accept_high_confidence", "show_missing_biomarkers")


def _check_preferences(preferences: Dict[str, Any]) -> None:
    unknown = sorted(set(preferences) - KNOWN_PREFERENCES)
    if unknown:
        raise ValueError(f"Unknown preference(s): {', '.join(unknown)}")
    gender = preferences.get("default_gender")
    if gender is not None and gender not in GENDERS:
        raise ValueError("default_gender must be male, female or other")
    for key in BOOLEAN_PREFERENCES:
        if key in preferences and not isinstance(preferences[key], bool):
            raise ValueError(f"{key} must be true or false")


def get_or_create_settings(db: Session, user_id: str) -> Settings:
    """The signup hook normally creates the row; accounts that predate it get one lazily."""
    row = db.query(Settings).filter(Settings.user_id == str(user_id)).first()
    if row is None:
        row = Settings(user_id=str(user_id), preferences={})
        db.add(row)
        db.commit()
        db.refresh(row)
    return row


def update_settings(
    db: Session,
    row: Settings,
    api_key: Optional[str] = None,
    clear_api_key: bool = False,
    preferences: Optional[Dict[str, Any]] = None,
) -> Settings:
    _check_preferences(preferences or {})

    if clear_api_key:
        row.api_key = None
    elif api_key is not None:
        error = validate_api_key(api_key.strip())
        if error:
            raise ValueError(error)
        row.api_key = api_key.strip()

    if preferences:
        merged = dict(row.preferences or {})
        merged.update(preferences)
        row.preferences = merged

    record_event(
        db, row.user_id, "update_settings", "settings", row.id,
        metadata={
            "api_key_set": bool(row.api_key),
            "api_key_changed": clear_api_key or api_key is not None,
            "preferences": sorted(preferences or {}),
        },
    )
    db.commit()
    db.refresh(row)
    logger.info({
        "function": "update_settings",
        "user_id": row.user_id,
        "api_key_set": bool(row.api_key),
        "preferences": sorted((row.preferences or {}).keys()),
    })
    return row


def serialize_settings(row: Settings) -> Dict[str, Any]:
    return {
        "has_api_key": bool(row.api_key),
        "api_key_masked": mask_secret(row.api_key) if row.api_key else None,
        "preferences": dict(row.preferences or {}),
        "updated_at": row.updated_at,
    }


__all__ = ["get_or_create_settings", "update_settings", "serialize_settings", "KNOWN_PREFERENCES"]
