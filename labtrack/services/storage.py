"""Local storage for uploaded lab documents, one directory per account."""
from __future__ import annotations

import os
import re
import uuid
from pathlib import Path
from typing import Tuple

DEFAULT_UPLOAD_DIR = Path(
    os.getenv("UPLOAD_ROOT")
    or (Path(__file__).resolve().parent.parent / "uploads")
)

_SAFE_ID = re.compile(r"[^A-Za-z0-9_-]")


def _user_dir(user_id: str) -> Path:
    path = DEFAULT_UPLOAD_DIR / (_SAFE_ID.sub("", str(user_id)) or "anonymous")
    path.mkdir(parents=True, exist_ok=True)
    return path


def store_local_upload(data: bytes, original_name: str | None, user_id: str) -> Tuple[str, str]:
    """Persist the raw upload and return (path, stored filename).

    The stored name is random; only the extension of the original is kept.
    """
    suffix = Path(original_name or "").suffix.lower()
    safe_suffix = suffix if len(suffix) <= 10 else ""
    filename = f"{uuid.uuid4().hex}{safe_suffix}"
    path = _user_dir(user_id) / filename
    path.write_bytes(data)
    return str(path), filename


__all__ = ["store_local_upload", "DEFAULT_UPLOAD_DIR"]
