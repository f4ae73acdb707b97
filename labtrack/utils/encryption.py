import base64
import hashlib
import json
import os
from typing import Any

from cryptography.fernet import Fernet, InvalidToken
from sqlalchemy.types import TypeDecorator, Text


def _build_cipher() -> Fernet:
    """Derive a stable Fernet key from ENCRYPTION_SECRET (or fallback dev secret)."""
    secret = os.getenv("ENCRYPTION_SECRET", "dev-secret-key-change-me").encode("utf-8")
    key = base64.urlsafe_b64encode(hashlib.sha256(secret).digest())
    return Fernet(key)


_CIPHER = _build_cipher()


def mask_secret(value: str | None, visible: int = 4) -> str | None:
    """Return ``sk-ant-…abcd`` style masking for display; never the clear value."""
    if not value:
        return None
    tail = value[-visible:] if len(value) > visible else ""
    head = value[:7] if value.startswith("sk-ant-") else ""
    return f"{head}…{tail}"


class EncryptedText(TypeDecorator):
    """Encrypts/decrypts text values transparently using Fernet."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        if not isinstance(value, str):
            value = str(value)
        return _CIPHER.encrypt(value.encode("utf-8")).decode("utf-8")

    def process_result_value(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        try:
            return _CIPHER.decrypt(value.encode("utf-8")).decode("utf-8")
        except InvalidToken:
            # Rotated ENCRYPTION_SECRET: treat as unset rather than leaking ciphertext
            return None


class EncryptedJSON(TypeDecorator):
    """Encrypts/decrypts JSON-serializable values (analysis results carry PHI)."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        payload = json.dumps(value, default=str)
        return _CIPHER.encrypt(payload.encode("utf-8")).decode("utf-8")

    def process_result_value(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return None
        try:
            raw = _CIPHER.decrypt(value.encode("utf-8")).decode("utf-8")
        except InvalidToken:
            return None
        return json.loads(raw)
