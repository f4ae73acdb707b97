# labtrack/auth/jwt.py
import os
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from jose import jwt, JWTError
from passlib.hash import pbkdf2_sha256

SECRET_KEY = os.getenv("JWT_SECRET", "dev-secret-change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))
REFRESH_TOKEN_EXPIRE_DAYS = int(os.getenv("REFRESH_TOKEN_EXPIRE_DAYS", "7"))


# ---- Password hashing ----
def hash_password(password: str) -> str:
    if not password:
        raise ValueError("Password cannot be empty")
    return pbkdf2_sha256.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return pbkdf2_sha256.verify(password, password_hash)
    except ValueError:
        # malformed hash stored for this account
        return False


# ---- JWT helpers ----
def _encode(claims: Dict[str, Any], expires_delta: timedelta, token_type: str) -> str:
    to_encode = dict(claims)
    to_encode.update({"exp": datetime.now(timezone.utc) + expires_delta, "type": token_type})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    return _encode(data, expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES), "access")


def create_refresh_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    return _encode(data, expires_delta or timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS), "refresh")


def create_token_pair(user_id: str) -> Dict[str, str]:
    claims = {"sub": str(user_id)}
    return {
        "access_token": create_access_token(claims),
        "refresh_token": create_refresh_token(claims),
        "token_type": "bearer",
    }


def decode_token(token: str) -> Optional[Dict[str, Any]]:
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError:
        return None


def verify_refresh_token(token: str) -> Optional[Dict[str, Any]]:
    payload = decode_token(token)
    if not payload or payload.get("type") != "refresh" or not payload.get("sub"):
        return None
    return payload


def get_current_user_from_token(token: str) -> Optional[Dict[str, Any]]:
    payload = decode_token(token)
    if not payload or not payload.get("sub"):
        return None
    # refresh tokens are not accepted as bearer credentials
    if payload.get("type") == "refresh":
        return None
    return payload
