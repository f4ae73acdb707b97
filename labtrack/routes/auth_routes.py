# labtrack/routes/auth_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, Body, status
from sqlalchemy.orm import Session

from labtrack.db.session import bind_row_owner, get_db
from labtrack.models.user import User
from labtrack.auth.jwt import (
    verify_password,
    create_access_token,
    create_token_pair,
    verify_refresh_token,
    hash_password,
)
from labtrack.auth.schemas import UserCreate, UserLogin, UserOut, RefreshRequest
from labtrack.services.audit import record_event

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger("labtrack")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: UserCreate = Body(...), db: Session = Depends(get_db)):
    """Create an account; the settings row is created alongside it."""
    email = str(payload.email).lower()
    existing = db.query(User).filter(User.email == email).first()
    if existing:
        raise HTTPException(status_code=409, detail="User with this email already exists")

    user = User(
        email=email,
        hashed_password=hash_password(payload.password),
        name=(payload.name or None),
    )
    db.add(user)
    db.flush()
    bind_row_owner(db, user.id)
    record_event(db, user.id, "register", "auth", user.id, user_email=email)
    db.commit()
    db.refresh(user)
    logger.info({"event": "user_registered", "user_id": user.id})
    tokens = create_token_pair(user.id)
    return {**tokens, "user": UserOut.model_validate(user).model_dump()}


@router.post("/login")
def login(payload: UserLogin = Body(...), db: Session = Depends(get_db)):
    email = str(payload.email).lower()
    user = db.query(User).filter(User.email == email).first()
    if not user or not verify_password(payload.password, user.hashed_password):
        if user is not None:
            bind_row_owner(db, user.id)
        record_event(
            db, user.id if user else None, "login_failed", "auth",
            status="failure", error_message="Invalid credentials", user_email=email,
        )
        db.commit()
        raise HTTPException(status_code=401, detail="Invalid credentials")
    bind_row_owner(db, user.id)
    record_event(db, user.id, "login", "auth", user.id, user_email=email)
    db.commit()
    tokens = create_token_pair(user.id)
    return {**tokens, "user": UserOut.model_validate(user).model_dump()}


@router.post("/refresh")
def refresh(payload: RefreshRequest, db: Session = Depends(get_db)):
    """Exchange a refresh token for a new access token."""
    data = verify_refresh_token(payload.refresh_token)
    if not data:
        raise HTTPException(status_code=401, detail="Invalid refresh token")
    user = db.query(User).filter(User.id == str(data["sub"])).first()
    if not user:
        raise HTTPException(status_code=401, detail="User not found")
    access = create_access_token({"sub": str(user.id)})
    return {"access_token": access, "token_type": "bearer"}
