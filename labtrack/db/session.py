from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy import create_engine, event, text
from typing import Optional
import logging
import os

logger = logging.getLogger("labtrack")

DATABASE_URL = (os.getenv("DATABASE_URL") or "").strip()
SQL_ECHO = (os.getenv("SQL_ECHO", "false") or "false").lower() in {"1", "true", "yes", "on"}


class DatabaseNotConfigured(RuntimeError):
    """Raised when a request needs the database but DATABASE_URL is unset."""

    def __init__(self) -> None:
        super().__init__("Database is not configured. Set DATABASE_URL to your Supabase/Postgres connection string.")


def build_engine(url: str):
    kwargs = {"echo": SQL_ECHO, "future": True, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
    elif url.startswith("postgresql") and "sslmode=" not in url.lower():
        # Supabase and many hosted Postgres instances require SSL
        kwargs["connect_args"] = {"sslmode": "require"}
    return create_engine(url, **kwargs)


engine = build_engine(DATABASE_URL) if DATABASE_URL else None
SessionLocal = sessionmaker(bind=engine, autocommit=False, autoflush=False) if engine is not None else None

Base = declarative_base()


def is_configured() -> bool:
    return SessionLocal is not None


def get_db():
    if SessionLocal is None:
        raise DatabaseNotConfigured()
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


@event.listens_for(Session, "after_begin")
def _apply_row_owner(session: Session, transaction, connection) -> None:
    owner = session.info.get("row_owner")
    if owner is None or connection.dialect.name != "postgresql":
        return
    # is_local=true: cleared when the transaction ends
    connection.execute(
        text("SELECT set_config('app.current_user_id', :uid, true)"),
        {"uid": owner},
    )


def bind_row_owner(db: Session, user_id: Optional[str]) -> None:
    """Expose the authenticated user to Postgres row-level-security policies.

    The policies created by the initial migration compare ``user_id`` against
    ``current_setting('app.current_user_id')``. The owner is stored on the
    session and re-applied at the start of every transaction, since each
    commit may hand the session a different pooled connection. Other dialects
    rely on the query-level ``user_id`` filters only.
    """
    db.info["row_owner"] = str(user_id or "")
    if db.in_transaction():
        _apply_row_owner(db, None, db.connection())
