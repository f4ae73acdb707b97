import uuid
from datetime import datetime
from typing import Optional, List

from sqlalchemy import (
    String,
    DateTime,
    UniqueConstraint,
    event,
    text,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from labtrack.db.session import Base


def uuid_col_type():
    # Stored as String(36) on every dialect so SQLite tests and Postgres agree
    return String(36)


class User(Base):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
    )

    id: Mapped[str] = mapped_column(
        uuid_col_type(),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
    )
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    hashed_password: Mapped[str] = mapped_column(String(255), nullable=False)
    name: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=func.now(),
    )

    settings: Mapped["Settings"] = relationship(
        "Settings",
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )

    clients: Mapped[List["Client"]] = relationship(
        "Client",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    analyses: Mapped[List["Analysis"]] = relationship(
        "Analysis",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    benchmarks: Mapped[List["CustomBenchmark"]] = relationship(
        "CustomBenchmark",
        back_populates="user",
        cascade="all, delete-orphan",
    )


@event.listens_for(User, "after_insert")
def _create_default_settings(mapper, connection, target: User) -> None:
    """Every new account gets an empty settings row in the same transaction.

    Mirrors the ``on_user_created`` trigger installed by the Postgres migration,
    so SQLite and ORM-only deployments behave the same.
    """
    from labtrack.models.settings import Settings

    if connection.dialect.name == "postgresql":
        # on_user_created trigger already inserted the row
        return
    connection.execute(
        Settings.__table__.insert().values(
            id=str(uuid.uuid4()),
            user_id=target.id,
            preferences={},
        )
    )
