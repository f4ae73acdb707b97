import uuid
from datetime import date, datetime
from typing import Optional, List

from sqlalchemy import String, Date, DateTime, ForeignKey, Text, CheckConstraint, text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from labtrack.db.session import Base
from labtrack.models.columns import json_col_type

GENDERS = ("male", "female", "other")
STATUSES = ("active", "past")


class Client(Base):
    __tablename__ = "clients"
    __table_args__ = (
        CheckConstraint("gender IN ('male', 'female', 'other')", name="ck_clients_gender"),
        CheckConstraint("status IN ('active', 'past')", name="ck_clients_status"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )

    full_name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(16), nullable=True)
    status: Mapped[str] = mapped_column(String(16), nullable=False, default="active", index=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    tags: Mapped[Optional[list]] = mapped_column(json_col_type(), nullable=True, default=list)

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

    user = relationship("User", back_populates="clients")
    analyses: Mapped[List["Analysis"]] = relationship(
        "Analysis",
        back_populates="client",
        cascade="all, delete-orphan",
    )
