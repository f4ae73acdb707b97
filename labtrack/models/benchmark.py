import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, Boolean, DateTime, ForeignKey, UniqueConstraint, text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from labtrack.db.session import Base
from labtrack.models.columns import json_col_type


class CustomBenchmark(Base):
    """User-defined optimal range; overrides the default catalogue entry of the same name."""
    __tablename__ = "custom_benchmarks"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_custom_benchmarks_user_name"),
    )

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    male_range: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    female_range: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    units: Mapped[Optional[list]] = mapped_column(json_col_type(), nullable=True, default=list)
    category: Mapped[Optional[str]] = mapped_column(String(120), nullable=True)
    aliases: Mapped[Optional[list]] = mapped_column(json_col_type(), nullable=True, default=list)
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default=text("true")
    )

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

    user = relationship("User", back_populates="benchmarks")
