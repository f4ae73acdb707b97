import uuid
from datetime import date, datetime
from typing import Optional

from sqlalchemy import String, Date, DateTime, ForeignKey, Text, text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from labtrack.db.session import Base
from labtrack.models.columns import json_col_type
from labtrack.utils.encryption import EncryptedJSON


class Analysis(Base):
    """One lab upload matched against the benchmark ranges for a client."""
    __tablename__ = "analyses"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False
    )
    client_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("clients.id", ondelete="CASCADE"), index=True, nullable=False
    )

    lab_test_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True, index=True)
    analysis_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=text("CURRENT_TIMESTAMP"),
        index=True,
    )

    # list of {biomarker_name, value, unit, optimal_range, test_date, status}
    results: Mapped[Optional[list]] = mapped_column(EncryptedJSON, nullable=True)
    summary: Mapped[Optional[dict]] = mapped_column(json_col_type(), nullable=True)
    panel_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    pdf_files: Mapped[Optional[list]] = mapped_column(json_col_type(), nullable=True, default=list)

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

    user = relationship("User", back_populates="analyses")
    client = relationship("Client", back_populates="analyses")
