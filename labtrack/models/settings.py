import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy import String, DateTime, ForeignKey, text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from labtrack.models.columns import json_col_type

from labtrack.db.session import Base
from labtrack.utils.encryption import EncryptedText


class Settings(Base):
    """Per-user API key and preferences; one row per account."""
    __tablename__ = "settings"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        unique=True,
        index=True,
        nullable=False,
    )

    api_key: Mapped[Optional[str]] = mapped_column(EncryptedText, nullable=True)
    preferences: Mapped[Optional[dict]] = mapped_column(json_col_type(), nullable=True, default=dict)

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

    user = relationship("User", back_populates="settings")
