"""SQLAlchemy ORM models for the embedded table database."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from rolltables.database import Base

# ---------------------------------------------------------------------------
# Timestamp mixin
# ---------------------------------------------------------------------------


class TimestampMixin:
    """Adds created_at and updated_at columns to any model."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


# ---------------------------------------------------------------------------
# Models
# ---------------------------------------------------------------------------


class TableRecord(TimestampMixin, Base):
    """A stored roll table.

    The whole serialized Table lives in ``payload``; name, roll expression and
    the rollable flag are copied out so listings don't decode every payload.
    """

    __tablename__ = "table_records"

    name: Mapped[str] = mapped_column(String(255), primary_key=True)
    roll_expression: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    rollable_table: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    payload: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False)
