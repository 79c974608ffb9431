"""Declarative base and shared column mixins."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Get the current UTC time."""
    return datetime.now(timezone.utc)


def generate_code(prefix: str) -> str:
    """Generate an opaque external code such as ``emp-3f2a9c1b7d4e``."""
    return f"{prefix}-{uuid4().hex[:12]}"


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TimestampMixin:
    """Adds created_at/updated_at columns.

    Timestamps are set client-side so they are available right after a
    flush without another round trip.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False
    )
