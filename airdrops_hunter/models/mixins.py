"""Mixins for SQLAlchemy models."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


class CreatedAtMixin:
    """Mixin to add an immutable created_at timestamp column."""

    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)
