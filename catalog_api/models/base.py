"""SQLAlchemy declarative Base and shared model configuration."""

from sqlalchemy import Column, DateTime
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""

    pass


class SoftDeleteMixin:
    """Rows are marked deleted instead of being removed; reads filter on deleted_at IS NULL."""

    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
