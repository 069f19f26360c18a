"""Helpers shared by the SQLAlchemy repositories."""

from datetime import UTC, datetime
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from catalog_api.core.errors import AlreadyExistsError


def apply_dict_updates(entity: object, update_data: dict[str, Any], excluded_attrs: set[str] | None) -> None:
    """
    Apply key-value pairs from a dictionary to an ORM entity.

    Keys in excluded_attrs, and keys the entity has no attribute for, are skipped.
    """
    excluded_attrs = excluded_attrs if excluded_attrs else set()
    for key, value in update_data.items():
        if key in excluded_attrs:
            continue
        if hasattr(entity, key):
            setattr(entity, key, value)


def utcnow() -> datetime:
    return datetime.now(UTC)


def commit_or_conflict(session: Session, conflict_message: str) -> None:
    """
    Commit the session. A unique-constraint violation rolls back and becomes
    AlreadyExistsError; other database errors roll back and propagate.
    """
    try:
        session.commit()
    except IntegrityError as e:
        session.rollback()
        raise AlreadyExistsError(conflict_message) from e
    except Exception:
        session.rollback()
        raise
