"""Persistence for user accounts. All reads exclude soft-deleted rows."""

from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from catalog_api.core.errors import NotFoundError
from catalog_api.models import User
from catalog_api.repositories.base import apply_dict_updates, commit_or_conflict, utcnow
from catalog_api.schemas.auth import UserFilter

USER_CONFLICT_MESSAGE = "user with this email or username already exists"

# Never writable through create/update dictionaries.
PROTECTED_FIELDS = {"id", "password_hash", "created_at", "updated_at", "deleted_at"}


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def _live(self) -> Query:
        return self.session.query(User).filter(User.deleted_at.is_(None))

    def create(self, create_data: dict[str, Any], password_hash: str) -> User:
        """Insert a user. A unique-index violation raises AlreadyExistsError."""
        user = User(password_hash=password_hash)
        apply_dict_updates(user, create_data, PROTECTED_FIELDS)
        self.session.add(user)
        commit_or_conflict(self.session, USER_CONFLICT_MESSAGE)
        self.session.refresh(user)
        return user

    def get_by_id(self, user_id: int) -> User:
        user = self._live().filter(User.id == user_id).first()
        if user is None:
            raise NotFoundError("user not found")
        return user

    def get_by_email(self, email: str) -> User:
        user = self._live().filter(User.email == email).first()
        if user is None:
            raise NotFoundError("user not found")
        return user

    def get_by_username(self, username: str) -> User:
        user = self._live().filter(User.username == username).first()
        if user is None:
            raise NotFoundError("user not found")
        return user

    def exists_by_email(self, email: str) -> bool:
        return self._live().filter(User.email == email).count() > 0

    def exists_by_username(self, username: str) -> bool:
        return self._live().filter(User.username == username).count() > 0

    def get_all(self, user_filter: UserFilter | None, offset: int, limit: int) -> list[User]:
        query = _apply_filter(self._live(), user_filter)
        return query.order_by(User.id).offset(offset).limit(limit).all()

    def count(self, user_filter: UserFilter | None) -> int:
        return _apply_filter(self._live(), user_filter).count()

    def update(self, user: User, update_data: dict[str, Any]) -> User:
        """Apply profile fields to a loaded user and persist them."""
        apply_dict_updates(user, update_data, PROTECTED_FIELDS)
        commit_or_conflict(self.session, USER_CONFLICT_MESSAGE)
        self.session.refresh(user)
        return user

    def update_last_login(self, user_id: int) -> None:
        user = self.get_by_id(user_id)
        user.last_login_at = utcnow()
        commit_or_conflict(self.session, USER_CONFLICT_MESSAGE)

    def update_password(self, user_id: int, hashed_password: str) -> None:
        user = self.get_by_id(user_id)
        user.password_hash = hashed_password
        commit_or_conflict(self.session, USER_CONFLICT_MESSAGE)

    def delete(self, user_id: int) -> None:
        """Soft-delete: the row stays, but is invisible to every read above."""
        user = self.get_by_id(user_id)
        user.deleted_at = utcnow()
        commit_or_conflict(self.session, USER_CONFLICT_MESSAGE)


def _apply_filter(query: Query, user_filter: UserFilter | None) -> Query:
    if user_filter is None:
        return query
    if user_filter.is_active is not None:
        query = query.filter(User.is_active.is_(user_filter.is_active))
    if user_filter.is_admin is not None:
        query = query.filter(User.is_admin.is_(user_filter.is_admin))
    if user_filter.search:
        pattern = f"%{user_filter.search}%"
        query = query.filter(
            or_(
                User.username.ilike(pattern),
                User.email.ilike(pattern),
                User.first_name.ilike(pattern),
                User.last_name.ilike(pattern),
            )
        )
    return query
