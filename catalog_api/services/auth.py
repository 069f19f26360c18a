"""Registration, login and account rules; token issuance is delegated to TokenManager."""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from catalog_api.core.errors import (
    AlreadyExistsError,
    DomainError,
    InactiveAccountError,
    InvalidCredentialsError,
    InvalidTokenError,
    NotFoundError,
)
from catalog_api.core.security import (
    BCRYPT_ROUNDS,
    hash_password,
    validate_email,
    validate_password_strength,
    validate_username,
    verify_password,
)
from catalog_api.core.tokens import TokenManager
from catalog_api.models import User
from catalog_api.repositories.user import USER_CONFLICT_MESSAGE, UserRepository
from catalog_api.schemas.auth import TokenClaims, UserFilter
from catalog_api.services.pagination import normalize_page, page_offset, total_pages

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("first_name", "last_name", "username")


class AuthService:
    """
    Credential and identity rules.

    The repository's unique indexes are the real uniqueness guard; the
    exists_by_* checks here only fail fast on the common case.
    """

    def __init__(
        self,
        user_repo: UserRepository,
        token_manager: TokenManager,
        bcrypt_rounds: int = BCRYPT_ROUNDS,
    ) -> None:
        self._users = user_repo
        self._tokens = token_manager
        self._bcrypt_rounds = bcrypt_rounds

    def register(
        self,
        email: str,
        username: str,
        password: str,
        first_name: str = "",
        last_name: str = "",
    ) -> User:
        validate_email(email)
        validate_username(username)
        validate_password_strength(password)

        if self._users.exists_by_email(email):
            raise AlreadyExistsError(USER_CONFLICT_MESSAGE)
        if self._users.exists_by_username(username):
            raise AlreadyExistsError(USER_CONFLICT_MESSAGE)

        user = self._users.create(
            {
                "email": email,
                "username": username,
                "first_name": first_name or "",
                "last_name": last_name or "",
                "is_active": True,
                "is_admin": False,
            },
            password_hash=hash_password(password, self._bcrypt_rounds),
        )
        self._record_login(user)
        logger.info("User registered", extra={"user_id": user.id})
        return user

    def login(self, email: str, password: str) -> User:
        if not email or not password:
            raise InvalidCredentialsError()
        try:
            user = self._users.get_by_email(email)
        except NotFoundError as e:
            raise InvalidCredentialsError() from e

        if not user.is_active:
            logger.info("Login rejected for inactive account", extra={"user_id": user.id})
            raise InactiveAccountError()
        if not verify_password(password, user.password_hash):
            raise InvalidCredentialsError()

        self._record_login(user)
        logger.info("User logged in", extra={"user_id": user.id})
        return user

    def change_password(self, user_id: int, current_password: str, new_password: str) -> None:
        user = self._users.get_by_id(user_id)
        if not verify_password(current_password or "", user.password_hash):
            raise InvalidCredentialsError()
        validate_password_strength(new_password)
        self._users.update_password(user.id, hash_password(new_password, self._bcrypt_rounds))
        logger.info("Password changed", extra={"user_id": user.id})

    def update_profile(self, user_id: int, fields: dict[str, Any]) -> User:
        """Apply the supplied profile fields only; unknown keys are ignored."""
        user = self._users.get_by_id(user_id)
        updates = {k: v for k, v in fields.items() if k in PROFILE_FIELDS and v is not None}

        new_username = updates.get("username")
        if new_username is not None and new_username != user.username:
            validate_username(new_username)
            if self._users.exists_by_username(new_username):
                raise AlreadyExistsError(USER_CONFLICT_MESSAGE)
        if not updates:
            return user
        return self._users.update(user, updates)

    def get_user(self, user_id: int) -> User:
        return self._users.get_by_id(user_id)

    def list_users(
        self, user_filter: UserFilter | None, page: int, page_size: int
    ) -> tuple[list[User], int, int, int, int]:
        """Return (users, total, page, page_size, total_pages) after normalizing the page."""
        page, page_size = normalize_page(page, page_size)
        total = self._users.count(user_filter)
        users = self._users.get_all(user_filter, page_offset(page, page_size), page_size)
        return users, total, page, page_size, total_pages(total, page_size)

    def delete_user(self, user_id: int) -> None:
        self._users.delete(user_id)
        logger.info("User soft-deleted", extra={"user_id": user_id})

    def issue_token(self, user: User) -> tuple[str, int]:
        """Mint a token from the user's current state. Returns (token, expires_at)."""
        claims = TokenClaims(
            user_id=user.id,
            username=user.username,
            email=user.email,
            is_admin=bool(user.is_admin),
        )
        return self._tokens.issue(claims)

    def validate_token(self, token: str) -> TokenClaims:
        return self._tokens.validate(token)

    def refresh_token(self, token: str) -> tuple[str, int]:
        """
        Exchange a still-valid token for a fresh one carrying current claims.
        The presented token is not revoked and stays usable until it expires.
        """
        claims = self._tokens.validate(token)
        try:
            user = self._users.get_by_id(claims.user_id)
        except NotFoundError as e:
            raise InvalidTokenError() from e
        if not user.is_active:
            raise InactiveAccountError()
        return self.issue_token(user)

    def _record_login(self, user: User) -> None:
        # A failed commit rolls back and expires user; read the id first.
        user_id = user.id
        try:
            self._users.update_last_login(user_id)
        except (SQLAlchemyError, DomainError) as e:
            logger.warning(
                "Failed to record last login",
                extra={"user_id": user_id, "reason": str(e)[:200]},
            )
