"""Domain error taxonomy shared by services, repositories and the HTTP layer."""

from enum import Enum


class ErrorKind(str, Enum):
    """Tag carried by every DomainError; the HTTP layer maps it to a status code."""

    VALIDATION = "validation"
    ALREADY_EXISTS = "already_exists"
    INVALID_CREDENTIALS = "invalid_credentials"
    INACTIVE_ACCOUNT = "inactive_account"
    INVALID_TOKEN = "invalid_token"
    NOT_FOUND = "not_found"


class DomainError(Exception):
    """Base class for expected business failures."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class ValidationError(DomainError):
    """Malformed or missing input. Raised before any storage access."""

    kind = ErrorKind.VALIDATION

    def __init__(self, message: str, field: str | None = None) -> None:
        self.field = field
        super().__init__(message)


class AlreadyExistsError(DomainError):
    """Uniqueness collision (email, username, product name)."""

    kind = ErrorKind.ALREADY_EXISTS


class InvalidCredentialsError(DomainError):
    """Bad email/password combination. Also covers unknown email."""

    kind = ErrorKind.INVALID_CREDENTIALS

    def __init__(self, message: str = "invalid email or password") -> None:
        super().__init__(message)


class InactiveAccountError(DomainError):
    kind = ErrorKind.INACTIVE_ACCOUNT

    def __init__(self, message: str = "user account is inactive") -> None:
        super().__init__(message)


class InvalidTokenError(DomainError):
    """Bad signature, structure, algorithm or expiry."""

    kind = ErrorKind.INVALID_TOKEN

    def __init__(self, message: str = "invalid or expired token") -> None:
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """Token past its exp claim. Callers outside the token manager see InvalidTokenError."""


class NotFoundError(DomainError):
    kind = ErrorKind.NOT_FOUND
