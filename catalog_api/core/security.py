"""Password hashing and credential input validation."""

import re

import bcrypt

from catalog_api.core.errors import ValidationError

# Bcrypt cost (rounds); 12 is a good default for security vs speed.
BCRYPT_ROUNDS = 12

USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 8

EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,}$")


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def validate_email(email: str) -> None:
    if not email:
        raise ValidationError("user email is required", field="email")
    if not EMAIL_PATTERN.match(email):
        raise ValidationError("invalid email format", field="email")


def validate_username(username: str) -> None:
    if not username:
        raise ValidationError("user username is required", field="username")
    if len(username) < USERNAME_MIN_LEN:
        raise ValidationError(
            f"username must be at least {USERNAME_MIN_LEN} characters", field="username"
        )
    if len(username) > USERNAME_MAX_LEN:
        raise ValidationError(
            f"username must be less than {USERNAME_MAX_LEN} characters", field="username"
        )


def validate_password_strength(password: str) -> None:
    if len(password or "") < PASSWORD_MIN_LEN:
        raise ValidationError(
            f"password must be at least {PASSWORD_MIN_LEN} characters", field="password"
        )
