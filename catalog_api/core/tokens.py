"""Stateless JWT issuance and verification."""

from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from pydantic import ValidationError as PydanticValidationError

from catalog_api.core.errors import ExpiredTokenError, InvalidTokenError
from catalog_api.schemas.auth import TokenClaims

# Only a symmetric MAC is accepted; tokens claiming any other alg are rejected.
ALGORITHM = "HS256"

REQUIRED_CLAIMS = ["exp", "iat", "nbf", "sub"]


class TokenManager:
    """
    Issue and verify bearer tokens signed with a shared secret.

    Holds only the secret and the token lifetime, both fixed at construction,
    so a single instance can be shared across requests.
    """

    def __init__(self, secret: str, lifetime: timedelta) -> None:
        if not secret:
            raise ValueError("token secret must be non-empty")
        self._secret = secret
        self._lifetime = lifetime

    @property
    def lifetime(self) -> timedelta:
        return self._lifetime

    def issue(self, claims: TokenClaims) -> tuple[str, int]:
        """Return (token, expires_at) where expires_at is a unix timestamp in seconds."""
        now = datetime.now(UTC)
        expires_at = now + self._lifetime
        payload: dict[str, Any] = {
            **claims.model_dump(),
            "sub": claims.username,
            "iat": now,
            "nbf": now,
            "exp": expires_at,
        }
        token = jwt.encode(payload, self._secret, algorithm=ALGORITHM)
        return token, int(expires_at.timestamp())

    def validate(self, token: str) -> TokenClaims:
        """
        Verify algorithm, signature and expiry; return the embedded claims.
        Raises ExpiredTokenError past exp and InvalidTokenError for anything else.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError() from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        return _claims_from_payload(payload)

    def is_expired(self, token: str) -> bool:
        """True when exp has passed, or when the token cannot be parsed and verified."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "verify_nbf": False, "require": ["exp"]},
            )
        except jwt.PyJWTError:
            return True
        exp = payload.get("exp")
        if not isinstance(exp, (int, float)):
            return True
        return exp <= datetime.now(UTC).timestamp()

    def extract_claims_unverified(self, token: str) -> TokenClaims:
        """
        Read claims without checking signature or expiry.
        For diagnostics only; never treat the result as an authenticated identity.
        """
        try:
            payload = jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise InvalidTokenError() from e
        return _claims_from_payload(payload)


def _claims_from_payload(payload: dict[str, Any]) -> TokenClaims:
    try:
        return TokenClaims.model_validate(payload)
    except PydanticValidationError as e:
        raise InvalidTokenError() from e
