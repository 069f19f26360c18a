"""Request/response schemas for auth endpoints and token claims."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class TokenClaims(BaseModel):
    """Identity claims embedded in an access token."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    username: str
    email: str
    is_admin: bool = False


class RegisterRequest(BaseModel):
    """Registration payload. Field rules are enforced by the auth service."""

    email: str = Field(default="", description="Email address (login ID)")
    username: str = Field(default="", description="Username (3-50 chars)")
    password: str = Field(default="", description="Password (at least 8 chars)")
    first_name: str = Field(default="", max_length=100)
    last_name: str = Field(default="", max_length=100)


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(default="", description="Email address")
    password: str = Field(default="", description="Password")


class RefreshTokenRequest(BaseModel):
    refresh_token: str = Field(
        ...,
        validation_alias=AliasChoices("refresh_token", "token"),
        description="Current, unexpired access token",
    )


class PasswordChangeRequest(BaseModel):
    current_password: str = Field(default="")
    new_password: str = Field(default="")


class ProfileUpdateRequest(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    first_name: str | None = Field(default=None, max_length=100)
    last_name: str | None = Field(default=None, max_length=100)
    username: str | None = None


class TokenResponse(BaseModel):
    """JWT access token returned after register, login or refresh."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_at: int = Field(..., description="Expiry as a unix timestamp (seconds)")


class UserResponse(BaseModel):
    """Public view of a user account (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    username: str
    first_name: str
    last_name: str
    full_name: str
    is_active: bool
    is_admin: bool
    last_login_at: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AuthResponse(BaseModel):
    user: UserResponse
    token: TokenResponse


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserResponse]
    total: int
    page: int
    page_size: int
    total_pages: int


class UserFilter(BaseModel):
    """Optional admin list filters; None or empty means 'no constraint'."""

    is_active: bool | None = None
    is_admin: bool | None = None
    search: str | None = None
