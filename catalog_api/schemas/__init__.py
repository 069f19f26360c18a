"""Pydantic request/response schemas."""

from catalog_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
    UserResponse,
    UserFilter,
    UsersListResponse,
)
from catalog_api.schemas.common import ErrorResponse, MessageResponse
from catalog_api.schemas.health import HealthResponse
from catalog_api.schemas.product import (
    ProductCreateRequest,
    ProductFilter,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
    StockUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "MessageResponse",
    "PasswordChangeRequest",
    "ProductCreateRequest",
    "ProductFilter",
    "ProductListResponse",
    "ProductResponse",
    "ProductUpdateRequest",
    "ProfileUpdateRequest",
    "RefreshTokenRequest",
    "RegisterRequest",
    "StockUpdateRequest",
    "TokenClaims",
    "TokenResponse",
    "UserResponse",
    "UserFilter",
    "UsersListResponse",
]
