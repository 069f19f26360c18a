"""Registration, login, profile routes and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

from catalog_api.api.v1.dependencies import get_auth_service, get_token_manager
from catalog_api.core.errors import InvalidTokenError
from catalog_api.core.tokens import TokenManager
from catalog_api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordChangeRequest,
    ProfileUpdateRequest,
    RefreshTokenRequest,
    RegisterRequest,
    TokenClaims,
    TokenResponse,
    UserFilter,
    UserResponse,
    UsersListResponse,
)
from catalog_api.schemas.common import MessageResponse
from catalog_api.services.auth import AuthService

router = APIRouter()

BEARER_SCHEME = "Bearer"


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": BEARER_SCHEME},
    )


def _parse_bearer(authorization: str) -> str | None:
    """Return the token from 'Bearer <token>', or None if the header has any other shape."""
    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != BEARER_SCHEME:
        return None
    return parts[1]


def get_bearer_token(
    authorization: Annotated[str | None, Header()] = None,
) -> str:
    """Dependency: extract the bearer token. Raises 401 before any token validation."""
    if not authorization:
        raise _unauthorized("Authorization header is required")
    token = _parse_bearer(authorization)
    if token is None:
        raise _unauthorized("Invalid authorization header format")
    return token


def _attach_claims(request: Request, claims: TokenClaims) -> None:
    request.state.claims = claims
    request.state.user_id = claims.user_id
    request.state.username = claims.username
    request.state.email = claims.email
    request.state.is_admin = claims.is_admin


def get_current_user(
    request: Request,
    token: Annotated[str, Depends(get_bearer_token)],
    token_manager: Annotated[TokenManager, Depends(get_token_manager)],
) -> TokenClaims:
    """Dependency: require a valid Bearer JWT and return its claims. Raises 401 if invalid or expired."""
    try:
        claims = token_manager.validate(token)
    except InvalidTokenError:
        raise _unauthorized("Invalid or expired token")
    _attach_claims(request, claims)
    return claims


def get_optional_user(
    request: Request,
    token_manager: Annotated[TokenManager, Depends(get_token_manager)],
    authorization: Annotated[str | None, Header()] = None,
) -> TokenClaims | None:
    """Dependency: like get_current_user, but returns None instead of rejecting."""
    if not authorization:
        return None
    token = _parse_bearer(authorization)
    if token is None:
        return None
    try:
        claims = token_manager.validate(token)
    except InvalidTokenError:
        return None
    _attach_claims(request, claims)
    return claims


def require_admin(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
) -> TokenClaims:
    """Dependency: require authenticated user with the admin flag. Raises 403 for non-admin."""
    if not current_user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def _token_response(token: str, expires_at: int) -> TokenResponse:
    return TokenResponse(access_token=token, token_type="bearer", expires_at=expires_at)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """Create an account and return it with a fresh access token."""
    user = service.register(
        email=body.email,
        username=body.username,
        password=body.password,
        first_name=body.first_name,
        last_name=body.last_name,
    )
    token, expires_at = service.issue_token(user)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=_token_response(token, expires_at),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns the user and a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user = service.login(body.email, body.password)
    token, expires_at = service.issue_token(user)
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=_token_response(token, expires_at),
    )


@router.post("/refresh", response_model=TokenResponse)
def refresh(
    body: RefreshTokenRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> TokenResponse:
    """Exchange a still-valid access token for a new one with current claims."""
    token, expires_at = service.refresh_token(body.refresh_token)
    return _token_response(token, expires_at)


@router.get("/profile", response_model=UserResponse)
def get_profile(
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    return UserResponse.model_validate(service.get_user(current_user.user_id))


@router.put("/profile", response_model=UserResponse)
def update_profile(
    body: ProfileUpdateRequest,
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    """Update first name, last name and/or username. Omitted fields are unchanged."""
    user = service.update_profile(current_user.user_id, body.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)


@router.post("/change-password", response_model=MessageResponse)
def change_password(
    body: PasswordChangeRequest,
    current_user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    service.change_password(current_user.user_id, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    service: Annotated[AuthService, Depends(get_auth_service)],
    page: int = 1,
    page_size: int = 10,
    is_active: bool | None = None,
    is_admin: bool | None = None,
    search: Annotated[str | None, Query(max_length=255)] = None,
) -> UsersListResponse:
    """List users with optional filters (admin only)."""
    user_filter = UserFilter(is_active=is_active, is_admin=is_admin, search=search)
    users, total, page, page_size, pages = service.list_users(user_filter, page, page_size)
    return UsersListResponse(
        users=[UserResponse.model_validate(u) for u in users],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=pages,
    )


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserResponse:
    return UserResponse.model_validate(service.get_user(user_id))


@router.delete("/users/{user_id}", response_model=MessageResponse)
def delete_user(
    user_id: int,
    _admin: Annotated[TokenClaims, Depends(require_admin)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Soft-delete a user account (admin only)."""
    service.delete_user(user_id)
    return MessageResponse(message="User deleted successfully")
