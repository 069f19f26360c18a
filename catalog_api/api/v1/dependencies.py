"""FastAPI dependency providers wiring settings, sessions and services together."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from catalog_api.core.config import get_settings
from catalog_api.core.database import get_db
from catalog_api.core.tokens import TokenManager
from catalog_api.repositories import ProductRepository, UserRepository
from catalog_api.services.auth import AuthService
from catalog_api.services.products import ProductService


@lru_cache
def get_token_manager() -> TokenManager:
    """One token manager per process, built from settings at first use."""
    settings = get_settings()
    return TokenManager(
        secret=settings.JWT_SECRET.get_secret_value(),
        lifetime=settings.jwt_lifetime,
    )


def get_user_repository(db: Annotated[Session, Depends(get_db)]) -> UserRepository:
    return UserRepository(db)


def get_product_repository(db: Annotated[Session, Depends(get_db)]) -> ProductRepository:
    return ProductRepository(db)


def get_auth_service(
    users: Annotated[UserRepository, Depends(get_user_repository)],
    token_manager: Annotated[TokenManager, Depends(get_token_manager)],
) -> AuthService:
    return AuthService(users, token_manager, bcrypt_rounds=get_settings().BCRYPT_ROUNDS)


def get_product_service(
    products: Annotated[ProductRepository, Depends(get_product_repository)],
) -> ProductService:
    return ProductService(products)
