"""SQLAlchemy ORM models."""

from catalog_api.models.base import Base
from catalog_api.models.product import Product
from catalog_api.models.user import User

__all__ = ["Base", "Product", "User"]
