from catalog_api.repositories.product import ProductRepository
from catalog_api.repositories.user import UserRepository

__all__ = ["ProductRepository", "UserRepository"]
