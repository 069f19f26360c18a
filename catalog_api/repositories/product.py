"""Persistence for catalog products. All reads exclude soft-deleted rows."""

from typing import Any

from sqlalchemy import or_
from sqlalchemy.orm import Query, Session

from catalog_api.core.errors import NotFoundError
from catalog_api.models import Product
from catalog_api.repositories.base import apply_dict_updates, commit_or_conflict, utcnow
from catalog_api.schemas.product import ProductFilter

PRODUCT_CONFLICT_MESSAGE = "product with this name already exists"

PROTECTED_FIELDS = {"id", "created_at", "updated_at", "deleted_at"}


class ProductRepository:
    def __init__(self, session: Session):
        self.session = session

    def _live(self) -> Query:
        return self.session.query(Product).filter(Product.deleted_at.is_(None))

    def create(self, create_data: dict[str, Any]) -> Product:
        product = Product()
        apply_dict_updates(product, create_data, PROTECTED_FIELDS)
        self.session.add(product)
        commit_or_conflict(self.session, PRODUCT_CONFLICT_MESSAGE)
        self.session.refresh(product)
        return product

    def get_by_id(self, product_id: int) -> Product:
        product = self._live().filter(Product.id == product_id).first()
        if product is None:
            raise NotFoundError("product not found")
        return product

    def exists_by_name(self, name: str) -> bool:
        return self._live().filter(Product.name == name).count() > 0

    def get_all(self, product_filter: ProductFilter | None, offset: int, limit: int) -> list[Product]:
        query = _apply_filter(self._live(), product_filter)
        return query.order_by(Product.id).offset(offset).limit(limit).all()

    def count(self, product_filter: ProductFilter | None) -> int:
        return _apply_filter(self._live(), product_filter).count()

    def update(self, product: Product, update_data: dict[str, Any]) -> Product:
        apply_dict_updates(product, update_data, PROTECTED_FIELDS)
        commit_or_conflict(self.session, PRODUCT_CONFLICT_MESSAGE)
        self.session.refresh(product)
        return product

    def update_stock(self, product_id: int, stock: int) -> None:
        product = self.get_by_id(product_id)
        product.stock = stock
        commit_or_conflict(self.session, PRODUCT_CONFLICT_MESSAGE)

    def delete(self, product_id: int) -> None:
        product = self.get_by_id(product_id)
        product.deleted_at = utcnow()
        commit_or_conflict(self.session, PRODUCT_CONFLICT_MESSAGE)


def _apply_filter(query: Query, product_filter: ProductFilter | None) -> Query:
    if product_filter is None:
        return query
    if product_filter.category:
        query = query.filter(Product.category == product_filter.category)
    if product_filter.min_price is not None:
        query = query.filter(Product.price >= product_filter.min_price)
    if product_filter.max_price is not None:
        query = query.filter(Product.price <= product_filter.max_price)
    if product_filter.is_active is not None:
        query = query.filter(Product.is_active.is_(product_filter.is_active))
    if product_filter.search:
        pattern = f"%{product_filter.search}%"
        query = query.filter(
            or_(Product.name.ilike(pattern), Product.description.ilike(pattern))
        )
    return query
