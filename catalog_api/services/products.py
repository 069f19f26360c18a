"""Product catalog rules: validation, uniqueness, pagination."""

import logging
from decimal import Decimal
from typing import Any

from catalog_api.core.errors import AlreadyExistsError, ValidationError
from catalog_api.models import Product
from catalog_api.repositories.product import PRODUCT_CONFLICT_MESSAGE, ProductRepository
from catalog_api.schemas.product import (
    ProductCreateRequest,
    ProductFilter,
    ProductListResponse,
    ProductResponse,
)
from catalog_api.services.pagination import normalize_page, page_offset, total_pages

logger = logging.getLogger(__name__)

NAME_MIN_LEN = 3
NAME_MAX_LEN = 255

UPDATABLE_FIELDS = ("name", "description", "price", "stock", "category", "image_url", "is_active")


def validate_product_fields(
    name: str | None = None,
    price: Decimal | None = None,
    stock: int | None = None,
) -> None:
    """Check whichever of name/price/stock is given. None means 'not supplied'."""
    if name is not None:
        if not name:
            raise ValidationError("product name is required", field="name")
        if len(name) < NAME_MIN_LEN:
            raise ValidationError(
                f"product name must be at least {NAME_MIN_LEN} characters", field="name"
            )
        if len(name) > NAME_MAX_LEN:
            raise ValidationError(
                f"product name must be less than {NAME_MAX_LEN} characters", field="name"
            )
    if price is not None and price < 0:
        raise ValidationError(
            "product price must be greater than or equal to 0", field="price"
        )
    if stock is not None and stock < 0:
        raise ValidationError(
            "product stock must be greater than or equal to 0", field="stock"
        )


class ProductService:
    def __init__(self, product_repo: ProductRepository) -> None:
        self._products = product_repo

    def create_product(self, data: ProductCreateRequest) -> Product:
        validate_product_fields(name=data.name, price=data.price, stock=data.stock)
        if self._products.exists_by_name(data.name):
            raise AlreadyExistsError(PRODUCT_CONFLICT_MESSAGE)
        product = self._products.create(data.model_dump())
        logger.info("Product created", extra={"product_id": product.id})
        return product

    def get_product(self, product_id: int) -> Product:
        return self._products.get_by_id(product_id)

    def list_products(
        self, product_filter: ProductFilter | None, page: int, page_size: int
    ) -> ProductListResponse:
        page, page_size = normalize_page(page, page_size)
        total = self._products.count(product_filter)
        rows = self._products.get_all(product_filter, page_offset(page, page_size), page_size)
        return ProductListResponse(
            products=[ProductResponse.model_validate(p) for p in rows],
            total=total,
            page=page,
            page_size=page_size,
            total_pages=total_pages(total, page_size),
        )

    def search_products(self, term: str, page: int, page_size: int) -> ProductListResponse:
        if not term or not term.strip():
            raise ValidationError("search query is required", field="q")
        return self.list_products(ProductFilter(search=term.strip()), page, page_size)

    def update_product(self, product_id: int, fields: dict[str, Any]) -> Product:
        """Apply the supplied fields only; a changed name is re-checked for uniqueness."""
        product = self._products.get_by_id(product_id)
        updates = {k: v for k, v in fields.items() if k in UPDATABLE_FIELDS and v is not None}
        validate_product_fields(
            name=updates.get("name"),
            price=updates.get("price"),
            stock=updates.get("stock"),
        )
        new_name = updates.get("name")
        if new_name is not None and new_name != product.name:
            if self._products.exists_by_name(new_name):
                raise AlreadyExistsError(PRODUCT_CONFLICT_MESSAGE)
        if not updates:
            return product
        return self._products.update(product, updates)

    def delete_product(self, product_id: int) -> None:
        self._products.delete(product_id)
        logger.info("Product soft-deleted", extra={"product_id": product_id})

    def update_stock(self, product_id: int, stock: int) -> None:
        if stock < 0:
            raise ValidationError("quantity cannot be negative", field="stock")
        self._products.update_stock(product_id, stock)
