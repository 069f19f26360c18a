"""Product catalog routes: public reads, authenticated writes."""

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, status

from catalog_api.api.v1.auth import get_current_user, get_optional_user
from catalog_api.api.v1.dependencies import get_product_service
from catalog_api.schemas.auth import TokenClaims
from catalog_api.schemas.common import MessageResponse
from catalog_api.schemas.product import (
    ProductCreateRequest,
    ProductFilter,
    ProductListResponse,
    ProductResponse,
    ProductUpdateRequest,
    StockUpdateRequest,
)
from catalog_api.services.pagination import DEFAULT_PAGE_SIZE
from catalog_api.services.products import ProductService

router = APIRouter()


@router.get("", response_model=ProductListResponse)
def list_products(
    service: Annotated[ProductService, Depends(get_product_service)],
    _viewer: Annotated[TokenClaims | None, Depends(get_optional_user)],
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
    category: str | None = None,
    min_price: Decimal | None = None,
    max_price: Decimal | None = None,
    is_active: bool | None = None,
    search: str | None = None,
) -> ProductListResponse:
    """
    Paginated product list.

    Filters combine with AND: exact category, inclusive price range, active
    flag, and a case-insensitive substring match on name or description.
    """
    product_filter = ProductFilter(
        category=category,
        min_price=min_price,
        max_price=max_price,
        is_active=is_active,
        search=search,
    )
    return service.list_products(product_filter, page, page_size)


@router.get("/search", response_model=ProductListResponse)
def search_products(
    service: Annotated[ProductService, Depends(get_product_service)],
    q: str = "",
    page: int = 1,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> ProductListResponse:
    return service.search_products(q, page, page_size)


@router.get("/{product_id}", response_model=ProductResponse)
def get_product(
    product_id: int,
    service: Annotated[ProductService, Depends(get_product_service)],
    _viewer: Annotated[TokenClaims | None, Depends(get_optional_user)],
) -> ProductResponse:
    return ProductResponse.model_validate(service.get_product(product_id))


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
def create_product(
    body: ProductCreateRequest,
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    return ProductResponse.model_validate(service.create_product(body))


@router.put("/{product_id}", response_model=ProductResponse)
def update_product(
    product_id: int,
    body: ProductUpdateRequest,
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> ProductResponse:
    product = service.update_product(product_id, body.model_dump(exclude_unset=True))
    return ProductResponse.model_validate(product)


@router.delete("/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: int,
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageResponse:
    service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")


@router.put("/{product_id}/stock", response_model=MessageResponse)
def update_product_stock(
    product_id: int,
    body: StockUpdateRequest,
    _user: Annotated[TokenClaims, Depends(get_current_user)],
    service: Annotated[ProductService, Depends(get_product_service)],
) -> MessageResponse:
    service.update_stock(product_id, body.stock)
    return MessageResponse(message="Product stock updated successfully")
