"""Request/response schemas for the product catalog."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class ProductCreateRequest(BaseModel):
    """New product. Range checks are enforced by the product service."""

    name: str = Field(default="", description="Product name (3-255 chars)")
    description: str = ""
    price: Decimal = Field(..., description="Unit price, >= 0")
    stock: int = 0
    category: str = Field(default="", max_length=100)
    image_url: str = Field(default="", max_length=500)


class ProductUpdateRequest(BaseModel):
    """Partial product update; omitted fields are left unchanged."""

    name: str | None = None
    description: str | None = None
    price: Decimal | None = None
    stock: int | None = None
    category: str | None = Field(default=None, max_length=100)
    image_url: str | None = Field(default=None, max_length=500)
    is_active: bool | None = None


class StockUpdateRequest(BaseModel):
    stock: int


class ProductFilter(BaseModel):
    """Optional list filters; None or empty means 'no constraint'."""

    category: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    is_active: bool | None = None
    search: str | None = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    price: Decimal
    stock: int
    category: str
    image_url: str
    is_active: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ProductListResponse(BaseModel):
    """One page of products plus pagination metadata."""

    products: list[ProductResponse]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    page_size: int = Field(..., ge=1)
    total_pages: int = Field(..., ge=0)
