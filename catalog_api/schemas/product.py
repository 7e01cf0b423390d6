"""Product Schemas — create/update/query/response shapes for /products.

Invariants:
    - name: 1-200 chars, sku: 1-50 chars (both trimmed, never null)
    - description: <= 1000 chars, nullable
    - price: number or numeric string, 0 < price <= 99,999,999.99, at most 2 decimal places
    - stock: JSON integer >= 0, defaults to 0; is_active: JSON boolean, defaults to True
    - ProductUpdate.changes() contains only the fields the client sent
    - Query: limit <= 100, sortBy restricted to ProductSortField,
      isActive is True only for the literal string "true"

Design Decisions:
    - Decimal for price: lax mode coerces "19.99" and 19.99 alike, rejects "abc" and NaN
    - Only price accepts a numeric string; stock and is_active are strict
    - reject_null validator: after-validators skip defaults, so only an explicit
      null on a non-nullable field reaches it
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Annotated
from uuid import UUID

from fastapi import Query
from pydantic import ConfigDict, Field, StrictBool, StrictInt, field_validator

from catalog_api.core.domain_types import ProductSortField, SortOrder
from catalog_api.schemas.common import CamelModel

MAX_PRICE = Decimal("99999999.99")

ProductName = Annotated[str, Field(min_length=1, max_length=200)]
ProductDescription = Annotated[str, Field(max_length=1000)]
Sku = Annotated[str, Field(min_length=1, max_length=50)]
Price = Annotated[Decimal, Field(gt=0, le=MAX_PRICE, max_digits=10, decimal_places=2)]
Stock = Annotated[StrictInt, Field(ge=0)]


class ProductCreate(CamelModel):
    name: ProductName
    description: ProductDescription | None = None
    price: Price
    stock: Stock = 0
    sku: Sku
    is_active: StrictBool = True
    category_id: UUID


class ProductUpdate(CamelModel):
    """Partial update — absent fields untouched, null clears description."""
    name: ProductName | None = None
    description: ProductDescription | None = None
    price: Price | None = None
    stock: Stock | None = None
    sku: Sku | None = None
    is_active: StrictBool | None = None
    category_id: UUID | None = None

    @field_validator("name", "price", "stock", "sku", "is_active", "category_id")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class StockAdjustment(CamelModel):
    """Signed stock delta: positive restocks, negative sells."""
    quantity: StrictInt

    @field_validator("quantity")
    @classmethod
    def non_zero(cls, v: int) -> int:
        if v == 0:
            raise ValueError("quantity must not be zero")
        return v


class CategorySummary(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str


class ProductResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    price: Decimal
    stock: int
    sku: str
    is_active: bool
    category_id: UUID
    category: CategorySummary | None = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ProductQuery:
    page: int = 1
    limit: int = 10
    search: str | None = None
    category_id: UUID | None = None
    is_active: bool | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort_by: ProductSortField = ProductSortField.CREATED_AT
    sort_order: SortOrder = SortOrder.DESC

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_product_query(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, max_length=200),
    category_id: UUID | None = Query(None, alias="categoryId"),
    is_active: str | None = Query(None, alias="isActive"),
    min_price: Decimal | None = Query(None, alias="minPrice", gt=0),
    max_price: Decimal | None = Query(None, alias="maxPrice", gt=0),
    sort_by: ProductSortField = Query(ProductSortField.CREATED_AT, alias="sortBy"),
    sort_order: SortOrder = Query(SortOrder.DESC, alias="sortOrder"),
) -> ProductQuery:
    """FastAPI dependency: list query parameters for products."""
    return ProductQuery(
        page=page,
        limit=limit,
        search=search,
        category_id=category_id,
        is_active=None if is_active is None else is_active == "true",
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        sort_order=sort_order,
    )
