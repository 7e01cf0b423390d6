"""Category Schemas — create/update/query/response shapes for /categories.

Invariants:
    - name: 1-100 chars after trimming, never null
    - description: <= 500 chars, nullable (explicit null clears it on update)
    - CategoryUpdate.changes() contains only the fields the client sent
    - Query: page >= 1, 1 <= limit <= 100

Design Decisions:
    - Query parameters declared with fastapi.Query in a dependency function:
      coercion and bounds are enforced by FastAPI before the route body runs
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Annotated
from uuid import UUID

from fastapi import Query
from pydantic import ConfigDict, Field, field_validator

from catalog_api.schemas.common import CamelModel

CategoryName = Annotated[str, Field(min_length=1, max_length=100)]
CategoryDescription = Annotated[str, Field(max_length=500)]


class CategoryCreate(CamelModel):
    name: CategoryName
    description: CategoryDescription | None = None


class CategoryUpdate(CamelModel):
    """Partial update — absent fields untouched, null clears nullable fields."""
    name: CategoryName | None = None
    description: CategoryDescription | None = None

    @field_validator("name")
    @classmethod
    def reject_null(cls, v, info):
        if v is None:
            raise ValueError(f"{info.field_name} cannot be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class CategoryResponse(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    product_count: int | None = None
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class CategoryQuery:
    page: int = 1
    limit: int = 10
    search: str | None = None

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_category_query(
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    search: str | None = Query(None, max_length=200),
) -> CategoryQuery:
    """FastAPI dependency: list query parameters for categories."""
    return CategoryQuery(page=page, limit=limit, search=search)
