"""Category Routes — CRUD endpoints under /api/v1/categories.

Invariants:
    - Malformed ids and bodies are rejected (400) before any service call
    - Name uniqueness pre-checked before create/update (409); the unique
      constraint still decides a lost race (409 via DatabaseError)
    - Delete refused while products reference the category (409)
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from catalog_api.api.dependencies import get_category_service
from catalog_api.api.responses import send_created, send_no_content, send_success
from catalog_api.core.errors import ConflictError, ResourceNotFoundError
from catalog_api.models.category import Category
from catalog_api.schemas.category import (
    CategoryCreate, CategoryQuery, CategoryResponse, CategoryUpdate,
    parse_category_query,
)
from catalog_api.services.category_service import CategoryService

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])

DUPLICATE_NAME = "Category with this name already exists"


async def get_category_or_404(
    category_id: UUID, service: CategoryService,
) -> Category:
    """Get category or raise 404. Shared by every item route."""
    category = await service.get_by_id(category_id)
    if not category:
        raise ResourceNotFoundError("Category", str(category_id))
    return category


@router.get("")
async def list_categories(
    query: CategoryQuery = Depends(parse_category_query),
    service: CategoryService = Depends(get_category_service),
):
    """List categories with pagination and search."""
    page = await service.list_categories(query)
    return send_success(
        [CategoryResponse.model_validate(c) for c in page.items],
        "Categories retrieved successfully",
        meta=page.meta,
    )


@router.get("/{category_id}")
async def get_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    category = await get_category_or_404(category_id, service)
    return send_success(
        CategoryResponse.model_validate(category),
        "Category retrieved successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_category(
    body: CategoryCreate,
    service: CategoryService = Depends(get_category_service),
):
    if await service.get_by_name(body.name):
        raise ConflictError(DUPLICATE_NAME)
    category = await service.create(body)
    return send_created(
        CategoryResponse.model_validate(category),
        "Category created successfully",
    )


@router.put("/{category_id}")
async def update_category(
    category_id: UUID,
    body: CategoryUpdate,
    service: CategoryService = Depends(get_category_service),
):
    """Partial update: only fields present in the body change."""
    existing = await get_category_or_404(category_id, service)
    changes = body.changes()

    new_name = changes.get("name")
    if new_name is not None and new_name != existing.name:
        if await service.get_by_name(new_name):
            raise ConflictError(DUPLICATE_NAME)

    category = await service.update(category_id, changes)
    return send_success(
        CategoryResponse.model_validate(category),
        "Category updated successfully",
    )


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: UUID,
    service: CategoryService = Depends(get_category_service),
):
    await get_category_or_404(category_id, service)
    if await service.has_products(category_id):
        raise ConflictError("Cannot delete category with associated products")
    await service.delete(category_id)
    return send_no_content()
