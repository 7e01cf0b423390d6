"""Product Routes — CRUD, toggle-active and stock endpoints under /api/v1/products.

Invariants:
    - Malformed ids, bodies and query parameters are rejected (400) before any service call
    - A referenced category must exist (400 "Category not found")
    - SKU uniqueness pre-checked on create and on update when the SKU changes (409)
    - Stock never goes below zero (400 "Insufficient stock")
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from catalog_api.api.dependencies import get_category_service, get_product_service
from catalog_api.api.responses import send_created, send_no_content, send_success
from catalog_api.core.errors import (
    ConflictError, InvalidInputError, ResourceNotFoundError,
)
from catalog_api.models.product import Product
from catalog_api.schemas.product import (
    ProductCreate, ProductQuery, ProductResponse, ProductUpdate,
    StockAdjustment, parse_product_query,
)
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService

router = APIRouter(prefix="/api/v1/products", tags=["products"])

DUPLICATE_SKU = "Product with this SKU already exists"


async def get_product_or_404(
    product_id: UUID, service: ProductService,
) -> Product:
    """Get product or raise 404. Shared by every item route."""
    product = await service.get_by_id(product_id)
    if not product:
        raise ResourceNotFoundError("Product", str(product_id))
    return product


async def _require_category(
    category_id: UUID, categories: CategoryService,
) -> None:
    if not await categories.get_by_id(category_id):
        raise InvalidInputError("Category not found", field="categoryId")


@router.get("")
async def list_products(
    query: ProductQuery = Depends(parse_product_query),
    service: ProductService = Depends(get_product_service),
):
    """List products with filtering, sorting and pagination."""
    page = await service.list_products(query)
    return send_success(
        [ProductResponse.model_validate(p) for p in page.items],
        "Products retrieved successfully",
        meta=page.meta,
    )


@router.get("/{product_id}")
async def get_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    product = await get_product_or_404(product_id, service)
    return send_success(
        ProductResponse.model_validate(product),
        "Product retrieved successfully",
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product(
    body: ProductCreate,
    service: ProductService = Depends(get_product_service),
    categories: CategoryService = Depends(get_category_service),
):
    await _require_category(body.category_id, categories)
    if await service.get_by_sku(body.sku):
        raise ConflictError(DUPLICATE_SKU)
    product = await service.create(body)
    return send_created(
        ProductResponse.model_validate(product),
        "Product created successfully",
    )


@router.put("/{product_id}")
async def update_product(
    product_id: UUID,
    body: ProductUpdate,
    service: ProductService = Depends(get_product_service),
    categories: CategoryService = Depends(get_category_service),
):
    """Partial update: only fields present in the body change."""
    existing = await get_product_or_404(product_id, service)
    changes = body.changes()

    if "category_id" in changes:
        await _require_category(changes["category_id"], categories)

    new_sku = changes.get("sku")
    if new_sku is not None and new_sku != existing.sku:
        if await service.get_by_sku(new_sku):
            raise ConflictError(DUPLICATE_SKU)

    product = await service.update(product_id, changes)
    return send_success(
        ProductResponse.model_validate(product),
        "Product updated successfully",
    )


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    await get_product_or_404(product_id, service)
    await service.delete(product_id)
    return send_no_content()


@router.patch("/{product_id}/toggle-active")
async def toggle_product_active(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    product = await service.toggle_active(product_id)
    if not product:
        raise ResourceNotFoundError("Product", str(product_id))
    state = "activated" if product.is_active else "deactivated"
    return send_success(
        ProductResponse.model_validate(product),
        f"Product {state} successfully",
    )


@router.patch("/{product_id}/stock")
async def adjust_product_stock(
    product_id: UUID,
    body: StockAdjustment,
    service: ProductService = Depends(get_product_service),
):
    """Add a signed quantity to stock (negative to sell)."""
    existing = await get_product_or_404(product_id, service)
    current_stock = existing.stock
    product = await service.update_stock(product_id, body.quantity)
    if not product:
        if not await service.get_by_id(product_id):
            raise ResourceNotFoundError("Product", str(product_id))
        raise InvalidInputError(
            "Insufficient stock",
            field="quantity",
            detail=f"Current stock is {current_stock}, requested change {body.quantity:+d}",
        )
    return send_success(
        ProductResponse.model_validate(product),
        "Stock updated successfully",
    )
