"""Product Service — list/lookup/create/update/delete plus stock and active-flag mutators.

Invariants:
    - list_products: search OR-matches name/description/sku; categoryId, isActive
      and the inclusive price range are AND-ed; page and count share one filter
    - Ordering only by a ProductSortField column, id as tie-breaker
    - update applies only the supplied fields; an empty change set writes nothing
    - update_stock and toggle_active are single UPDATE statements (no read-modify-write)
    - update_stock never takes stock below zero

Design Decisions:
    - Mutators re-read through get_by_id (populate_existing) so the embedded
      category summary reflects the committed row
    - Bulk UPDATEs skip session synchronisation: the re-read refreshes the instance
"""

import logging
from uuid import UUID

from sqlalchemy import select, update, func, or_, not_
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.core.domain_types import ProductSortField, SortOrder
from catalog_api.infrastructure.database import translate_db_errors
from catalog_api.models.product import Product
from catalog_api.schemas.common import Page, PageMeta
from catalog_api.schemas.product import ProductCreate, ProductQuery

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    ProductSortField.NAME: Product.name,
    ProductSortField.PRICE: Product.price,
    ProductSortField.CREATED_AT: Product.created_at,
    ProductSortField.STOCK: Product.stock,
}


def build_product_filters(query: ProductQuery) -> list:
    """Translate list query parameters into WHERE clauses."""
    conditions = []
    if query.search:
        conditions.append(or_(
            Product.name.icontains(query.search, autoescape=True),
            Product.description.icontains(query.search, autoescape=True),
            Product.sku.icontains(query.search, autoescape=True),
        ))
    if query.category_id is not None:
        conditions.append(Product.category_id == query.category_id)
    if query.is_active is not None:
        conditions.append(Product.is_active == query.is_active)
    if query.min_price is not None:
        conditions.append(Product.price >= query.min_price)
    if query.max_price is not None:
        conditions.append(Product.price <= query.max_price)
    return conditions


class ProductService:
    """Persistence operations for Product."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_products(self, query: ProductQuery) -> Page[Product]:
        conditions = build_product_filters(query)
        column = _SORT_COLUMNS[query.sort_by]
        ordering = column.asc() if query.sort_order is SortOrder.ASC else column.desc()

        page_stmt = (
            select(Product)
            .where(*conditions)
            .order_by(ordering, Product.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        count_stmt = select(func.count()).select_from(Product).where(*conditions)

        async with translate_db_errors(self.db, "list products"):
            products = (await self.db.scalars(page_stmt)).all()
            total = await self.db.scalar(count_stmt) or 0

        return Page(
            items=list(products),
            meta=PageMeta.build(query.page, query.limit, total),
        )

    async def get_by_id(self, product_id: UUID) -> Product | None:
        result = await self.db.execute(
            select(Product)
            .where(Product.id == product_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_by_sku(self, sku: str) -> Product | None:
        result = await self.db.execute(
            select(Product).where(Product.sku == sku),
        )
        return result.scalar_one_or_none()

    async def create(self, data: ProductCreate) -> Product:
        product = Product(
            name=data.name,
            description=data.description,
            price=data.price,
            stock=data.stock,
            sku=data.sku,
            is_active=data.is_active,
            category_id=data.category_id,
        )
        async with translate_db_errors(self.db, "create product"):
            self.db.add(product)
            await self.db.commit()
        logger.info(
            f"Product '{product.sku}' created",
            extra={"product_id": str(product.id), "category_id": str(product.category_id)},
        )
        return await self.get_by_id(product.id)

    async def update(self, product_id: UUID, changes: dict) -> Product:
        async with translate_db_errors(self.db, "update product"):
            product = (await self.db.execute(
                select(Product).where(Product.id == product_id),
            )).scalar_one()
            if changes:
                for field, value in changes.items():
                    setattr(product, field, value)
                await self.db.commit()
                logger.info(
                    f"Product updated: {', '.join(changes)}",
                    extra={"product_id": str(product_id)},
                )
        return await self.get_by_id(product_id)

    async def delete(self, product_id: UUID) -> None:
        async with translate_db_errors(self.db, "delete product"):
            product = (await self.db.execute(
                select(Product).where(Product.id == product_id),
            )).scalar_one()
            await self.db.delete(product)
            await self.db.commit()
        logger.info("Product deleted", extra={"product_id": str(product_id)})

    async def update_stock(self, product_id: UUID, quantity: int) -> Product | None:
        """Add a signed delta to stock. None when absent or the result would be negative."""
        stmt = (
            update(Product)
            .where(Product.id == product_id, Product.stock + quantity >= 0)
            .values(stock=Product.stock + quantity)
            .execution_options(synchronize_session=False)
        )
        async with translate_db_errors(self.db, "update stock"):
            result = await self.db.execute(stmt)
            await self.db.commit()
        if result.rowcount == 0:
            return None
        logger.info(
            f"Stock adjusted by {quantity:+d}",
            extra={"product_id": str(product_id)},
        )
        return await self.get_by_id(product_id)

    async def toggle_active(self, product_id: UUID) -> Product | None:
        """Flip is_active in one statement. None when the product does not exist."""
        stmt = (
            update(Product)
            .where(Product.id == product_id)
            .values(is_active=not_(Product.is_active))
            .execution_options(synchronize_session=False)
        )
        async with translate_db_errors(self.db, "toggle active"):
            result = await self.db.execute(stmt)
            await self.db.commit()
        if result.rowcount == 0:
            return None
        return await self.get_by_id(product_id)
