"""Category Service — list/lookup/create/update/delete for categories.

Invariants:
    - list_categories orders by created_at desc (id as tie-breaker), page and count share one filter
    - update applies only the supplied fields; an empty change set writes nothing
    - delete does not check for products: the caller does (has_products), the FK is the backstop

Design Decisions:
    - Search is case-insensitive substring over name OR description, wildcards escaped
"""

import logging
from uuid import UUID

from sqlalchemy import select, func, or_, exists
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.infrastructure.database import translate_db_errors
from catalog_api.models.category import Category
from catalog_api.models.product import Product
from catalog_api.schemas.category import CategoryCreate, CategoryQuery
from catalog_api.schemas.common import Page, PageMeta

logger = logging.getLogger(__name__)


class CategoryService:
    """Persistence operations for Category."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_categories(self, query: CategoryQuery) -> Page[Category]:
        conditions = []
        if query.search:
            conditions.append(or_(
                Category.name.icontains(query.search, autoescape=True),
                Category.description.icontains(query.search, autoescape=True),
            ))

        page_stmt = (
            select(Category)
            .where(*conditions)
            .order_by(Category.created_at.desc(), Category.id)
            .offset(query.offset)
            .limit(query.limit)
        )
        count_stmt = select(func.count()).select_from(Category).where(*conditions)

        async with translate_db_errors(self.db, "list categories"):
            categories = (await self.db.scalars(page_stmt)).all()
            total = await self.db.scalar(count_stmt) or 0

        return Page(
            items=list(categories),
            meta=PageMeta.build(query.page, query.limit, total),
        )

    async def get_by_id(self, category_id: UUID) -> Category | None:
        result = await self.db.execute(
            select(Category)
            .where(Category.id == category_id)
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> Category | None:
        result = await self.db.execute(
            select(Category).where(Category.name == name),
        )
        return result.scalar_one_or_none()

    async def create(self, data: CategoryCreate) -> Category:
        category = Category(name=data.name, description=data.description)
        async with translate_db_errors(self.db, "create category"):
            self.db.add(category)
            await self.db.commit()
        logger.info(
            f"Category '{category.name}' created",
            extra={"category_id": str(category.id)},
        )
        return await self.get_by_id(category.id)

    async def update(self, category_id: UUID, changes: dict) -> Category:
        async with translate_db_errors(self.db, "update category"):
            category = (await self.db.execute(
                select(Category).where(Category.id == category_id),
            )).scalar_one()
            if changes:
                for field, value in changes.items():
                    setattr(category, field, value)
                await self.db.commit()
                logger.info(
                    f"Category updated: {', '.join(changes)}",
                    extra={"category_id": str(category_id)},
                )
        return await self.get_by_id(category_id)

    async def delete(self, category_id: UUID) -> None:
        async with translate_db_errors(self.db, "delete category"):
            category = (await self.db.execute(
                select(Category).where(Category.id == category_id),
            )).scalar_one()
            await self.db.delete(category)
            await self.db.commit()
        logger.info("Category deleted", extra={"category_id": str(category_id)})

    async def has_products(self, category_id: UUID) -> bool:
        return bool(await self.db.scalar(
            select(exists().where(Product.category_id == category_id)),
        ))
