"""Product ORM — sellable item belonging to exactly one Category.

Invariants:
    - sku is unique and at most 50 chars
    - price is NUMERIC(10, 2), always positive (validated at the API boundary)
    - stock defaults to 0 and is only decremented by conditional updates
    - category_id FK uses ON DELETE RESTRICT (categories with products survive deletes)

Design Decisions:
    - category relationship loaded with selectin: every product read embeds {id, name}
    - Category.product_count attached here: the subquery needs both mapped classes
"""

import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Boolean, Numeric, DateTime, ForeignKey, select, func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship, column_property
from sqlalchemy.dialects.postgresql import UUID

from catalog_api.db.base import Base, utcnow
from catalog_api.models.category import Category


class Product(Base):
    """Product entity."""
    __tablename__ = "products"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(1000), nullable=True,
    )
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sku: Mapped[str] = mapped_column(
        String(50), nullable=False, unique=True,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="RESTRICT"),
        nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=utcnow, onupdate=utcnow,
    )

    category: Mapped["Category"] = relationship("Category", lazy="selectin")


Category.product_count = column_property(
    select(func.count(Product.id))
    .where(Product.category_id == Category.id)
    .correlate_except(Product)
    .scalar_subquery(),
)
