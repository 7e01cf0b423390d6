"""Category ORM — groups products; name is globally unique.

Invariants:
    - id is UUID primary key (client-side default)
    - name is unique and at most 100 chars
    - product_count is a read-only correlated count (attached in models/product.py)

Design Decisions:
    - No Category.products collection: deleting a category must never touch
      its products, the FK (ON DELETE RESTRICT) is the final guard
"""

import uuid
from datetime import datetime

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from catalog_api.db.base import Base, utcnow


class Category(Base):
    """Category entity."""
    __tablename__ = "categories"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(
        String(100), nullable=False, unique=True,
    )
    description: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
        default=utcnow, onupdate=utcnow,
    )
