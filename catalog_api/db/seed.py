"""Seed Data — replaces catalog contents with a small sample dataset.

Usage:
    python -m catalog_api.db.seed

Invariants:
    - Existing products are deleted before categories (FK is RESTRICT)
    - Runs against settings.database_url; tables must already exist (alembic upgrade head)
"""

import asyncio
import logging
from decimal import Decimal

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.config import get_settings
from catalog_api.infrastructure.database import DatabaseSessionManager
from catalog_api.infrastructure.observability import setup_logging
from catalog_api.models.category import Category
from catalog_api.models.product import Product

logger = logging.getLogger(__name__)

CATEGORIES = [
    ("Electronics", "Electronic devices and gadgets"),
    ("Clothing", "Apparel and fashion items"),
    ("Home & Garden", "Home decor and gardening supplies"),
    ("Books", "Books and publications"),
    ("Sports & Outdoors", "Sports equipment and outdoor gear"),
]

# (category name, product name, description, price, stock, sku)
PRODUCTS = [
    ("Electronics", "Wireless Bluetooth Headphones",
     "Premium noise-canceling wireless headphones with 30-hour battery life",
     "149.99", 50, "ELEC-WBH-001"),
    ("Electronics", "Smart Watch Pro",
     "Advanced fitness tracking smartwatch with heart rate monitor",
     "299.99", 30, "ELEC-SWP-002"),
    ("Electronics", "Portable Power Bank",
     "20000mAh fast-charging power bank with dual USB ports",
     "49.99", 100, "ELEC-PPB-003"),
    ("Clothing", "Classic Cotton T-Shirt",
     "100% organic cotton t-shirt, comfortable everyday wear",
     "24.99", 200, "CLTH-CCT-001"),
    ("Clothing", "Denim Jeans Regular Fit",
     "Classic denim jeans with comfortable regular fit",
     "59.99", 150, "CLTH-DJR-002"),
    ("Home & Garden", "Indoor Plant Pot Set",
     "Set of 3 ceramic plant pots in various sizes",
     "34.99", 75, "HOME-IPP-001"),
    ("Home & Garden", "LED Desk Lamp",
     "Adjustable LED desk lamp with touch control and USB charging",
     "45.99", 60, "HOME-LDL-002"),
    ("Books", "The Art of Programming",
     "Comprehensive guide to modern software development",
     "39.99", 100, "BOOK-TAP-001"),
    ("Books", "Data Structures Handbook",
     "In-depth exploration of data structures and algorithms",
     "44.99", 80, "BOOK-DSH-002"),
    ("Sports & Outdoors", "Yoga Mat Premium",
     "Non-slip yoga mat with carrying strap, 6mm thickness",
     "29.99", 120, "SPRT-YMP-001"),
    ("Sports & Outdoors", "Running Shoes Elite",
     "Lightweight running shoes with responsive cushioning",
     "129.99", 40, "SPRT-RSE-002"),
]


async def seed(db: AsyncSession) -> tuple[int, int]:
    """Replace all rows with the sample dataset. Returns (categories, products)."""
    await db.execute(delete(Product))
    await db.execute(delete(Category))

    categories = {
        name: Category(name=name, description=description)
        for name, description in CATEGORIES
    }
    db.add_all(categories.values())
    await db.flush()

    db.add_all(
        Product(
            name=name,
            description=description,
            price=Decimal(price),
            stock=stock,
            sku=sku,
            is_active=True,
            category_id=categories[category_name].id,
        )
        for category_name, name, description, price, stock, sku in PRODUCTS
    )
    await db.commit()
    return len(CATEGORIES), len(PRODUCTS)


async def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = DatabaseSessionManager(settings.database_url)
    try:
        async with manager.session() as db:
            category_count, product_count = await seed(db)
    finally:
        await manager.dispose()
    logger.info(f"Seeded {category_count} categories and {product_count} products")


if __name__ == "__main__":
    asyncio.run(main())
