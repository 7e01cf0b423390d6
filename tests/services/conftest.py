"""Service test fixtures — services bound to the per-test session plus seed helpers."""

from decimal import Decimal

import pytest

from catalog_api.schemas.category import CategoryCreate
from catalog_api.schemas.product import ProductCreate
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService


@pytest.fixture
def category_service(test_db):
    return CategoryService(test_db)


@pytest.fixture
def product_service(test_db):
    return ProductService(test_db)


@pytest.fixture
async def category(category_service):
    return await category_service.create(
        CategoryCreate(name="Electronics", description="Devices"),
    )


@pytest.fixture
def make_product(product_service, category):
    """Factory: create a product in the default category, overriding any field."""
    counter = {"n": 0}

    async def _make(**overrides):
        counter["n"] += 1
        fields = {
            "name": f"Product {counter['n']}",
            "price": Decimal("10.00"),
            "sku": f"SKU-{counter['n']:03d}",
            "category_id": category.id,
        }
        fields.update(overrides)
        return await product_service.create(ProductCreate(**fields))

    return _make
