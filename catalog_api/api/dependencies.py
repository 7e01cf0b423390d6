"""Route Dependencies — per-request service construction.

Invariants:
    - Services within one request share the request's AsyncSession
      (FastAPI caches get_db per request)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog_api.infrastructure.database import get_db
from catalog_api.services.category_service import CategoryService
from catalog_api.services.product_service import ProductService


def get_category_service(db: AsyncSession = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


def get_product_service(db: AsyncSession = Depends(get_db)) -> ProductService:
    return ProductService(db)
