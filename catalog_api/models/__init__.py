"""ORM Models — SQLAlchemy declarative models for catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Category does not own products: deletion is blocked, never cascaded

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (standard SQLAlchemy pattern)
"""

from catalog_api.models.category import Category  # noqa: F401
from catalog_api.models.product import Product  # noqa: F401
