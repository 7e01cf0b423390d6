"""Domain Types — enums and aliases shared by schemas, services and handlers.

Invariants:
    - Sortable product columns are a closed set (no arbitrary-field ordering)
    - Database failures are classified into a closed DbErrorKind set
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - str Enums: serialize to JSON and bind to query params without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", UUID)
CategoryId = NewType("CategoryId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class ProductSortField(str, Enum):
    """Columns a product listing may be ordered by."""
    NAME = "name"
    PRICE = "price"
    CREATED_AT = "createdAt"
    STOCK = "stock"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class DbErrorKind(str, Enum):
    """Persistence failure kinds — produced by infrastructure/database.py."""
    UNIQUE_VIOLATION = "unique_violation"
    NOT_FOUND = "not_found"
    FOREIGN_KEY_VIOLATION = "foreign_key_violation"
    OTHER = "other"
