"""Shared Schemas — camelCase base model and pagination metadata.

Invariants:
    - total_pages == ceil(total / limit); 0 when nothing matches
    - Every schema accepts both camelCase aliases and snake_case names on input
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base for all API schemas: camelCase on the wire, trimmed strings."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class PageMeta(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "PageMeta":
        return cls(
            page=page, limit=limit, total=total,
            total_pages=math.ceil(total / limit),
        )


@dataclass
class Page(Generic[T]):
    """One page of service results plus its pagination metadata."""
    items: list[T]
    meta: PageMeta
