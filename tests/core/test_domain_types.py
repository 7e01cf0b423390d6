"""Domain type tests — wire values of the closed enums."""

from catalog_api.core.domain_types import DbErrorKind, ProductSortField, SortOrder


def test_sort_fields_match_query_values():
    assert {f.value for f in ProductSortField} == {"name", "price", "createdAt", "stock"}


def test_sort_order_values():
    assert SortOrder("asc") is SortOrder.ASC
    assert SortOrder("desc") is SortOrder.DESC


def test_db_error_kinds_closed_set():
    assert len(DbErrorKind) == 4
