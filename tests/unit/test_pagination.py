"""PageParams normalization and Pagination metadata."""

from vendorhub.application.dtos.pagination import PageParams, Pagination
from vendorhub.core.constants import MAX_PAGE_LIMIT
from vendorhub.domain.enums import SortOrder


def test_build_clamps_page_and_limit() -> None:
    params = PageParams.build(page=0, limit=1000, search="  red  ")
    assert params.page == 1
    assert params.limit == MAX_PAGE_LIMIT
    assert params.search == "red"
    assert params.offset == 0


def test_build_defaults() -> None:
    params = PageParams.build()
    assert (params.page, params.limit, params.sort_by) == (1, 10, "created_at")
    assert params.sort_order is SortOrder.DESC
    assert params.descending


def test_restricted_to_falls_back_for_unknown_sort_field() -> None:
    params = PageParams.build(sort_by="password_hash")
    assert params.restricted_to(frozenset({"name", "created_at"})).sort_by == "created_at"
    named = PageParams.build(sort_by="name")
    assert named.restricted_to(frozenset({"name"})) is named


def test_pagination_compute() -> None:
    meta = Pagination.compute(PageParams.build(page=2, limit=10), total_items=25)
    assert meta.total_pages == 3
    assert meta.has_next and meta.has_prev
    assert meta.items_per_page == 10


def test_pagination_empty() -> None:
    meta = Pagination.compute(PageParams.build(), total_items=0)
    assert meta.total_pages == 0
    assert not meta.has_next and not meta.has_prev
