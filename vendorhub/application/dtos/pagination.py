"""Pagination DTOs: request parameters, metadata and the page envelope."""

from dataclasses import dataclass, replace
from math import ceil
from typing import Generic, TypeVar

from vendorhub.core.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_LIMIT,
    DEFAULT_SORT_FIELD,
    MAX_PAGE_LIMIT,
)
from vendorhub.domain.enums import SortOrder

T = TypeVar("T")


@dataclass(frozen=True)
class PageParams:
    """Normalized listing parameters. Build with PageParams.build()."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_LIMIT
    search: str = ""
    sort_by: str = DEFAULT_SORT_FIELD
    sort_order: SortOrder = SortOrder.DESC

    @classmethod
    def build(
        cls,
        page: int = DEFAULT_PAGE,
        limit: int = DEFAULT_PAGE_LIMIT,
        search: str | None = None,
        sort_by: str | None = None,
        sort_order: SortOrder | str = SortOrder.DESC,
        *,
        sortable: frozenset[str] | None = None,
    ) -> "PageParams":
        """Clamp page/limit, trim search and fall back to created_at for unknown sort fields."""
        field = sort_by or DEFAULT_SORT_FIELD
        if sortable is not None and field not in sortable:
            field = DEFAULT_SORT_FIELD
        return cls(
            page=max(page, 1),
            limit=min(max(limit, 1), MAX_PAGE_LIMIT),
            search=(search or "").strip(),
            sort_by=field,
            sort_order=SortOrder(sort_order),
        )

    def restricted_to(self, sortable: frozenset[str]) -> "PageParams":
        """Return params whose sort_by is in sortable (created_at otherwise)."""
        if self.sort_by in sortable:
            return self
        return replace(self, sort_by=DEFAULT_SORT_FIELD)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def descending(self) -> bool:
        return self.sort_order is SortOrder.DESC


@dataclass(frozen=True)
class Pagination:
    """Pagination metadata returned with every paginated listing."""

    current_page: int
    total_pages: int
    total_items: int
    items_per_page: int
    has_next: bool
    has_prev: bool

    @classmethod
    def compute(cls, params: PageParams, total_items: int) -> "Pagination":
        total_pages = ceil(total_items / params.limit) if total_items else 0
        return cls(
            current_page=params.page,
            total_pages=total_pages,
            total_items=total_items,
            items_per_page=params.limit,
            has_next=params.page < total_pages,
            has_prev=params.page > 1,
        )


@dataclass(frozen=True)
class Page(Generic[T]):
    """Paginated envelope: one page of items plus its metadata."""

    items: list[T]
    pagination: Pagination
