"""Shared request parameters: entity ids and listing parameters."""

import re
from typing import Annotated

from fastapi import Depends, Path, Query
from pydantic import AfterValidator

from vendorhub.application.dtos.pagination import PageParams
from vendorhub.core.constants import CACHE_SCOPE_ANY, DEFAULT_PAGE, DEFAULT_PAGE_LIMIT
from vendorhub.domain.enums import SortOrder

# CUID-style ids; anything else could never match a row and is refused up front.
_ID_RE = re.compile(r"[A-Za-z0-9_-]{1,64}")


def _check_id(value: str) -> str:
    if not _ID_RE.fullmatch(value) or value == CACHE_SCOPE_ANY:
        raise ValueError("Invalid identifier")
    return value


def _check_optional_id(value: str | None) -> str | None:
    return None if value is None else _check_id(value)


EntityId = Annotated[str, Path(), AfterValidator(_check_id)]
VendorScope = Annotated[str | None, Query(), AfterValidator(_check_optional_id)]
UserScope = Annotated[str | None, Query(), AfterValidator(_check_optional_id)]
ParentScope = Annotated[str | None, Query(), AfterValidator(_check_optional_id)]
PrimaryScope = Annotated[str | None, Query(), AfterValidator(_check_optional_id)]


def get_page_params(
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1)] = DEFAULT_PAGE_LIMIT,
    search: Annotated[str | None, Query(max_length=200)] = None,
    sort_by: Annotated[str | None, Query(max_length=64)] = None,
    sort_order: SortOrder = SortOrder.DESC,
) -> PageParams:
    """Listing parameters; limit is clamped and services whitelist sort_by."""
    return PageParams.build(page, limit, search, sort_by, sort_order)


PageParamsDep = Annotated[PageParams, Depends(get_page_params)]
