"""Dropdown aggregate: the category trees and attributes used by product forms."""

from __future__ import annotations

from pydantic import TypeAdapter

from vendorhub.application.dtos.catalog import DropdownResult
from vendorhub.application.services.attribute_service import AttributeService
from vendorhub.application.services.category_service import (
    ParentCategoryService,
    PrimaryCategoryService,
    SecondaryCategoryService,
)
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_DROPDOWN = TypeAdapter(DropdownResult)


class DropdownService:
    """Builds dropdown:all from the cached category and attribute lists.

    There is no write path; category and attribute writes drop dropdown:*
    through the namespace dependency graph.
    """

    def __init__(
        self,
        cache: EntityCache,
        attributes: AttributeService,
        parent_categories: ParentCategoryService,
        primary_categories: PrimaryCategoryService,
        secondary_categories: SecondaryCategoryService,
    ) -> None:
        self._cache = cache
        self._attributes = attributes
        self._parent_categories = parent_categories
        self._primary_categories = primary_categories
        self._secondary_categories = secondary_categories

    async def _build(self) -> DropdownResult:
        return DropdownResult(
            parent_categories=await self._parent_categories.list_all_parent_categories(),
            primary_categories=await self._primary_categories.list_all_primary_categories(),
            secondary_categories=await self._secondary_categories.list_all_secondary_categories(),
            attributes=await self._attributes.list_all_attributes(),
        )

    async def get_dropdown(self) -> DropdownResult:
        return await self._cache.fetch(keys.dropdown_key(), _DROPDOWN, self._build)
