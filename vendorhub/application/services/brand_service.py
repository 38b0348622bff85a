"""Brand application service: cached reads, writes invalidate brands and products."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.catalog import BrandResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.core.constants import CACHE_PREFIX_BRANDS
from vendorhub.domain.exceptions import AlreadyExistsException, ResourceNotFoundException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_BRAND = TypeAdapter(BrandResult)
_BRAND_LIST = TypeAdapter(list[BrandResult])
_BRAND_PAGE = TypeAdapter(Page[BrandResult])


class BrandService:
    """Brands with SEO metadata."""

    def __init__(self, brand_repo: Any, cache: EntityCache) -> None:
        self._brand_repo = brand_repo
        self._cache = cache

    async def create_brand(
        self,
        name: str,
        meta_title: str | None = None,
        meta_keywords: str | None = None,
        meta_description: str | None = None,
        is_active: bool = True,
    ) -> BrandResult:
        """Create a brand.

        Raises:
            ValidationException: If name is blank.
            AlreadyExistsException: If a brand with the same name exists.
        """
        name = clean_name(name)
        if await self._brand_repo.name_exists(name):
            raise AlreadyExistsException("brand", "name", name)
        created = await self._brand_repo.create_from(
            name=name,
            meta_title=meta_title,
            meta_keywords=meta_keywords,
            meta_description=meta_description,
            is_active=is_active,
        )
        await self._brand_repo.commit()
        await self._cache.invalidate()
        return created

    async def list_brands(self, params: PageParams) -> Page[BrandResult]:
        params = params.restricted_to(self._brand_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(CACHE_PREFIX_BRANDS, params),
            _BRAND_PAGE,
            lambda: self._brand_repo.list_page(params),
        )

    async def list_all_brands(self) -> list[BrandResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_BRANDS), _BRAND_LIST, self._brand_repo.list_all
        )

    async def get_brand(self, brand_id: str) -> BrandResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_BRANDS, brand_id),
            _BRAND,
            lambda: self._brand_repo.get(brand_id),
        )
        if result is None:
            raise ResourceNotFoundException("brand", brand_id)
        return result

    async def update_brand(self, brand_id: str, **changes: Any) -> BrandResult:
        """Update brand fields (name, meta_*, is_active); None values are ignored.

        Raises:
            ResourceNotFoundException: If the brand does not exist.
            AlreadyExistsException: If the new name is taken.
        """
        current = await self._brand_repo.get(brand_id)
        if current is None:
            raise ResourceNotFoundException("brand", brand_id)
        if changes.get("name") is not None:
            changes["name"] = clean_name(changes["name"])
            if await self._brand_repo.name_exists(changes["name"], exclude_id=brand_id):
                raise AlreadyExistsException("brand", "name", changes["name"])
        values = changed_fields(current, changes)
        if not values:
            return current
        updated = await self._brand_repo.update_fields(brand_id, values)
        await self._brand_repo.commit()
        await self._cache.invalidate()
        return updated

    async def delete_brand(self, brand_id: str) -> BrandResult:
        deleted = await self._brand_repo.delete_by_id(brand_id)
        if deleted is None:
            raise ResourceNotFoundException("brand", brand_id)
        await self._brand_repo.commit()
        await self._cache.invalidate()
        return deleted
