"""Attribute application service: cached reads, writes invalidate attributes and dependents."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.catalog import AttributeResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.core.constants import CACHE_PREFIX_ATTRIBUTES
from vendorhub.domain.exceptions import AlreadyExistsException, ResourceNotFoundException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_ATTRIBUTE = TypeAdapter(AttributeResult)
_ATTRIBUTE_LIST = TypeAdapter(list[AttributeResult])
_ATTRIBUTE_PAGE = TypeAdapter(Page[AttributeResult])


class AttributeService:
    """Product attributes (Color, Size, ...). Coarse invalidation of attributes:*."""

    def __init__(self, attribute_repo: Any, cache: EntityCache) -> None:
        self._attribute_repo = attribute_repo
        self._cache = cache

    async def create_attribute(self, name: str, is_active: bool = True) -> AttributeResult:
        """Create an attribute.

        Raises:
            ValidationException: If name is blank.
            AlreadyExistsException: If an attribute with the same name exists.
        """
        name = clean_name(name)
        if await self._attribute_repo.name_exists(name):
            raise AlreadyExistsException("attribute", "name", name)
        created = await self._attribute_repo.create_from(name=name, is_active=is_active)
        await self._attribute_repo.commit()
        await self._cache.invalidate()
        return created

    async def list_attributes(self, params: PageParams) -> Page[AttributeResult]:
        params = params.restricted_to(self._attribute_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(CACHE_PREFIX_ATTRIBUTES, params),
            _ATTRIBUTE_PAGE,
            lambda: self._attribute_repo.list_page(params),
        )

    async def list_all_attributes(self) -> list[AttributeResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_ATTRIBUTES),
            _ATTRIBUTE_LIST,
            self._attribute_repo.list_all,
        )

    async def get_attribute(self, attribute_id: str) -> AttributeResult:
        """Raises ResourceNotFoundException if the attribute does not exist."""
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_ATTRIBUTES, attribute_id),
            _ATTRIBUTE,
            lambda: self._attribute_repo.get(attribute_id),
        )
        if result is None:
            raise ResourceNotFoundException("attribute", attribute_id)
        return result

    async def update_attribute(
        self,
        attribute_id: str,
        name: str | None = None,
        is_active: bool | None = None,
    ) -> AttributeResult:
        """Update name and/or active flag.

        Raises:
            ResourceNotFoundException: If the attribute does not exist.
            AlreadyExistsException: If the new name is taken.
        """
        current = await self._attribute_repo.get(attribute_id)
        if current is None:
            raise ResourceNotFoundException("attribute", attribute_id)
        if name is not None:
            name = clean_name(name)
            if await self._attribute_repo.name_exists(name, exclude_id=attribute_id):
                raise AlreadyExistsException("attribute", "name", name)
        values = changed_fields(current, {"name": name, "is_active": is_active})
        if not values:
            return current
        updated = await self._attribute_repo.update_fields(attribute_id, values)
        await self._attribute_repo.commit()
        await self._cache.invalidate()
        return updated

    async def delete_attribute(self, attribute_id: str) -> AttributeResult:
        """Delete an attribute (its secondary category links go with it)."""
        deleted = await self._attribute_repo.delete_by_id(attribute_id)
        if deleted is None:
            raise ResourceNotFoundException("attribute", attribute_id)
        await self._attribute_repo.commit()
        await self._cache.invalidate()
        return deleted
