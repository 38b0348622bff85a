"""Size application service: cached reads, writes drop the whole sizes namespace."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.catalog import SizeResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.core.constants import CACHE_PREFIX_SIZES
from vendorhub.domain.exceptions import AlreadyExistsException, ResourceNotFoundException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_SIZE = TypeAdapter(SizeResult)
_SIZE_LIST = TypeAdapter(list[SizeResult])
_SIZE_PAGE = TypeAdapter(Page[SizeResult])


class SizeService:
    """Size options (S, M, XL, 42...)."""

    def __init__(self, size_repo: Any, cache: EntityCache) -> None:
        self._size_repo = size_repo
        self._cache = cache

    async def create_size(self, label: str, value: str, is_active: bool = True) -> SizeResult:
        """Create a size.

        Raises:
            ValidationException: If label or value is blank.
            AlreadyExistsException: If a size with the same label exists.
        """
        label = clean_name(label, "label")
        value = clean_name(value, "value")
        if await self._size_repo.label_exists(label):
            raise AlreadyExistsException("size", "label", label)
        created = await self._size_repo.create_from(label=label, value=value, is_active=is_active)
        await self._size_repo.commit()
        await self._cache.invalidate()
        return created

    async def list_sizes(self, params: PageParams) -> Page[SizeResult]:
        params = params.restricted_to(self._size_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(CACHE_PREFIX_SIZES, params),
            _SIZE_PAGE,
            lambda: self._size_repo.list_page(params),
        )

    async def list_all_sizes(self) -> list[SizeResult]:
        """Every size ordered by label."""
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_SIZES), _SIZE_LIST, self._size_repo.list_all
        )

    async def get_size(self, size_id: str) -> SizeResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_SIZES, size_id),
            _SIZE,
            lambda: self._size_repo.get(size_id),
        )
        if result is None:
            raise ResourceNotFoundException("size", size_id)
        return result

    async def update_size(self, size_id: str, **changes: Any) -> SizeResult:
        """Update label, value or is_active; None values are ignored.

        Raises:
            ResourceNotFoundException: If the size does not exist.
            AlreadyExistsException: If the new label is taken.
        """
        current = await self._size_repo.get(size_id)
        if current is None:
            raise ResourceNotFoundException("size", size_id)
        if changes.get("label") is not None:
            changes["label"] = clean_name(changes["label"], "label")
            if await self._size_repo.label_exists(changes["label"], exclude_id=size_id):
                raise AlreadyExistsException("size", "label", changes["label"])
        if changes.get("value") is not None:
            changes["value"] = clean_name(changes["value"], "value")
        values = changed_fields(current, changes)
        if not values:
            return current
        updated = await self._size_repo.update_fields(size_id, values)
        await self._size_repo.commit()
        await self._cache.invalidate()
        return updated

    async def delete_size(self, size_id: str) -> SizeResult:
        deleted = await self._size_repo.delete_by_id(size_id)
        if deleted is None:
            raise ResourceNotFoundException("size", size_id)
        await self._size_repo.commit()
        await self._cache.invalidate()
        return deleted
