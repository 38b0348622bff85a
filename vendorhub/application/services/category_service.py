"""Category application services for the three taxonomy levels.

Every level uses coarse invalidation of its own namespace; the dependency
graph in CacheInvalidator carries the change to the lower levels, products,
discounts and the dropdown aggregate.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.catalog import (
    ParentCategoryResult,
    PrimaryCategoryResult,
    SecondaryCategoryResult,
)
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.core.constants import (
    CACHE_PREFIX_PARENT_CATEGORIES,
    CACHE_PREFIX_PRIMARY_CATEGORIES,
    CACHE_PREFIX_SECONDARY_CATEGORIES,
)
from vendorhub.domain.exceptions import (
    AlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_PARENT = TypeAdapter(ParentCategoryResult)
_PARENT_LIST = TypeAdapter(list[ParentCategoryResult])
_PARENT_PAGE = TypeAdapter(Page[ParentCategoryResult])
_PRIMARY = TypeAdapter(PrimaryCategoryResult)
_PRIMARY_LIST = TypeAdapter(list[PrimaryCategoryResult])
_PRIMARY_PAGE = TypeAdapter(Page[PrimaryCategoryResult])
_SECONDARY = TypeAdapter(SecondaryCategoryResult)
_SECONDARY_LIST = TypeAdapter(list[SecondaryCategoryResult])
_SECONDARY_PAGE = TypeAdapter(Page[SecondaryCategoryResult])


class ParentCategoryService:
    """Top-level categories (e.g. Electronics)."""

    def __init__(self, parent_repo: Any, cache: EntityCache) -> None:
        self._parent_repo = parent_repo
        self._cache = cache

    async def create_parent_category(
        self, name: str, description: str | None = None, is_active: bool = True
    ) -> ParentCategoryResult:
        """Create a parent category.

        Raises:
            AlreadyExistsException: If the name is taken (case-insensitive).
        """
        name = clean_name(name)
        if await self._parent_repo.name_exists(name):
            raise AlreadyExistsException("parent category", "name", name)
        created = await self._parent_repo.create_from(
            name=name, description=description, is_active=is_active
        )
        await self._parent_repo.commit()
        await self._cache.invalidate()
        return created

    async def list_parent_categories(self, params: PageParams) -> Page[ParentCategoryResult]:
        params = params.restricted_to(self._parent_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(CACHE_PREFIX_PARENT_CATEGORIES, params),
            _PARENT_PAGE,
            lambda: self._parent_repo.list_page(params),
        )

    async def list_all_parent_categories(self) -> list[ParentCategoryResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_PARENT_CATEGORIES),
            _PARENT_LIST,
            self._parent_repo.list_all,
        )

    async def get_parent_category(self, category_id: str) -> ParentCategoryResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_PARENT_CATEGORIES, category_id),
            _PARENT,
            lambda: self._parent_repo.get(category_id),
        )
        if result is None:
            raise ResourceNotFoundException("parent category", category_id)
        return result

    async def update_parent_category(
        self, category_id: str, **changes: Any
    ) -> ParentCategoryResult:
        current = await self._parent_repo.get(category_id)
        if current is None:
            raise ResourceNotFoundException("parent category", category_id)
        if changes.get("name") is not None:
            changes["name"] = clean_name(changes["name"])
            if await self._parent_repo.name_exists(changes["name"], exclude_id=category_id):
                raise AlreadyExistsException("parent category", "name", changes["name"])
        values = changed_fields(current, changes)
        if not values:
            return current
        updated = await self._parent_repo.update_fields(category_id, values)
        await self._parent_repo.commit()
        await self._cache.invalidate()
        return updated

    async def delete_parent_category(self, category_id: str) -> ParentCategoryResult:
        """Delete a parent category with its primary and secondary categories."""
        deleted = await self._parent_repo.delete_by_id(category_id)
        if deleted is None:
            raise ResourceNotFoundException("parent category", category_id)
        await self._parent_repo.commit()
        await self._cache.invalidate()
        return deleted


class PrimaryCategoryService:
    """Second-level categories, each under one parent category."""

    def __init__(self, primary_repo: Any, cache: EntityCache) -> None:
        self._primary_repo = primary_repo
        self._cache = cache

    async def _ensure_parent(self, parent_id: str) -> None:
        if not await self._primary_repo.parent_exists(parent_id):
            raise ResourceNotFoundException("parent category", parent_id)

    async def create_primary_category(
        self,
        name: str,
        parent_category_id: str,
        description: str | None = None,
        is_active: bool = True,
    ) -> PrimaryCategoryResult:
        """Create a primary category under an existing parent.

        Raises:
            ResourceNotFoundException: If the parent category does not exist.
            AlreadyExistsException: If the name is taken within the parent.
        """
        name = clean_name(name)
        await self._ensure_parent(parent_category_id)
        if await self._primary_repo.name_exists(name, parent_category_id):
            raise AlreadyExistsException("primary category", "name", name)
        created = await self._primary_repo.create_from(
            name=name,
            parent_category_id=parent_category_id,
            description=description,
            is_active=is_active,
        )
        await self._primary_repo.commit()
        await self._cache.invalidate()
        return created

    async def list_primary_categories(
        self, params: PageParams, parent_category_id: str | None = None
    ) -> Page[PrimaryCategoryResult]:
        params = params.restricted_to(self._primary_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(
                CACHE_PREFIX_PRIMARY_CATEGORIES,
                params,
                (parent_category_id, "parent_category_id"),
            ),
            _PRIMARY_PAGE,
            lambda: self._primary_repo.list_page(params, parent_id=parent_category_id),
        )

    async def list_all_primary_categories(self) -> list[PrimaryCategoryResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_PRIMARY_CATEGORIES),
            _PRIMARY_LIST,
            self._primary_repo.list_all,
        )

    async def get_primary_category(self, category_id: str) -> PrimaryCategoryResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_PRIMARY_CATEGORIES, category_id),
            _PRIMARY,
            lambda: self._primary_repo.get(category_id),
        )
        if result is None:
            raise ResourceNotFoundException("primary category", category_id)
        return result

    async def update_primary_category(
        self, category_id: str, **changes: Any
    ) -> PrimaryCategoryResult:
        """Update name, description, active flag or parent.

        Raises:
            ResourceNotFoundException: If the category or the new parent does not exist.
            AlreadyExistsException: If the name is taken within the (new) parent.
        """
        current = await self._primary_repo.get(category_id)
        if current is None:
            raise ResourceNotFoundException("primary category", category_id)
        parent_id = changes.get("parent_category_id")
        if parent_id is not None:
            await self._ensure_parent(parent_id)
        else:
            parent_id = current.parent_category.id if current.parent_category else ""
        if changes.get("name") is not None:
            changes["name"] = clean_name(changes["name"])
        name = changes.get("name") or current.name
        if await self._primary_repo.name_exists(name, parent_id, exclude_id=category_id):
            raise AlreadyExistsException("primary category", "name", name)
        values = changed_fields(current, changes)
        if current.parent_category and values.get("parent_category_id") == current.parent_category.id:
            del values["parent_category_id"]
        if not values:
            return current
        updated = await self._primary_repo.update_fields(category_id, values)
        await self._primary_repo.commit()
        await self._cache.invalidate()
        return updated

    async def delete_primary_category(self, category_id: str) -> PrimaryCategoryResult:
        deleted = await self._primary_repo.delete_by_id(category_id)
        if deleted is None:
            raise ResourceNotFoundException("primary category", category_id)
        await self._primary_repo.commit()
        await self._cache.invalidate()
        return deleted


class SecondaryCategoryService:
    """Leaf categories with their attribute links."""

    def __init__(self, secondary_repo: Any, cache: EntityCache) -> None:
        self._secondary_repo = secondary_repo
        self._cache = cache

    async def _validate_links(
        self,
        parent_id: str,
        primary_id: str,
        attribute_ids: list[str] | None,
    ) -> None:
        if not await self._secondary_repo.parent_exists(parent_id):
            raise ResourceNotFoundException("parent category", parent_id)
        if not await self._secondary_repo.primary_in_parent(primary_id, parent_id):
            raise ValidationException(
                "Primary category does not exist under the given parent category",
                "primary_category_id",
            )
        if attribute_ids:
            missing = await self._secondary_repo.missing_attribute_ids(attribute_ids)
            if missing:
                raise ResourceNotFoundException("attribute", missing[0])

    async def create_secondary_category(
        self,
        name: str,
        parent_category_id: str,
        primary_category_id: str,
        attribute_ids: list[str] | None = None,
        description: str | None = None,
        is_active: bool = True,
    ) -> SecondaryCategoryResult:
        """Create a secondary category linked to attributes.

        Raises:
            ResourceNotFoundException: Unknown parent category or attribute.
            ValidationException: Primary category not under the parent.
            AlreadyExistsException: Name taken within the primary category.
        """
        name = clean_name(name)
        await self._validate_links(parent_category_id, primary_category_id, attribute_ids)
        if await self._secondary_repo.name_exists(name, primary_category_id):
            raise AlreadyExistsException("secondary category", "name", name)
        created = await self._secondary_repo.create_secondary(
            {
                "name": name,
                "parent_category_id": parent_category_id,
                "primary_category_id": primary_category_id,
                "description": description,
                "is_active": is_active,
            },
            attribute_ids or [],
        )
        await self._secondary_repo.commit()
        await self._cache.invalidate()
        return created

    async def list_secondary_categories(
        self,
        params: PageParams,
        parent_category_id: str | None = None,
        primary_category_id: str | None = None,
    ) -> Page[SecondaryCategoryResult]:
        params = params.restricted_to(self._secondary_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(
                CACHE_PREFIX_SECONDARY_CATEGORIES,
                params,
                (parent_category_id, "parent_category_id"),
                (primary_category_id, "primary_category_id"),
            ),
            _SECONDARY_PAGE,
            lambda: self._secondary_repo.list_page(
                params, parent_id=parent_category_id, primary_id=primary_category_id
            ),
        )

    async def list_all_secondary_categories(self) -> list[SecondaryCategoryResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_SECONDARY_CATEGORIES),
            _SECONDARY_LIST,
            self._secondary_repo.list_all,
        )

    async def get_secondary_category(self, category_id: str) -> SecondaryCategoryResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_SECONDARY_CATEGORIES, category_id),
            _SECONDARY,
            lambda: self._secondary_repo.get(category_id),
        )
        if result is None:
            raise ResourceNotFoundException("secondary category", category_id)
        return result

    async def update_secondary_category(
        self,
        category_id: str,
        attribute_ids: list[str] | None = None,
        **changes: Any,
    ) -> SecondaryCategoryResult:
        """Update fields, the parent/primary placement and/or the attribute set."""
        current = await self._secondary_repo.get(category_id)
        if current is None:
            raise ResourceNotFoundException("secondary category", category_id)
        parent_id = changes.get("parent_category_id") or (
            current.parent_category.id if current.parent_category else ""
        )
        primary_id = changes.get("primary_category_id") or (
            current.primary_category.id if current.primary_category else ""
        )
        await self._validate_links(parent_id, primary_id, attribute_ids)
        if changes.get("name") is not None:
            changes["name"] = clean_name(changes["name"])
        name = changes.get("name") or current.name
        if await self._secondary_repo.name_exists(name, primary_id, exclude_id=category_id):
            raise AlreadyExistsException("secondary category", "name", name)
        values = changed_fields(current, changes)
        if attribute_ids is None and not values:
            return current
        updated = await self._secondary_repo.update_secondary(
            category_id, values, attribute_ids
        )
        await self._secondary_repo.commit()
        await self._cache.invalidate()
        return updated

    async def delete_secondary_category(self, category_id: str) -> SecondaryCategoryResult:
        deleted = await self._secondary_repo.delete_by_id(category_id)
        if deleted is None:
            raise ResourceNotFoundException("secondary category", category_id)
        await self._secondary_repo.commit()
        await self._cache.invalidate()
        return deleted
