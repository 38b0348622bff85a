"""Blog application service.

Invalidation is targeted: a write drops blog:id:<id>, the all-vendors list
and pages, and the list and pages of the owning vendor. Other vendors'
cached blogs stay warm. Updates are scoped to the owner: a vendor can only
edit its own posts, and vendor_id None addresses marketplace posts.
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.blog import BlogResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.core.constants import CACHE_PREFIX_BLOG
from vendorhub.domain.exceptions import ResourceNotFoundException, ValidationException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys
from vendorhub.shared.utils.datetime import utc_now

_BLOG = TypeAdapter(BlogResult)
_BLOG_LIST = TypeAdapter(list[BlogResult])
_BLOG_PAGE = TypeAdapter(Page[BlogResult])

_REQUIRED_TEXT = ("heading", "description", "category", "author")
_UPDATABLE_FIELDS = frozenset(
    {
        *_REQUIRED_TEXT,
        "published_on",
        "image_url",
        "meta_title",
        "meta_keywords",
        "meta_description",
    }
)


class BlogService:
    """Blog posts written by vendors or by the marketplace."""

    def __init__(self, blog_repo: Any, cache: EntityCache) -> None:
        self._blog_repo = blog_repo
        self._cache = cache

    async def _invalidate(self, blog_id: str, vendor_id: str | None) -> None:
        stale = [keys.entity_key(CACHE_PREFIX_BLOG, blog_id), keys.blog_list_key(None)]
        if vendor_id is not None:
            stale.append(keys.blog_list_key(vendor_id))
        await self._cache.invalidate_keys(*stale)
        await self._cache.invalidate_pattern(keys.blog_page_pattern(None))
        if vendor_id is not None:
            await self._cache.invalidate_pattern(keys.blog_page_pattern(vendor_id))

    async def create_blog(
        self,
        heading: str,
        description: str,
        category: str,
        author: str,
        published_on: date | None = None,
        vendor_id: str | None = None,
        image_url: str | None = None,
        meta_title: str | None = None,
        meta_keywords: str | None = None,
        meta_description: str | None = None,
    ) -> BlogResult:
        """Publish a post; published_on defaults to today (UTC).

        Raises:
            ValidationException: If a required text field is blank.
            ResourceNotFoundException: If vendor_id names no vendor.
        """
        text = {
            field: clean_name(value, field)
            for field, value in zip(_REQUIRED_TEXT, (heading, description, category, author))
        }
        if not await self._blog_repo.vendor_exists(vendor_id):
            raise ResourceNotFoundException("vendor", vendor_id or "")
        created = await self._blog_repo.create_from(
            **text,
            published_on=published_on or utc_now().date(),
            vendor_id=vendor_id,
            image_url=image_url,
            meta_title=meta_title,
            meta_keywords=meta_keywords,
            meta_description=meta_description,
        )
        await self._blog_repo.commit()
        await self._invalidate(created.id, created.vendor_id)
        return created

    async def get_blog(self, blog_id: str) -> BlogResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_BLOG, blog_id),
            _BLOG,
            lambda: self._blog_repo.get(blog_id),
        )
        if result is None:
            raise ResourceNotFoundException("blog", blog_id)
        return result

    async def list_blogs(
        self, params: PageParams, vendor_id: str | None = None
    ) -> Page[BlogResult]:
        """Page of posts; every vendor's when vendor_id is None."""
        params = params.restricted_to(self._blog_repo.sort_fields)
        return await self._cache.fetch(
            keys.blog_page_key(vendor_id, params),
            _BLOG_PAGE,
            lambda: self._blog_repo.list_page(params, vendor_id=vendor_id),
        )

    async def list_all_blogs(self, vendor_id: str | None = None) -> list[BlogResult]:
        return await self._cache.fetch(
            keys.blog_list_key(vendor_id),
            _BLOG_LIST,
            lambda: self._blog_repo.list_all(vendor_id),
        )

    async def update_blog(
        self, blog_id: str, vendor_id: str | None, **changes: Any
    ) -> BlogResult:
        """Update a post owned by vendor_id; None values are ignored.

        Raises:
            ResourceNotFoundException: No such post, or it belongs to another owner.
            ValidationException: Unknown field or a blank required field.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Cannot update {', '.join(sorted(unknown))}", "body")
        current = await self._blog_repo.get(blog_id)
        if current is None or current.vendor_id != vendor_id:
            raise ResourceNotFoundException("blog", blog_id)
        for field in _REQUIRED_TEXT:
            if changes.get(field) is not None:
                changes[field] = clean_name(changes[field], field)
        values = changed_fields(current, changes)
        if not values:
            return current
        updated = await self._blog_repo.update_fields(blog_id, values)
        await self._blog_repo.commit()
        await self._invalidate(blog_id, current.vendor_id)
        return updated

    async def delete_blog(self, blog_id: str) -> BlogResult:
        deleted = await self._blog_repo.delete_by_id(blog_id)
        if deleted is None:
            raise ResourceNotFoundException("blog", blog_id)
        await self._blog_repo.commit()
        await self._invalidate(blog_id, deleted.vendor_id)
        return deleted
