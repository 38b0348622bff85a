"""Blog repository. Returns application DTOs."""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.blog import BlogResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import Blog, Vendor
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import blog_to_result

BLOG_SORT_FIELDS = frozenset(
    {"heading", "category", "author", "published_on", "created_at", "updated_at"}
)


class BlogRepository(BaseRepository[Blog, BlogResult]):
    """Blog persistence."""

    resource_type = "blog"
    unique_field = "heading"
    sort_fields = BLOG_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Blog)

    def _to_result(self, obj: Blog) -> BlogResult:
        return blog_to_result(obj)

    async def vendor_exists(self, vendor_id: str | None) -> bool:
        return await self._reference_exists(Vendor, vendor_id)

    async def list_all(self, vendor_id: str | None = None) -> list[BlogResult]:
        """Every post, newest first; only one vendor's when vendor_id is given."""
        stmt = select(Blog)
        if vendor_id is not None:
            stmt = stmt.where(Blog.vendor_id == vendor_id)
        return await self.list_results(stmt.order_by(Blog.created_at.desc(), Blog.id))

    async def list_page(
        self, params: PageParams, vendor_id: str | None = None
    ) -> Page[BlogResult]:
        stmt = select(Blog)
        if vendor_id is not None:
            stmt = stmt.where(Blog.vendor_id == vendor_id)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    Blog.heading.ilike(pattern, escape="\\"),
                    Blog.description.ilike(pattern, escape="\\"),
                    Blog.category.ilike(pattern, escape="\\"),
                    Blog.author.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "heading": Blog.heading,
                "category": Blog.category,
                "author": Blog.author,
                "published_on": Blog.published_on,
                "created_at": Blog.created_at,
                "updated_at": Blog.updated_at,
            },
        )
