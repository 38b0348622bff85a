"""Brand repository. Returns application DTOs."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.catalog import BrandResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import Brand
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import brand_to_result

BRAND_SORT_FIELDS = frozenset({"name", "is_active", "created_at", "updated_at"})


class BrandRepository(BaseRepository[Brand, BrandResult]):
    """Brand persistence."""

    resource_type = "brand"
    sort_fields = BRAND_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Brand)

    def _to_result(self, obj: Brand) -> BrandResult:
        return brand_to_result(obj)

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        criteria = [func.lower(Brand.name) == name.lower()]
        if exclude_id is not None:
            criteria.append(Brand.id != exclude_id)
        return await self.exists(*criteria)

    async def list_all(self) -> list[BrandResult]:
        return await self.list_results(select(Brand).order_by(Brand.created_at.desc(), Brand.id))

    async def list_page(self, params: PageParams) -> Page[BrandResult]:
        stmt = select(Brand)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    Brand.name.ilike(pattern, escape="\\"),
                    Brand.meta_title.ilike(pattern, escape="\\"),
                    Brand.meta_keywords.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": Brand.name,
                "is_active": Brand.is_active,
                "created_at": Brand.created_at,
                "updated_at": Brand.updated_at,
            },
        )
