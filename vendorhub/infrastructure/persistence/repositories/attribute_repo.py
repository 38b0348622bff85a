"""Attribute repository. Returns application DTOs."""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.catalog import AttributeResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import Attribute
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import attribute_to_result

ATTRIBUTE_SORT_FIELDS = frozenset({"name", "is_active", "created_at", "updated_at"})


class AttributeRepository(BaseRepository[Attribute, AttributeResult]):
    """Attribute persistence."""

    resource_type = "attribute"
    sort_fields = ATTRIBUTE_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Attribute)

    def _to_result(self, obj: Attribute) -> AttributeResult:
        return attribute_to_result(obj)

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        """Case-insensitive uniqueness check."""
        criteria = [func.lower(Attribute.name) == name.lower()]
        if exclude_id is not None:
            criteria.append(Attribute.id != exclude_id)
        return await self.exists(*criteria)

    async def list_all(self) -> list[AttributeResult]:
        return await self.list_results(select(Attribute).order_by(Attribute.name))

    async def list_page(self, params: PageParams) -> Page[AttributeResult]:
        stmt = select(Attribute)
        if params.search:
            stmt = stmt.where(Attribute.name.ilike(contains_pattern(params.search), escape="\\"))
        return await self.paginate(
            stmt,
            params,
            {
                "name": Attribute.name,
                "is_active": Attribute.is_active,
                "created_at": Attribute.created_at,
                "updated_at": Attribute.updated_at,
            },
        )

