"""Size repository. Returns application DTOs."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.catalog import SizeResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import Size
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import size_to_result

SIZE_SORT_FIELDS = frozenset({"label", "value", "is_active", "created_at", "updated_at"})


class SizeRepository(BaseRepository[Size, SizeResult]):
    """Size persistence. Labels are unique regardless of case."""

    resource_type = "size"
    unique_field = "label"
    sort_fields = SIZE_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Size)

    def _to_result(self, obj: Size) -> SizeResult:
        return size_to_result(obj)

    async def label_exists(self, label: str, exclude_id: str | None = None) -> bool:
        criteria = [func.lower(Size.label) == label.lower()]
        if exclude_id is not None:
            criteria.append(Size.id != exclude_id)
        return await self.exists(*criteria)

    async def list_all(self) -> list[SizeResult]:
        return await self.list_results(select(Size).order_by(Size.label, Size.id))

    async def list_page(self, params: PageParams) -> Page[SizeResult]:
        stmt = select(Size)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    Size.label.ilike(pattern, escape="\\"),
                    Size.value.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "label": Size.label,
                "value": Size.value,
                "is_active": Size.is_active,
                "created_at": Size.created_at,
                "updated_at": Size.updated_at,
            },
        )
