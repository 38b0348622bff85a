"""Category repositories (parent, primary, secondary). Return application DTOs."""

from typing import Any

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.catalog import (
    ParentCategoryResult,
    PrimaryCategoryResult,
    SecondaryCategoryResult,
)
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import (
    Attribute,
    ParentCategory,
    PrimaryCategory,
    SecondaryCategory,
)
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import (
    parent_category_to_result,
    primary_category_to_result,
    secondary_category_to_result,
)

PARENT_CATEGORY_SORT_FIELDS = frozenset({"name", "is_active", "created_at", "updated_at"})
PRIMARY_CATEGORY_SORT_FIELDS = PARENT_CATEGORY_SORT_FIELDS | {"parent_category"}
SECONDARY_CATEGORY_SORT_FIELDS = PRIMARY_CATEGORY_SORT_FIELDS | {"primary_category"}


class ParentCategoryRepository(BaseRepository[ParentCategory, ParentCategoryResult]):
    """Parent category persistence."""

    resource_type = "parent category"
    sort_fields = PARENT_CATEGORY_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, ParentCategory)

    def _to_result(self, obj: ParentCategory) -> ParentCategoryResult:
        return parent_category_to_result(obj)

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        criteria = [func.lower(ParentCategory.name) == name.lower()]
        if exclude_id is not None:
            criteria.append(ParentCategory.id != exclude_id)
        return await self.exists(*criteria)

    async def list_all(self) -> list[ParentCategoryResult]:
        return await self.list_results(select(ParentCategory).order_by(ParentCategory.name))

    async def list_page(self, params: PageParams) -> Page[ParentCategoryResult]:
        stmt = select(ParentCategory)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    ParentCategory.name.ilike(pattern, escape="\\"),
                    ParentCategory.description.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": ParentCategory.name,
                "is_active": ParentCategory.is_active,
                "created_at": ParentCategory.created_at,
                "updated_at": ParentCategory.updated_at,
            },
        )


class PrimaryCategoryRepository(BaseRepository[PrimaryCategory, PrimaryCategoryResult]):
    """Primary category persistence."""

    resource_type = "primary category"
    sort_fields = PRIMARY_CATEGORY_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, PrimaryCategory)

    def _to_result(self, obj: PrimaryCategory) -> PrimaryCategoryResult:
        return primary_category_to_result(obj)

    async def parent_exists(self, parent_id: str) -> bool:
        return await self._reference_exists(ParentCategory, parent_id)

    async def name_exists(
        self, name: str, parent_id: str, exclude_id: str | None = None
    ) -> bool:
        """Names are unique within one parent."""
        criteria = [
            func.lower(PrimaryCategory.name) == name.lower(),
            PrimaryCategory.parent_category_id == parent_id,
        ]
        if exclude_id is not None:
            criteria.append(PrimaryCategory.id != exclude_id)
        return await self.exists(*criteria)

    async def list_all(self, parent_id: str | None = None) -> list[PrimaryCategoryResult]:
        stmt = select(PrimaryCategory).order_by(PrimaryCategory.name)
        if parent_id is not None:
            stmt = stmt.where(PrimaryCategory.parent_category_id == parent_id)
        return await self.list_results(stmt)

    async def list_page(
        self, params: PageParams, parent_id: str | None = None
    ) -> Page[PrimaryCategoryResult]:
        stmt = select(PrimaryCategory).outerjoin(
            ParentCategory, PrimaryCategory.parent_category_id == ParentCategory.id
        )
        if parent_id is not None:
            stmt = stmt.where(PrimaryCategory.parent_category_id == parent_id)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    PrimaryCategory.name.ilike(pattern, escape="\\"),
                    PrimaryCategory.description.ilike(pattern, escape="\\"),
                    ParentCategory.name.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": PrimaryCategory.name,
                "is_active": PrimaryCategory.is_active,
                "created_at": PrimaryCategory.created_at,
                "updated_at": PrimaryCategory.updated_at,
                "parent_category": ParentCategory.name,
            },
        )


class SecondaryCategoryRepository(
    BaseRepository[SecondaryCategory, SecondaryCategoryResult]
):
    """Secondary category persistence, including its attribute links."""

    resource_type = "secondary category"
    sort_fields = SECONDARY_CATEGORY_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, SecondaryCategory)

    def _to_result(self, obj: SecondaryCategory) -> SecondaryCategoryResult:
        return secondary_category_to_result(obj)

    async def parent_exists(self, parent_id: str) -> bool:
        return await self._reference_exists(ParentCategory, parent_id)

    async def primary_in_parent(self, primary_id: str, parent_id: str) -> bool:
        """True when the primary category exists and belongs to parent_id."""
        stmt = select(func.count()).select_from(PrimaryCategory).where(
            PrimaryCategory.id == primary_id,
            PrimaryCategory.parent_category_id == parent_id,
        )
        return bool(await self.db.scalar(stmt))

    async def name_exists(
        self, name: str, primary_id: str, exclude_id: str | None = None
    ) -> bool:
        """Names are unique within one primary category."""
        criteria = [
            func.lower(SecondaryCategory.name) == name.lower(),
            SecondaryCategory.primary_category_id == primary_id,
        ]
        if exclude_id is not None:
            criteria.append(SecondaryCategory.id != exclude_id)
        return await self.exists(*criteria)

    async def _attributes(self, attribute_ids: list[str]) -> list[Attribute]:
        if not attribute_ids:
            return []
        result = await self.db.execute(
            select(Attribute).where(Attribute.id.in_(list(set(attribute_ids))))
        )
        return list(result.scalars().all())

    async def missing_attribute_ids(self, attribute_ids: list[str]) -> list[str]:
        """Ids from attribute_ids that do not exist, in input order."""
        found = {a.id for a in await self._attributes(attribute_ids)}
        return [a for a in dict.fromkeys(attribute_ids) if a not in found]

    async def create_secondary(
        self, values: dict[str, Any], attribute_ids: list[str]
    ) -> SecondaryCategoryResult:
        obj = SecondaryCategory(**values)
        obj.attributes = await self._attributes(attribute_ids)
        return self._to_result(await self.create(obj, values))

    async def update_secondary(
        self,
        entity_id: str,
        values: dict[str, Any],
        attribute_ids: list[str] | None = None,
    ) -> SecondaryCategoryResult | None:
        obj = await self.get_entity(entity_id)
        if obj is None:
            return None
        for name, value in values.items():
            setattr(obj, name, value)
        if attribute_ids is not None:
            obj.attributes = await self._attributes(attribute_ids)
        await self._flush(values)
        return self._to_result(await self._reload(entity_id))

    async def list_all(self) -> list[SecondaryCategoryResult]:
        return await self.list_results(
            select(SecondaryCategory).order_by(SecondaryCategory.name)
        )

    async def list_page(
        self,
        params: PageParams,
        parent_id: str | None = None,
        primary_id: str | None = None,
    ) -> Page[SecondaryCategoryResult]:
        stmt = (
            select(SecondaryCategory)
            .outerjoin(ParentCategory, SecondaryCategory.parent_category_id == ParentCategory.id)
            .outerjoin(PrimaryCategory, SecondaryCategory.primary_category_id == PrimaryCategory.id)
        )
        if parent_id is not None:
            stmt = stmt.where(SecondaryCategory.parent_category_id == parent_id)
        if primary_id is not None:
            stmt = stmt.where(SecondaryCategory.primary_category_id == primary_id)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    SecondaryCategory.name.ilike(pattern, escape="\\"),
                    SecondaryCategory.description.ilike(pattern, escape="\\"),
                    ParentCategory.name.ilike(pattern, escape="\\"),
                    PrimaryCategory.name.ilike(pattern, escape="\\"),
                    SecondaryCategory.attributes.any(Attribute.name.ilike(pattern, escape="\\")),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": SecondaryCategory.name,
                "is_active": SecondaryCategory.is_active,
                "created_at": SecondaryCategory.created_at,
                "updated_at": SecondaryCategory.updated_at,
                "parent_category": ParentCategory.name,
                "primary_category": PrimaryCategory.name,
            },
        )
