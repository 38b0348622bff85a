"""Discount repository. Returns application DTOs."""

from datetime import datetime

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.discount import DiscountResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import Discount, ParentCategory, User, Vendor
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import discount_to_result

DISCOUNT_SORT_FIELDS = frozenset(
    {"name", "discount_value", "start_date", "end_date", "created_at", "updated_at"}
)


class DiscountRepository(BaseRepository[Discount, DiscountResult]):
    """Discount persistence."""

    resource_type = "discount"
    sort_fields = DISCOUNT_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Discount)

    def _to_result(self, obj: Discount) -> DiscountResult:
        return discount_to_result(obj)

    async def parent_category_exists(self, parent_id: str | None) -> bool:
        return await self._reference_exists(ParentCategory, parent_id)

    async def vendor_exists(self, vendor_id: str | None) -> bool:
        return await self._reference_exists(Vendor, vendor_id)

    async def user_exists(self, user_id: str | None) -> bool:
        return await self._reference_exists(User, user_id)

    async def list_page(
        self, params: PageParams, vendor_id: str | None = None
    ) -> Page[DiscountResult]:
        """Page of discounts; all vendors when vendor_id is None (admin view)."""
        stmt = select(Discount)
        if vendor_id is not None:
            stmt = stmt.where(Discount.vendor_id == vendor_id)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    Discount.name.ilike(pattern, escape="\\"),
                    Discount.description.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": Discount.name,
                "discount_value": Discount.discount_value,
                "start_date": Discount.start_date,
                "end_date": Discount.end_date,
                "created_at": Discount.created_at,
                "updated_at": Discount.updated_at,
            },
        )

    async def list_unexpired_active(self, now: datetime) -> list[DiscountResult]:
        """Active discounts that have not ended yet (including ones not started)."""
        return await self.list_results(
            select(Discount)
            .where(Discount.is_active.is_(True), Discount.end_date >= now)
            .order_by(Discount.start_date, Discount.id)
        )
