"""Discount application service.

Invalidation is targeted: a write drops discounts:id:<id>, the public
listing, every admin page and the pages of the owning vendor(s). Pages of
unaffected vendors stay warm.

The public listing caches the superset of active discounts that have not
ended; the start/end window is applied on every read, so a cached entry
never exposes a discount outside its window.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.discount import DiscountResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import clean_name
from vendorhub.core.constants import CACHE_PREFIX_DISCOUNTS
from vendorhub.domain.enums import DiscountTargetType, DiscountType
from vendorhub.domain.exceptions import ResourceNotFoundException, ValidationException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys
from vendorhub.shared.utils.datetime import ensure_utc, utc_now

_DISCOUNT = TypeAdapter(DiscountResult)
_DISCOUNT_LIST = TypeAdapter(list[DiscountResult])
_DISCOUNT_PAGE = TypeAdapter(Page[DiscountResult])

_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "discount_type",
        "discount_value",
        "target_type",
        "parent_category_id",
        "vendor_id",
        "start_date",
        "end_date",
        "is_active",
    }
)


def _validate_terms(
    discount_type: DiscountType,
    value: float,
    start_date: datetime,
    end_date: datetime,
) -> None:
    if discount_type is DiscountType.PERCENTAGE and not 0 <= value <= 100:
        raise ValidationException("Percentage discount must be between 0 and 100", "discount_value")
    if value < 0:
        raise ValidationException("Discount value must not be negative", "discount_value")
    if ensure_utc(end_date) <= ensure_utc(start_date):
        raise ValidationException("End date must be after start date", "end_date")


class DiscountService:
    """Discount campaigns, marketplace-wide or owned by a vendor."""

    def __init__(
        self,
        discount_repo: Any,
        cache: EntityCache,
        public_ttl: int | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._discount_repo = discount_repo
        self._cache = cache
        self._public_ttl = public_ttl
        self._clock = clock

    async def _invalidate(self, discount_id: str, *vendor_ids: str | None) -> None:
        await self._cache.invalidate_keys(
            keys.entity_key(CACHE_PREFIX_DISCOUNTS, discount_id),
            keys.discount_public_key(),
        )
        await self._cache.invalidate_pattern(keys.discount_admin_pattern())
        for vendor_id in dict.fromkeys(v for v in vendor_ids if v is not None):
            await self._cache.invalidate_pattern(keys.discount_vendor_pattern(vendor_id))

    async def _ensure_references(
        self,
        parent_category_id: str | None = None,
        vendor_id: str | None = None,
        created_by: str | None = None,
    ) -> None:
        if not await self._discount_repo.parent_category_exists(parent_category_id):
            raise ResourceNotFoundException("parent category", parent_category_id or "")
        if not await self._discount_repo.vendor_exists(vendor_id):
            raise ResourceNotFoundException("vendor", vendor_id or "")
        if not await self._discount_repo.user_exists(created_by):
            raise ResourceNotFoundException("user", created_by or "")

    async def create_discount(
        self,
        name: str,
        discount_type: DiscountType,
        discount_value: float,
        start_date: datetime,
        end_date: datetime,
        parent_category_id: str | None = None,
        vendor_id: str | None = None,
        created_by: str | None = None,
        description: str | None = None,
        target_type: DiscountTargetType = DiscountTargetType.CATEGORY,
        is_active: bool = True,
    ) -> DiscountResult:
        """Create a discount.

        Raises:
            ValidationException: Bad value for the type or end_date not after start_date.
            ResourceNotFoundException: Unknown parent category, vendor or creator.
        """
        name = clean_name(name)
        discount_type = DiscountType(discount_type)
        _validate_terms(discount_type, discount_value, start_date, end_date)
        await self._ensure_references(parent_category_id, vendor_id, created_by)
        created = await self._discount_repo.create_from(
            name=name,
            description=description,
            discount_type=discount_type.value,
            discount_value=discount_value,
            target_type=DiscountTargetType(target_type).value,
            parent_category_id=parent_category_id,
            vendor_id=vendor_id,
            created_by=created_by,
            start_date=ensure_utc(start_date),
            end_date=ensure_utc(end_date),
            is_active=is_active,
        )
        await self._discount_repo.commit()
        await self._invalidate(created.id, created.vendor_id)
        return created

    async def get_discount(self, discount_id: str) -> DiscountResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_DISCOUNTS, discount_id),
            _DISCOUNT,
            lambda: self._discount_repo.get(discount_id),
        )
        if result is None:
            raise ResourceNotFoundException("discount", discount_id)
        return result

    async def list_discounts(self, params: PageParams) -> Page[DiscountResult]:
        """Admin view: discounts of every vendor."""
        params = params.restricted_to(self._discount_repo.sort_fields)
        return await self._cache.fetch(
            keys.discount_admin_page_key(params),
            _DISCOUNT_PAGE,
            lambda: self._discount_repo.list_page(params),
        )

    async def list_vendor_discounts(
        self, vendor_id: str, params: PageParams
    ) -> Page[DiscountResult]:
        params = params.restricted_to(self._discount_repo.sort_fields)
        return await self._cache.fetch(
            keys.discount_vendor_page_key(vendor_id, params),
            _DISCOUNT_PAGE,
            lambda: self._discount_repo.list_page(params, vendor_id=vendor_id),
        )

    async def list_public_discounts(self) -> list[DiscountResult]:
        """Discounts live right now (active and inside their date window)."""
        candidates = await self._cache.fetch(
            keys.discount_public_key(),
            _DISCOUNT_LIST,
            lambda: self._discount_repo.list_unexpired_active(self._clock()),
            ttl=self._public_ttl,
        )
        now = self._clock()
        return [d for d in candidates if d.is_live(now)]

    async def update_discount(self, discount_id: str, **changes: Any) -> DiscountResult:
        """Update discount fields; None values are ignored.

        Raises:
            ResourceNotFoundException: Unknown discount or referenced row.
            ValidationException: Unknown field or invalid terms after the change.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Cannot update {', '.join(sorted(unknown))}", "body")
        current = await self._discount_repo.get(discount_id)
        if current is None:
            raise ResourceNotFoundException("discount", discount_id)
        values = {k: v for k, v in changes.items() if v is not None}
        if not values:
            return current
        if "name" in values:
            values["name"] = clean_name(values["name"])
        discount_type = DiscountType(values.get("discount_type", current.discount_type))
        _validate_terms(
            discount_type,
            values.get("discount_value", current.discount_value),
            values.get("start_date", current.start_date),
            values.get("end_date", current.end_date),
        )
        await self._ensure_references(
            values.get("parent_category_id"), values.get("vendor_id")
        )
        for field in ("discount_type", "target_type"):
            if field in values:
                values[field] = str(getattr(values[field], "value", values[field]))
        for field in ("start_date", "end_date"):
            if field in values:
                values[field] = ensure_utc(values[field])
        updated = await self._discount_repo.update_fields(discount_id, values)
        await self._discount_repo.commit()
        await self._invalidate(discount_id, current.vendor_id, updated.vendor_id)
        return updated

    async def delete_discount(self, discount_id: str) -> DiscountResult:
        deleted = await self._discount_repo.delete_by_id(discount_id)
        if deleted is None:
            raise ResourceNotFoundException("discount", discount_id)
        await self._discount_repo.commit()
        await self._invalidate(discount_id, deleted.vendor_id)
        return deleted
