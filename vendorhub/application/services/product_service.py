"""Product application service: cached reads, coarse invalidation plus inventory fan-out."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.dtos.product import ProductResult
from vendorhub.application.services._helpers import clean_name
from vendorhub.application.services.dashboard_service import DashboardService
from vendorhub.core.constants import CACHE_PREFIX_PRODUCTS
from vendorhub.domain.exceptions import ResourceNotFoundException, ValidationException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_PRODUCT = TypeAdapter(ProductResult)
_PRODUCT_LIST = TypeAdapter(list[ProductResult])
_PRODUCT_PAGE = TypeAdapter(Page[ProductResult])

_REFERENCE_FIELDS = (
    "vendor_id",
    "brand_id",
    "parent_category_id",
    "primary_category_id",
    "secondary_category_id",
)
_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "mrp", "net_price", "quantity", "is_active", *_REFERENCE_FIELDS}
)


def _validate_pricing(mrp: float, net_price: float, quantity: int) -> None:
    if mrp < 0:
        raise ValidationException("MRP must not be negative", "mrp")
    if net_price < 0:
        raise ValidationException("Net price must not be negative", "net_price")
    if net_price > mrp:
        raise ValidationException("Net price must not exceed MRP", "net_price")
    if quantity < 0:
        raise ValidationException("Quantity must not be negative", "quantity")


class ProductService:
    """Vendor products. Writes also drop the owning vendors' inventory metrics."""

    def __init__(
        self,
        product_repo: Any,
        cache: EntityCache,
        dashboard: DashboardService | None = None,
    ) -> None:
        self._product_repo = product_repo
        self._cache = cache
        self._dashboard = dashboard

    async def _invalidate(self, *vendor_ids: str) -> None:
        await self._cache.invalidate()
        if self._dashboard is None:
            return
        for vendor_id in dict.fromkeys(vendor_ids):
            await self._dashboard.on_product_change(vendor_id)

    async def create_product(
        self,
        vendor_id: str,
        name: str,
        mrp: float,
        net_price: float,
        quantity: int = 0,
        description: str | None = None,
        brand_id: str | None = None,
        parent_category_id: str | None = None,
        primary_category_id: str | None = None,
        secondary_category_id: str | None = None,
        is_active: bool = True,
    ) -> ProductResult:
        """Create a product for a vendor.

        Raises:
            ValidationException: Blank name, negative price/quantity or net price above MRP.
            ResourceNotFoundException: Unknown vendor, brand or category.
        """
        name = clean_name(name)
        _validate_pricing(mrp, net_price, quantity)
        references = {
            "vendor_id": vendor_id,
            "brand_id": brand_id,
            "parent_category_id": parent_category_id,
            "primary_category_id": primary_category_id,
            "secondary_category_id": secondary_category_id,
        }
        await self._product_repo.ensure_references(**references)
        created = await self._product_repo.create_from(
            name=name,
            description=description,
            mrp=mrp,
            net_price=net_price,
            quantity=quantity,
            is_active=is_active,
            **references,
        )
        await self._product_repo.commit()
        await self._invalidate(created.vendor_id)
        return created

    async def list_products(self, vendor_id: str | None = None) -> list[ProductResult]:
        """Unpaginated product list, for all vendors or one vendor."""
        key = (
            keys.products_vendor_key(vendor_id)
            if vendor_id is not None
            else keys.all_key(CACHE_PREFIX_PRODUCTS)
        )
        return await self._cache.fetch(
            key, _PRODUCT_LIST, lambda: self._product_repo.list_all(vendor_id)
        )

    async def list_products_paginated(
        self, params: PageParams, vendor_id: str | None = None
    ) -> Page[ProductResult]:
        params = params.restricted_to(self._product_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(CACHE_PREFIX_PRODUCTS, params, (vendor_id, "vendor_id")),
            _PRODUCT_PAGE,
            lambda: self._product_repo.list_page(params, vendor_id=vendor_id),
        )

    async def get_product(self, product_id: str) -> ProductResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_PRODUCTS, product_id),
            _PRODUCT,
            lambda: self._product_repo.get(product_id),
        )
        if result is None:
            raise ResourceNotFoundException("product", product_id)
        return result

    async def update_product(self, product_id: str, **changes: Any) -> ProductResult:
        """Update product fields; None values are ignored.

        Moving a product to another vendor invalidates both vendors' inventory.

        Raises:
            ResourceNotFoundException: Unknown product or referenced row.
            ValidationException: Unknown field or invalid pricing.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Cannot update {', '.join(sorted(unknown))}", "body")
        current = await self._product_repo.get(product_id)
        if current is None:
            raise ResourceNotFoundException("product", product_id)
        values = {k: v for k, v in changes.items() if v is not None}
        if "name" in values:
            values["name"] = clean_name(values["name"])
        _validate_pricing(
            values.get("mrp", current.mrp),
            values.get("net_price", current.net_price),
            values.get("quantity", current.quantity),
        )
        await self._product_repo.ensure_references(
            **{k: values[k] for k in _REFERENCE_FIELDS if k in values}
        )
        if not values:
            return current
        updated = await self._product_repo.update_fields(product_id, values)
        await self._product_repo.commit()
        await self._invalidate(current.vendor_id, updated.vendor_id)
        return updated

    async def update_stock(self, product_id: str, quantity: int) -> ProductResult:
        """Set the stock level of a product."""
        if quantity < 0:
            raise ValidationException("Quantity must not be negative", "quantity")
        updated = await self._product_repo.update_fields(product_id, {"quantity": quantity})
        if updated is None:
            raise ResourceNotFoundException("product", product_id)
        await self._product_repo.commit()
        await self._invalidate(updated.vendor_id)
        return updated

    async def delete_product(self, product_id: str) -> ProductResult:
        deleted = await self._product_repo.delete_by_id(product_id)
        if deleted is None:
            raise ResourceNotFoundException("product", product_id)
        await self._product_repo.commit()
        await self._invalidate(deleted.vendor_id)
        return deleted
