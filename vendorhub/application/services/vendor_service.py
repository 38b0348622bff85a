"""Vendor application service: long-lived cached profiles with targeted invalidation."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.account import VendorResult
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.application.services.dashboard_service import DashboardService
from vendorhub.core.constants import (
    CACHE_PREFIX_BLOG,
    CACHE_PREFIX_DISCOUNTS,
    CACHE_PREFIX_PRODUCTS,
    CACHE_PREFIX_REFERRALS,
    CACHE_PREFIX_VENDOR,
)
from vendorhub.domain.exceptions import (
    AlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_VENDOR = TypeAdapter(VendorResult)
_VENDOR_LIST = TypeAdapter(list[VendorResult])

_UPDATABLE_FIELDS = frozenset(
    {"name", "email", "phone", "store_name", "password_hash", "is_verified"}
)


def _normalize_email(email: str | None) -> str:
    normalized = (email or "").strip().lower()
    if "@" not in normalized:
        raise ValidationException("A valid email is required", "email")
    return normalized


class VendorService:
    """Vendor accounts.

    Invalidation is targeted: vendor:id:<id>, vendor:email:<email> (old and
    new) and vendor:all. Deleting a vendor also removes its products,
    discounts, referrals and blog posts, so those namespaces and the
    vendor's dashboard metrics are dropped as well.
    """

    def __init__(
        self,
        vendor_repo: Any,
        cache: EntityCache,
        dashboard: DashboardService | None = None,
    ) -> None:
        self._vendor_repo = vendor_repo
        self._cache = cache
        self._dashboard = dashboard

    async def _invalidate(self, vendor_id: str, *emails: str) -> None:
        await self._cache.invalidate_keys(
            keys.entity_key(CACHE_PREFIX_VENDOR, vendor_id),
            keys.all_key(CACHE_PREFIX_VENDOR),
            *(keys.vendor_email_key(e) for e in emails),
        )

    async def create_vendor(
        self,
        name: str,
        email: str,
        store_name: str,
        phone: str | None = None,
        password_hash: str | None = None,
        is_verified: bool = False,
    ) -> VendorResult:
        """Register a vendor.

        Raises:
            ValidationException: Blank name/store name or malformed email.
            AlreadyExistsException: Email or phone already registered.
        """
        name = clean_name(name)
        store_name = clean_name(store_name, "store_name")
        email = _normalize_email(email)
        if await self._vendor_repo.email_exists(email):
            raise AlreadyExistsException("vendor", "email", email)
        if phone and await self._vendor_repo.phone_exists(phone):
            raise AlreadyExistsException("vendor", "phone", phone)
        created = await self._vendor_repo.create_from(
            name=name,
            email=email,
            store_name=store_name,
            phone=phone,
            password_hash=password_hash,
            is_verified=is_verified,
        )
        await self._vendor_repo.commit()
        await self._invalidate(created.id, created.email)
        return created

    async def list_vendors(self) -> list[VendorResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_VENDOR), _VENDOR_LIST, self._vendor_repo.list_all
        )

    async def get_vendor(self, vendor_id: str) -> VendorResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_VENDOR, vendor_id),
            _VENDOR,
            lambda: self._vendor_repo.get(vendor_id),
        )
        if result is None:
            raise ResourceNotFoundException("vendor", vendor_id)
        return result

    async def get_vendor_by_email(self, email: str) -> VendorResult:
        email = email.strip().lower()
        result = await self._cache.fetch(
            keys.vendor_email_key(email),
            _VENDOR,
            lambda: self._vendor_repo.get_by_email(email),
        )
        if result is None:
            raise ResourceNotFoundException("vendor", email)
        return result

    async def update_vendor(self, vendor_id: str, **changes: Any) -> VendorResult:
        """Update vendor profile fields; None values are ignored.

        Raises:
            ResourceNotFoundException: If the vendor does not exist.
            AlreadyExistsException: If the new email or phone is taken.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Cannot update {', '.join(sorted(unknown))}", "body")
        current = await self._vendor_repo.get(vendor_id)
        if current is None:
            raise ResourceNotFoundException("vendor", vendor_id)
        if changes.get("name") is not None:
            changes["name"] = clean_name(changes["name"])
        if changes.get("store_name") is not None:
            changes["store_name"] = clean_name(changes["store_name"], "store_name")
        if changes.get("email") is not None:
            changes["email"] = _normalize_email(changes["email"])
            if await self._vendor_repo.email_exists(changes["email"], exclude_id=vendor_id):
                raise AlreadyExistsException("vendor", "email", changes["email"])
        if changes.get("phone") and await self._vendor_repo.phone_exists(
            changes["phone"], exclude_id=vendor_id
        ):
            raise AlreadyExistsException("vendor", "phone", changes["phone"])
        values = changed_fields(current, changes)
        if not values:
            return current
        updated = await self._vendor_repo.update_fields(vendor_id, values)
        await self._vendor_repo.commit()
        await self._invalidate(vendor_id, current.email, updated.email)
        return updated

    async def delete_vendor(self, vendor_id: str) -> VendorResult:
        """Delete a vendor together with its products, discounts, referrals and blog posts."""
        deleted = await self._vendor_repo.delete_by_id(vendor_id)
        if deleted is None:
            raise ResourceNotFoundException("vendor", vendor_id)
        await self._vendor_repo.commit()
        await self._invalidate(vendor_id, deleted.email)
        for namespace in (
            CACHE_PREFIX_PRODUCTS,
            CACHE_PREFIX_DISCOUNTS,
            CACHE_PREFIX_REFERRALS,
            CACHE_PREFIX_BLOG,
        ):
            await self._cache.invalidate_namespace(namespace, cascade=False)
        if self._dashboard is not None:
            await self._dashboard.invalidate_all_dashboard_caches(vendor_id)
        return deleted
