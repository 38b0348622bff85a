"""User application service: long-lived cached profiles with coarse invalidation."""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.account import UserResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.services._helpers import changed_fields, clean_name
from vendorhub.core.constants import CACHE_PREFIX_USERS
from vendorhub.domain.exceptions import (
    AlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

_USER = TypeAdapter(UserResult)
_USER_LIST = TypeAdapter(list[UserResult])
_USER_PAGE = TypeAdapter(Page[UserResult])

_UPDATABLE_FIELDS = frozenset({"name", "email", "phone", "password_hash"})
# Fields embedded as creator refs in discount and referral payloads.
_IDENTITY_FIELDS = frozenset({"name", "email"})


def _normalize_email(email: str | None) -> str:
    normalized = (email or "").strip().lower()
    if "@" not in normalized:
        raise ValidationException("A valid email is required", "email")
    return normalized


class UserService:
    """Customer accounts. Password hashes never reach the cache."""

    def __init__(self, user_repo: Any, cache: EntityCache) -> None:
        self._user_repo = user_repo
        self._cache = cache

    async def create_user(
        self,
        name: str,
        email: str,
        phone: str | None = None,
        password_hash: str | None = None,
    ) -> UserResult:
        """Register a user.

        Raises:
            AlreadyExistsException: Email or phone already registered.
        """
        name = clean_name(name)
        email = _normalize_email(email)
        if await self._user_repo.email_exists(email):
            raise AlreadyExistsException("user", "email", email)
        if phone and await self._user_repo.phone_exists(phone):
            raise AlreadyExistsException("user", "phone", phone)
        created = await self._user_repo.create_from(
            name=name, email=email, phone=phone, password_hash=password_hash
        )
        await self._user_repo.commit()
        await self._cache.invalidate(cascade=False)
        return created

    async def list_users(self, params: PageParams) -> Page[UserResult]:
        params = params.restricted_to(self._user_repo.sort_fields)
        return await self._cache.fetch(
            keys.paginated_key(CACHE_PREFIX_USERS, params),
            _USER_PAGE,
            lambda: self._user_repo.list_page(params),
        )

    async def list_all_users(self) -> list[UserResult]:
        return await self._cache.fetch(
            keys.all_key(CACHE_PREFIX_USERS), _USER_LIST, self._user_repo.list_all
        )

    async def get_user(self, user_id: str) -> UserResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_USERS, user_id),
            _USER,
            lambda: self._user_repo.get(user_id),
        )
        if result is None:
            raise ResourceNotFoundException("user", user_id)
        return result

    async def get_user_by_email(self, email: str) -> UserResult:
        email = email.strip().lower()
        result = await self._cache.fetch(
            keys.user_email_key(email),
            _USER,
            lambda: self._user_repo.get_by_email(email),
        )
        if result is None:
            raise ResourceNotFoundException("user", email)
        return result

    async def update_user(self, user_id: str, **changes: Any) -> UserResult:
        """Update profile fields; None values are ignored.

        Discount and referral caches are dropped only when name or email changes.

        Raises:
            ResourceNotFoundException: If the user does not exist.
            AlreadyExistsException: If the new email or phone is taken.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Cannot update {', '.join(sorted(unknown))}", "body")
        current = await self._user_repo.get(user_id)
        if current is None:
            raise ResourceNotFoundException("user", user_id)
        if changes.get("name") is not None:
            changes["name"] = clean_name(changes["name"])
        if changes.get("email") is not None:
            changes["email"] = _normalize_email(changes["email"])
            if await self._user_repo.email_exists(changes["email"], exclude_id=user_id):
                raise AlreadyExistsException("user", "email", changes["email"])
        if changes.get("phone") and await self._user_repo.phone_exists(
            changes["phone"], exclude_id=user_id
        ):
            raise AlreadyExistsException("user", "phone", changes["phone"])
        values = changed_fields(current, changes)
        if not values:
            return current
        updated = await self._user_repo.update_fields(user_id, values)
        await self._user_repo.commit()
        await self._cache.invalidate(cascade=bool(_IDENTITY_FIELDS.intersection(values)))
        return updated

    async def delete_user(self, user_id: str) -> UserResult:
        """Delete a user without orders.

        Raises:
            ResourceNotFoundException: If the user does not exist.
            ValidationException: If the user has placed orders.
        """
        if await self._user_repo.has_orders(user_id):
            raise ValidationException("Users with orders cannot be deleted", "user_id")
        deleted = await self._user_repo.delete_by_id(user_id)
        if deleted is None:
            raise ResourceNotFoundException("user", user_id)
        await self._user_repo.commit()
        await self._cache.invalidate()
        return deleted
