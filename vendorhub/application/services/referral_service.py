"""Referral application service: vendor referral programs and code redemption."""

from __future__ import annotations

import calendar
from collections import defaultdict
from collections.abc import Callable
from datetime import datetime
from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.referral import (
    ReferralApplication,
    ReferralResult,
    ReferralStats,
)
from vendorhub.application.services._helpers import clean_name
from vendorhub.core.constants import CACHE_PREFIX_REFERRALS, CACHE_PREFIX_USERS
from vendorhub.domain.exceptions import (
    AlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys
from vendorhub.shared.utils.datetime import ensure_utc, utc_now

_REFERRAL = TypeAdapter(ReferralResult)
_REFERRAL_LIST = TypeAdapter(list[ReferralResult])
_REFERRAL_STATS = TypeAdapter(ReferralStats)

_UPDATABLE_FIELDS = frozenset(
    {"name", "description", "code", "reward_points", "expiry_date", "max_uses", "is_active"}
)


def _normalize_code(code: str | None) -> str:
    normalized = (code or "").strip().upper()
    if not normalized:
        raise ValidationException("Referral code is required", "code")
    return normalized


def _validate_limits(reward_points: int, max_uses: int | None) -> None:
    if reward_points < 0:
        raise ValidationException("Reward points must not be negative", "reward_points")
    if max_uses is not None and max_uses < 1:
        raise ValidationException("Max uses must be at least 1", "max_uses")


def referral_stats(referrals: list[ReferralResult], now: datetime) -> ReferralStats:
    """Aggregate referral metrics; monthly usage is keyed by creation month."""
    total_usage = sum(r.used_count for r in referrals)
    monthly: dict[str, int] = defaultdict(int)
    for r in referrals:
        created = ensure_utc(r.created_at)
        if created is not None:
            monthly[f"{calendar.month_name[created.month]} {created.year}"] += r.used_count
    return ReferralStats(
        total_referrals=len(referrals),
        active_referrals=sum(
            1 for r in referrals if r.is_active and ensure_utc(r.expiry_date) > now
        ),
        reward_points_issued=sum(r.reward_points * r.used_count for r in referrals),
        total_usage=total_usage,
        conversion_rate=(
            round(total_usage / len(referrals) * 100, 2) if total_usage and referrals else 0.0
        ),
        monthly_usage=dict(monthly),
    )


class ReferralService:
    """Referral programs.

    Invalidation is targeted: referrals:id:<id>, referrals:code:<code> and
    the owning vendor's referrals:vendor:<id>:* keys. Applying a code also
    drops the users namespace, since reward points are part of the user
    payload.
    """

    def __init__(
        self,
        referral_repo: Any,
        user_repo: Any,
        cache: EntityCache,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._referral_repo = referral_repo
        self._user_repo = user_repo
        self._cache = cache
        self._clock = clock

    async def _invalidate(self, referral: ReferralResult, *codes: str) -> None:
        await self._cache.invalidate_keys(
            keys.entity_key(CACHE_PREFIX_REFERRALS, referral.id),
            keys.referral_code_key(referral.code),
            *(keys.referral_code_key(c) for c in codes),
        )
        await self._cache.invalidate_pattern(keys.referral_vendor_pattern(referral.vendor_id))

    async def create_referral(
        self,
        vendor_id: str,
        name: str,
        code: str,
        reward_points: int,
        expiry_date: datetime,
        max_uses: int | None = None,
        description: str | None = None,
        created_by: str | None = None,
        is_active: bool = True,
    ) -> ReferralResult:
        """Create a referral program; the code is stored upper-cased.

        Raises:
            ValidationException: Bad limits or an expiry date in the past.
            AlreadyExistsException: Code already in use.
            ResourceNotFoundException: Unknown vendor or creator.
        """
        name = clean_name(name)
        code = _normalize_code(code)
        _validate_limits(reward_points, max_uses)
        if ensure_utc(expiry_date) <= self._clock():
            raise ValidationException("Expiry date must be in the future", "expiry_date")
        if await self._referral_repo.code_exists(code):
            raise AlreadyExistsException("referral", "code", code)
        if not await self._referral_repo.vendor_exists(vendor_id):
            raise ResourceNotFoundException("vendor", vendor_id)
        if not await self._referral_repo.user_exists(created_by):
            raise ResourceNotFoundException("user", created_by or "")
        created = await self._referral_repo.create_from(
            vendor_id=vendor_id,
            name=name,
            code=code,
            reward_points=reward_points,
            expiry_date=ensure_utc(expiry_date),
            max_uses=max_uses,
            description=description,
            created_by=created_by,
            is_active=is_active,
        )
        await self._referral_repo.commit()
        await self._invalidate(created)
        return created

    async def get_referral(self, referral_id: str) -> ReferralResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_REFERRALS, referral_id),
            _REFERRAL,
            lambda: self._referral_repo.get(referral_id),
        )
        if result is None:
            raise ResourceNotFoundException("referral", referral_id)
        return result

    async def get_referral_by_code(self, code: str) -> ReferralResult:
        """Look up a redeemable referral by code.

        The cached entry is checked against the clock on every read, so a code
        that expired or was used up while cached is still refused.

        Raises:
            ResourceNotFoundException: Unknown, inactive, expired or exhausted code.
        """
        code = _normalize_code(code)
        result = await self._cache.fetch(
            keys.referral_code_key(code),
            _REFERRAL,
            lambda: self._referral_repo.get_by_code(code),
        )
        if result is None or not result.is_redeemable(self._clock()):
            raise ResourceNotFoundException("referral", code)
        return result

    async def list_vendor_referrals(self, vendor_id: str) -> list[ReferralResult]:
        return await self._cache.fetch(
            keys.referral_vendor_list_key(vendor_id),
            _REFERRAL_LIST,
            lambda: self._referral_repo.list_for_vendor(vendor_id),
        )

    async def get_referral_stats(self, vendor_id: str) -> ReferralStats:
        async def load() -> ReferralStats:
            referrals = await self._referral_repo.list_for_vendor(vendor_id)
            return referral_stats(referrals, self._clock())

        return await self._cache.fetch(
            keys.referral_vendor_stats_key(vendor_id), _REFERRAL_STATS, load
        )

    async def update_referral(self, referral_id: str, **changes: Any) -> ReferralResult:
        """Update referral fields; None values are ignored.

        Raises:
            ResourceNotFoundException: If the referral does not exist.
            AlreadyExistsException: If the new code is taken.
            ValidationException: Unknown field or bad limits.
        """
        unknown = set(changes) - _UPDATABLE_FIELDS
        if unknown:
            raise ValidationException(f"Cannot update {', '.join(sorted(unknown))}", "body")
        current = await self._referral_repo.get(referral_id)
        if current is None:
            raise ResourceNotFoundException("referral", referral_id)
        values = {k: v for k, v in changes.items() if v is not None}
        if not values:
            return current
        if "name" in values:
            values["name"] = clean_name(values["name"])
        if "code" in values:
            values["code"] = _normalize_code(values["code"])
            if await self._referral_repo.code_exists(values["code"], exclude_id=referral_id):
                raise AlreadyExistsException("referral", "code", values["code"])
        if "expiry_date" in values:
            values["expiry_date"] = ensure_utc(values["expiry_date"])
        _validate_limits(
            values.get("reward_points", current.reward_points),
            values.get("max_uses", current.max_uses),
        )
        updated = await self._referral_repo.update_fields(referral_id, values)
        await self._referral_repo.commit()
        await self._invalidate(updated, current.code)
        return updated

    async def delete_referral(self, referral_id: str) -> ReferralResult:
        deleted = await self._referral_repo.delete_by_id(referral_id)
        if deleted is None:
            raise ResourceNotFoundException("referral", referral_id)
        await self._referral_repo.commit()
        await self._invalidate(deleted)
        return deleted

    async def apply_referral(self, code: str, user_id: str) -> ReferralApplication:
        """Redeem a referral code for a user: one more use, reward points to the user.

        Decisions are made on database state, not on cached entries.

        Raises:
            ValidationException: Code inactive, expired, used up, or user already referred.
            ResourceNotFoundException: Unknown user.
        """
        code = _normalize_code(code)
        referral = await self._referral_repo.get_by_code(code)
        if referral is None or not referral.is_redeemable(self._clock()):
            raise ValidationException("Referral code is invalid or expired", "code")
        user = await self._user_repo.get(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        if user.referral_code_used:
            raise ValidationException("User has already used a referral code", "user_id")
        updated = await self._referral_repo.increment_usage(referral.id)
        rewarded = await self._user_repo.add_reward_points(
            user_id, referral.reward_points, referral.code
        )
        await self._referral_repo.commit()
        await self._invalidate(updated)
        await self._cache.invalidate_namespace(CACHE_PREFIX_USERS, cascade=False)
        return ReferralApplication(
            referral_id=referral.id,
            user_id=user_id,
            reward_points=referral.reward_points,
            total_reward_points=rewarded.reward_points,
        )
