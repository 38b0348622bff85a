"""Referral repository. Returns application DTOs."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.referral import ReferralResult
from vendorhub.infrastructure.persistence.models import Referral, User, Vendor
from vendorhub.infrastructure.persistence.repositories.base import BaseRepository
from vendorhub.infrastructure.persistence.repositories.mappers import referral_to_result


class ReferralRepository(BaseRepository[Referral, ReferralResult]):
    """Referral persistence."""

    resource_type = "referral"
    unique_field = "code"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Referral)

    def _to_result(self, obj: Referral) -> ReferralResult:
        return referral_to_result(obj)

    async def vendor_exists(self, vendor_id: str) -> bool:
        return await self._reference_exists(Vendor, vendor_id)

    async def user_exists(self, user_id: str | None) -> bool:
        return await self._reference_exists(User, user_id)

    async def get_by_code(self, code: str) -> ReferralResult | None:
        result = await self.db.execute(select(Referral).where(Referral.code == code.upper()))
        referral = result.scalar_one_or_none()
        return self._to_result(referral) if referral else None

    async def code_exists(self, code: str, exclude_id: str | None = None) -> bool:
        criteria = [Referral.code == code.upper()]
        if exclude_id is not None:
            criteria.append(Referral.id != exclude_id)
        return await self.exists(*criteria)

    async def list_for_vendor(self, vendor_id: str) -> list[ReferralResult]:
        return await self.list_results(
            select(Referral)
            .where(Referral.vendor_id == vendor_id)
            .order_by(Referral.created_at.desc(), Referral.id)
        )

    async def increment_usage(self, referral_id: str) -> ReferralResult | None:
        """Add one use to the referral."""
        referral = await self.get_entity(referral_id)
        if referral is None:
            return None
        referral.used_count = (referral.used_count or 0) + 1
        await self.db.flush()
        return self._to_result(await self._reload(referral_id))
