"""Vendor and user repositories. Return application DTOs (password hashes stripped)."""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.account import UserResult, VendorResult
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.infrastructure.persistence.models import Order, User, Vendor
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import (
    user_to_result,
    vendor_to_result,
)

USER_SORT_FIELDS = frozenset(
    {"name", "email", "reward_points", "created_at", "updated_at"}
)


class VendorRepository(BaseRepository[Vendor, VendorResult]):
    """Vendor persistence."""

    resource_type = "vendor"
    unique_field = "email"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Vendor)

    def _to_result(self, obj: Vendor) -> VendorResult:
        return vendor_to_result(obj)

    async def get_by_email(self, email: str) -> VendorResult | None:
        result = await self.db.execute(select(Vendor).where(Vendor.email == email.lower()))
        vendor = result.scalar_one_or_none()
        return self._to_result(vendor) if vendor else None

    async def email_exists(self, email: str, exclude_id: str | None = None) -> bool:
        criteria = [Vendor.email == email.lower()]
        if exclude_id is not None:
            criteria.append(Vendor.id != exclude_id)
        return await self.exists(*criteria)

    async def phone_exists(self, phone: str, exclude_id: str | None = None) -> bool:
        criteria = [Vendor.phone == phone]
        if exclude_id is not None:
            criteria.append(Vendor.id != exclude_id)
        return await self.exists(*criteria)

    async def list_all(self) -> list[VendorResult]:
        return await self.list_results(select(Vendor).order_by(Vendor.created_at.desc(), Vendor.id))


class UserRepository(BaseRepository[User, UserResult]):
    """User persistence."""

    resource_type = "user"
    unique_field = "email"
    sort_fields = USER_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, User)

    def _to_result(self, obj: User) -> UserResult:
        return user_to_result(obj)

    async def get_by_email(self, email: str) -> UserResult | None:
        result = await self.db.execute(select(User).where(User.email == email.lower()))
        user = result.scalar_one_or_none()
        return self._to_result(user) if user else None

    async def email_exists(self, email: str, exclude_id: str | None = None) -> bool:
        criteria = [User.email == email.lower()]
        if exclude_id is not None:
            criteria.append(User.id != exclude_id)
        return await self.exists(*criteria)

    async def phone_exists(self, phone: str, exclude_id: str | None = None) -> bool:
        criteria = [User.phone == phone]
        if exclude_id is not None:
            criteria.append(User.id != exclude_id)
        return await self.exists(*criteria)

    async def has_orders(self, user_id: str) -> bool:
        stmt = select(func.count()).select_from(Order).where(Order.user_id == user_id)
        return bool(await self.db.scalar(stmt))

    async def list_all(self) -> list[UserResult]:
        return await self.list_results(select(User).order_by(User.created_at.desc(), User.id))

    async def list_page(self, params: PageParams) -> Page[UserResult]:
        stmt = select(User)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    User.name.ilike(pattern, escape="\\"),
                    User.email.ilike(pattern, escape="\\"),
                    User.phone.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": User.name,
                "email": User.email,
                "reward_points": User.reward_points,
                "created_at": User.created_at,
                "updated_at": User.updated_at,
            },
        )

    async def add_reward_points(
        self, user_id: str, points: int, referral_code: str
    ) -> UserResult | None:
        """Credit reward points and record the referral code used."""
        user = await self.get_entity(user_id)
        if user is None:
            return None
        user.reward_points = (user.reward_points or 0) + points
        user.referral_code_used = referral_code
        await self.db.flush()
        return self._to_result(await self._reload(user_id))
