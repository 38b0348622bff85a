"""DTOs for discounts."""

from dataclasses import dataclass
from datetime import datetime

from vendorhub.application.dtos.account import UserRef
from vendorhub.application.dtos.catalog import NamedRef
from vendorhub.domain.enums import DiscountTargetType, DiscountType
from vendorhub.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class DiscountResult:
    """Discount read-model. vendor_id is None for marketplace-wide discounts."""

    id: str
    name: str
    discount_type: DiscountType
    discount_value: float
    target_type: DiscountTargetType
    start_date: datetime
    end_date: datetime
    is_active: bool
    description: str | None = None
    vendor_id: str | None = None
    parent_category: NamedRef | None = None
    created_by: UserRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_live(self, now: datetime) -> bool:
        """True while active and now lies inside [start_date, end_date]."""
        return (
            self.is_active
            and ensure_utc(self.start_date) <= now <= ensure_utc(self.end_date)
        )
