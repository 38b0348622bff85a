"""DTOs for vendors and users. Password hashes never leave the repository."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class VendorResult:
    """Vendor read-model."""

    id: str
    name: str
    email: str
    store_name: str
    is_verified: bool
    phone: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserResult:
    """Customer read-model."""

    id: str
    name: str
    email: str
    reward_points: int
    phone: str | None = None
    referral_code_used: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class UserRef:
    """Creator reference embedded in discounts and referrals."""

    id: str
    name: str
    email: str
