"""DTOs for referrals."""

from dataclasses import dataclass, field
from datetime import datetime

from vendorhub.application.dtos.account import UserRef
from vendorhub.shared.utils.datetime import ensure_utc


@dataclass(frozen=True)
class ReferralResult:
    """Referral program read-model."""

    id: str
    name: str
    code: str
    reward_points: int
    vendor_id: str
    expiry_date: datetime
    used_count: int
    is_active: bool
    max_uses: int | None = None
    description: str | None = None
    created_by: UserRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_redeemable(self, now: datetime) -> bool:
        """True when active, not expired and below max_uses."""
        if not self.is_active or ensure_utc(self.expiry_date) <= now:
            return False
        return self.max_uses is None or self.used_count < self.max_uses


@dataclass(frozen=True)
class ReferralStats:
    """Aggregate referral metrics for one vendor."""

    total_referrals: int
    active_referrals: int
    reward_points_issued: int
    total_usage: int
    conversion_rate: float
    monthly_usage: dict[str, int] = field(default_factory=dict)


@dataclass(frozen=True)
class ReferralApplication:
    """Outcome of applying a referral code for a user."""

    referral_id: str
    user_id: str
    reward_points: int
    total_reward_points: int
