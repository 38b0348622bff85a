"""Referral API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field


class ReferralCreate(BaseModel):
    """Request body for creating a referral program."""

    vendor_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=120)
    code: str = Field(..., min_length=1, max_length=64)
    reward_points: int = Field(..., ge=0)
    expiry_date: datetime
    max_uses: int | None = Field(default=None, ge=1)
    description: str | None = None
    created_by: str | None = None
    is_active: bool = True


class ReferralUpdate(BaseModel):
    """Request body for updating a referral (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    code: str | None = Field(default=None, min_length=1, max_length=64)
    reward_points: int | None = Field(default=None, ge=0)
    expiry_date: datetime | None = None
    max_uses: int | None = Field(default=None, ge=1)
    description: str | None = None
    is_active: bool | None = None


class ReferralApply(BaseModel):
    """Request body for redeeming a referral code."""

    code: str = Field(..., min_length=1, max_length=64)
    user_id: str = Field(..., min_length=1)
