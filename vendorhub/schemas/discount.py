"""Discount API schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from vendorhub.domain.enums import DiscountTargetType, DiscountType


class DiscountCreate(BaseModel):
    """Request body for creating a discount."""

    name: str = Field(..., min_length=1, max_length=120)
    discount_type: DiscountType
    discount_value: float = Field(..., ge=0)
    start_date: datetime
    end_date: datetime
    target_type: DiscountTargetType = DiscountTargetType.CATEGORY
    parent_category_id: str | None = None
    vendor_id: str | None = None
    created_by: str | None = None
    description: str | None = None
    is_active: bool = True


class DiscountUpdate(BaseModel):
    """Request body for updating a discount (partial)."""

    name: str | None = Field(default=None, min_length=1, max_length=120)
    discount_type: DiscountType | None = None
    discount_value: float | None = Field(default=None, ge=0)
    start_date: datetime | None = None
    end_date: datetime | None = None
    target_type: DiscountTargetType | None = None
    parent_category_id: str | None = None
    vendor_id: str | None = None
    description: str | None = None
    is_active: bool | None = None
