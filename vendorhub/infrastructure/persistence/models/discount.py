"""Discount ORM model."""

from datetime import datetime

from sqlalchemy import Boolean, CheckConstraint, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.domain.enums import DiscountTargetType, DiscountType
from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.category import ParentCategory
from vendorhub.infrastructure.persistence.models.mixins import EntityModel
from vendorhub.infrastructure.persistence.models.user import User


class Discount(EntityModel, Base):
    """Category discount, marketplace-wide (vendor_id NULL) or vendor-owned. Table: discount."""

    __tablename__ = "discount"

    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    discount_type: Mapped[str] = mapped_column(
        String(16), nullable=False, default=DiscountType.PERCENTAGE.value
    )
    discount_value: Mapped[float] = mapped_column(Float, nullable=False)
    target_type: Mapped[str] = mapped_column(
        String(16), nullable=False, default=DiscountTargetType.CATEGORY.value
    )
    parent_category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("parent_category.id", ondelete="SET NULL"), nullable=True
    )
    vendor_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("vendor.id", ondelete="CASCADE"), nullable=True, index=True
    )
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    parent_category: Mapped[ParentCategory | None] = relationship(lazy="selectin")
    creator: Mapped[User | None] = relationship(lazy="selectin")

    __table_args__ = (
        CheckConstraint(
            "discount_type IN ({})".format(
                ", ".join(f"'{t.value}'" for t in DiscountType)
            ),
            name="discount_type_check",
        ),
    )
