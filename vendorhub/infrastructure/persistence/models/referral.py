"""Referral ORM model."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import EntityModel
from vendorhub.infrastructure.persistence.models.user import User


class Referral(EntityModel, Base):
    """Vendor referral program. Table: referral. Codes are unique and upper-cased."""

    __tablename__ = "referral"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    code: Mapped[str] = mapped_column(String(64), unique=True, nullable=False, index=True)
    reward_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    vendor_id: Mapped[str] = mapped_column(
        String, ForeignKey("vendor.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_by: Mapped[str | None] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="SET NULL"), nullable=True
    )
    expiry_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    max_uses: Mapped[int | None] = mapped_column(Integer, nullable=True)
    used_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    creator: Mapped[User | None] = relationship(lazy="selectin")
