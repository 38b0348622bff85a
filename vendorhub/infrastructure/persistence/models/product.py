"""Product ORM model."""

from sqlalchemy import Boolean, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.brand import Brand
from vendorhub.infrastructure.persistence.models.category import (
    ParentCategory,
    PrimaryCategory,
    SecondaryCategory,
)
from vendorhub.infrastructure.persistence.models.mixins import EntityModel


class Product(EntityModel, Base):
    """Vendor product with stock level. Table: product."""

    __tablename__ = "product"

    vendor_id: Mapped[str] = mapped_column(
        String, ForeignKey("vendor.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    mrp: Mapped[float] = mapped_column(Float, nullable=False)
    net_price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    brand_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("brand.id", ondelete="SET NULL"), nullable=True, index=True
    )
    parent_category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("parent_category.id", ondelete="SET NULL"), nullable=True
    )
    primary_category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("primary_category.id", ondelete="SET NULL"), nullable=True
    )
    secondary_category_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("secondary_category.id", ondelete="SET NULL"), nullable=True
    )

    brand: Mapped[Brand | None] = relationship(lazy="selectin")
    parent_category: Mapped[ParentCategory | None] = relationship(lazy="selectin")
    primary_category: Mapped[PrimaryCategory | None] = relationship(lazy="selectin")
    secondary_category: Mapped[SecondaryCategory | None] = relationship(lazy="selectin")
