"""Category ORM models: three-level taxonomy (parent > primary > secondary).

Secondary categories carry the attributes that products in them expose.
Relationships load with selectin so async reads never lazy-load.
"""

from sqlalchemy import Boolean, Column, ForeignKey, String, Table, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.attribute import Attribute
from vendorhub.infrastructure.persistence.models.mixins import EntityModel

secondary_category_attribute = Table(
    "secondary_category_attribute",
    Base.metadata,
    Column(
        "secondary_category_id",
        ForeignKey("secondary_category.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "attribute_id",
        ForeignKey("attribute.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class ParentCategory(EntityModel, Base):
    """Top-level category. Table: parent_category."""

    __tablename__ = "parent_category"

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)


class PrimaryCategory(EntityModel, Base):
    """Second-level category under a parent. Table: primary_category."""

    __tablename__ = "primary_category"

    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    parent_category_id: Mapped[str] = mapped_column(
        String, ForeignKey("parent_category.id", ondelete="CASCADE"), nullable=False, index=True
    )

    parent_category: Mapped[ParentCategory] = relationship(lazy="selectin")

    __table_args__ = (
        UniqueConstraint("parent_category_id", "name", name="uq_primary_category_parent_name"),
    )


class SecondaryCategory(EntityModel, Base):
    """Leaf category with its attributes. Table: secondary_category."""

    __tablename__ = "secondary_category"

    name: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    parent_category_id: Mapped[str] = mapped_column(
        String, ForeignKey("parent_category.id", ondelete="CASCADE"), nullable=False, index=True
    )
    primary_category_id: Mapped[str] = mapped_column(
        String, ForeignKey("primary_category.id", ondelete="CASCADE"), nullable=False, index=True
    )

    parent_category: Mapped[ParentCategory] = relationship(lazy="selectin")
    primary_category: Mapped[PrimaryCategory] = relationship(lazy="selectin")
    attributes: Mapped[list[Attribute]] = relationship(
        secondary=secondary_category_attribute, lazy="selectin", order_by=Attribute.name
    )

    __table_args__ = (
        UniqueConstraint("primary_category_id", "name", name="uq_secondary_category_primary_name"),
    )
