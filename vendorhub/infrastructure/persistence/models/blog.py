"""Blog post ORM model."""

from datetime import date

from sqlalchemy import Date, ForeignKey, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import EntityModel


class Blog(EntityModel, Base):
    """Blog post, owned by a vendor or by the marketplace (vendor_id NULL). Table: blog."""

    __tablename__ = "blog"

    vendor_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("vendor.id", ondelete="CASCADE"), nullable=True, index=True
    )
    heading: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(120), nullable=False, index=True)
    author: Mapped[str] = mapped_column(String(120), nullable=False)
    published_on: Mapped[date] = mapped_column(Date, nullable=False)
    image_url: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_keywords: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
