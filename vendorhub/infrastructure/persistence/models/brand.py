"""Brand ORM model."""

from sqlalchemy import Boolean, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import EntityModel


class Brand(EntityModel, Base):
    """Product brand with SEO metadata. Table: brand."""

    __tablename__ = "brand"

    name: Mapped[str] = mapped_column(String(120), unique=True, nullable=False, index=True)
    meta_title: Mapped[str | None] = mapped_column(String(255), nullable=True)
    meta_keywords: Mapped[str | None] = mapped_column(String(500), nullable=True)
    meta_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
