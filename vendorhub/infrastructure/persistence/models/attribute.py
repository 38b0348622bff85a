"""Attribute ORM model (product characteristics such as Color or Size)."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import EntityModel


class Attribute(EntityModel, Base):
    """Catalog attribute. Table: attribute. Names are unique."""

    __tablename__ = "attribute"

    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False, index=True)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
