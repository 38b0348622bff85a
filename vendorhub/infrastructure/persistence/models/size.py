"""Size ORM model."""

from sqlalchemy import Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import EntityModel


class Size(EntityModel, Base):
    """Product size option (label shown to shoppers, value stored on variants). Table: size."""

    __tablename__ = "size"

    label: Mapped[str] = mapped_column(String(60), unique=True, nullable=False, index=True)
    value: Mapped[str] = mapped_column(String(60), nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
