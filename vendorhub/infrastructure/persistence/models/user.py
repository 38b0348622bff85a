"""User ORM model (storefront customer)."""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import EntityModel


class User(EntityModel, Base):
    """Customer account. Table: app_user. Email is unique and stored lower-cased."""

    __tablename__ = "app_user"

    name: Mapped[str] = mapped_column(String(120), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(32), unique=True, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reward_points: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    referral_code_used: Mapped[str | None] = mapped_column(String(64), nullable=True)
