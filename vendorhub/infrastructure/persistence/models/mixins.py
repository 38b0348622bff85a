"""SQLAlchemy mixins for common model patterns.

Provides: CuidMixin, TimestampMixin, and the combined EntityModel.
"""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, declared_attr, mapped_column

from vendorhub.shared.utils.datetime import utc_now
from vendorhub.shared.utils.generators import generate_cuid


class CuidMixin:
    """Mixin for models using CUID as primary key. Provides id with default generate_cuid."""

    @declared_attr
    def id(cls) -> Mapped[str]:
        return mapped_column(String, primary_key=True, default=generate_cuid)


class TimestampMixin:
    """Mixin for created_at and updated_at (timezone-aware, set from the app clock).

    Python-side defaults keep sub-second ordering on every backend.
    """

    @declared_attr
    def created_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True), default=utc_now, nullable=False, index=True
        )

    @declared_attr
    def updated_at(cls) -> Mapped[datetime]:
        return mapped_column(
            DateTime(timezone=True),
            default=utc_now,
            onupdate=utc_now,
            nullable=False,
        )


class EntityModel(CuidMixin, TimestampMixin):
    """Combined mixin: CUID + created_at/updated_at. Common for VendorHub models."""

    __abstract__ = True
