"""Order ORM models: order header and order lines."""

from sqlalchemy import CheckConstraint, Float, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from vendorhub.domain.enums import OrderStatus
from vendorhub.infrastructure.persistence.database import Base
from vendorhub.infrastructure.persistence.models.mixins import CuidMixin, EntityModel


class Order(EntityModel, Base):
    """Customer order. Table: customer_order. Status: see OrderStatus."""

    __tablename__ = "customer_order"

    order_number: Mapped[str] = mapped_column(String(32), unique=True, nullable=False, index=True)
    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(
        String(16), nullable=False, default=OrderStatus.CONFIRMED.value, index=True
    )
    total: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    items: Mapped[list["OrderItem"]] = relationship(
        back_populates="order",
        lazy="selectin",
        cascade="all, delete-orphan",
        order_by="OrderItem.product_name",
    )

    __table_args__ = (
        CheckConstraint(
            "status IN ({})".format(", ".join(f"'{v}'" for v in OrderStatus.values())),
            name="order_status_check",
        ),
    )


class OrderItem(CuidMixin, Base):
    """Order line with product name, price and vendor snapshotted. Table: order_item."""

    __tablename__ = "order_item"

    order_id: Mapped[str] = mapped_column(
        String, ForeignKey("customer_order.id", ondelete="CASCADE"), nullable=False, index=True
    )
    product_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    vendor_id: Mapped[str] = mapped_column(String, nullable=False, index=True)
    product_name: Mapped[str] = mapped_column(String(255), nullable=False)
    price: Mapped[float] = mapped_column(Float, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    order: Mapped[Order] = relationship(back_populates="items")
