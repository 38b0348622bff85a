"""DTOs for orders and order lines."""

from dataclasses import dataclass, field
from datetime import datetime

from vendorhub.domain.enums import OrderStatus


@dataclass(frozen=True)
class OrderItemInput:
    """One requested order line."""

    product_id: str
    quantity: int


@dataclass(frozen=True)
class OrderItemResult:
    """Order line; name, price and vendor are snapshotted at order time."""

    product_id: str
    vendor_id: str
    product_name: str
    price: float
    quantity: int


@dataclass(frozen=True)
class OrderResult:
    """Order read-model."""

    id: str
    order_number: str
    user_id: str
    status: OrderStatus
    total: float
    items: list[OrderItemResult] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def vendor_ids(self) -> list[str]:
        """Distinct vendors with lines in this order, sorted."""
        return sorted({item.vendor_id for item in self.items})
