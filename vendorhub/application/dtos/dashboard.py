"""DTOs for vendor dashboard metrics."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TopProduct:
    """Best-selling product line for a vendor."""

    product_id: str
    name: str
    quantity: int
    revenue: float


@dataclass(frozen=True)
class SalesSummary:
    """Revenue metrics for one vendor, optionally narrowed to one month."""

    vendor_id: str
    total_revenue: float
    total_orders: int
    average_order_value: float
    revenue_change_percent: float
    month: int | None = None
    year: int | None = None
    monthly_revenue: dict[str, float] = field(default_factory=dict)
    yearly_revenue: dict[int, float] = field(default_factory=dict)
    top_selling_products: list[TopProduct] = field(default_factory=list)


@dataclass(frozen=True)
class OrderStatusBreakdown:
    """Order counts per status for one vendor; every status is present."""

    vendor_id: str
    counts: dict[str, int]
    total: int
    month: int | None = None
    year: int | None = None


@dataclass(frozen=True)
class LowStockProduct:
    """Product whose quantity is under the low-stock threshold."""

    product_id: str
    name: str
    quantity: int


@dataclass(frozen=True)
class InventoryStats:
    """Stock metrics for one vendor."""

    vendor_id: str
    total_products: int
    low_stock_products: int
    out_of_stock_products: int
    inventory_value_total: float
    low_stock_product_details: list[LowStockProduct] = field(default_factory=list)
