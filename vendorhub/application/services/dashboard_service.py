"""Vendor dashboard service: sales, order status and inventory metrics.

Each metric has its own prefix and TTL and is cached per vendor and period
(sales:<vendor>:<month>:<year>, order_status:<vendor>:<month>:<year>,
inventory:<vendor>). Invalidation is targeted per vendor and per metric;
order and product services call on_order_change/on_product_change after
their writes commit.
"""

from __future__ import annotations

import calendar
import logging
from collections import defaultdict
from collections.abc import Callable, Iterable
from datetime import UTC, datetime
from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.dashboard import (
    InventoryStats,
    OrderStatusBreakdown,
    SalesSummary,
    TopProduct,
)
from vendorhub.application.dtos.order import OrderResult
from vendorhub.core.constants import (
    CACHE_PREFIX_ORDER_STATUS,
    CACHE_PREFIX_SALES,
    TOP_SELLING_PRODUCTS_LIMIT,
    YEARLY_REVENUE_WINDOW,
)
from vendorhub.domain.enums import OrderStatus
from vendorhub.domain.exceptions import ValidationException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys
from vendorhub.shared.utils.datetime import (
    ensure_utc,
    month_bounds,
    previous_month,
    utc_now,
)

logger = logging.getLogger(__name__)

_SALES = TypeAdapter(SalesSummary)
_ORDER_STATUS = TypeAdapter(OrderStatusBreakdown)
_INVENTORY = TypeAdapter(InventoryStats)

_MONTH_NAMES = [calendar.month_abbr[m] for m in range(1, 13)]


def _validate_period(month: int | None, year: int | None) -> None:
    if (month is None) != (year is None):
        raise ValidationException("month and year must be given together", "month")
    if month is not None and not 1 <= month <= 12:
        raise ValidationException("month must be between 1 and 12", "month")


def _revenue(orders: Iterable[OrderResult]) -> float:
    return round(sum(o.total for o in orders), 2)


def _in_month(order: OrderResult, year: int, month: int) -> bool:
    created = ensure_utc(order.created_at)
    return created is not None and created.year == year and created.month == month


def _percent_change(current: float, previous: float) -> float:
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return round((current - previous) / previous * 100, 2)


def _top_products(vendor_id: str, orders: Iterable[OrderResult]) -> list[TopProduct]:
    quantities: dict[str, int] = defaultdict(int)
    revenue: dict[str, float] = defaultdict(float)
    names: dict[str, str] = {}
    for order in orders:
        for item in order.items:
            if item.vendor_id != vendor_id:
                continue
            quantities[item.product_id] += item.quantity
            revenue[item.product_id] += item.price * item.quantity
            names.setdefault(item.product_id, item.product_name)
    ranked = sorted(quantities, key=lambda pid: (-quantities[pid], names[pid], pid))
    return [
        TopProduct(
            product_id=pid,
            name=names[pid],
            quantity=quantities[pid],
            revenue=round(revenue[pid], 2),
        )
        for pid in ranked[:TOP_SELLING_PRODUCTS_LIMIT]
    ]


class DashboardService:
    """Per-vendor dashboard metrics with per-metric cache invalidation."""

    def __init__(
        self,
        order_repo: Any,
        product_repo: Any,
        sales_cache: EntityCache,
        order_status_cache: EntityCache,
        inventory_cache: EntityCache,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._sales_cache = sales_cache
        self._order_status_cache = order_status_cache
        self._inventory_cache = inventory_cache
        self._clock = clock

    async def get_sales_summary(
        self, vendor_id: str, month: int | None = None, year: int | None = None
    ) -> SalesSummary:
        """Revenue metrics for a vendor, for one month or for all time.

        Raises:
            ValidationException: If only one of month/year is given or month is out of range.
        """
        _validate_period(month, year)
        return await self._sales_cache.fetch(
            keys.sales_key(vendor_id, month, year),
            _SALES,
            lambda: self._compute_sales(vendor_id, month, year),
        )

    async def _compute_sales(
        self, vendor_id: str, month: int | None, year: int | None
    ) -> SalesSummary:
        now = self._clock()
        ref_year = year if year is not None else now.year
        ref_month = month if month is not None else now.month
        window_start = datetime(ref_year - YEARLY_REVENUE_WINDOW + 1, 1, 1, tzinfo=UTC)
        window_end = datetime(ref_year + 1, 1, 1, tzinfo=UTC)
        window = await self._order_repo.vendor_orders(vendor_id, window_start, window_end)

        if month is not None and year is not None:
            selected = [o for o in window if _in_month(o, year, month)]
        else:
            selected = await self._order_repo.vendor_orders(vendor_id)

        monthly = {name: 0.0 for name in _MONTH_NAMES}
        yearly = {y: 0.0 for y in range(window_start.year, ref_year + 1)}
        for order in window:
            created = ensure_utc(order.created_at)
            if created is None:
                continue
            yearly[created.year] += order.total
            if created.year == ref_year:
                monthly[_MONTH_NAMES[created.month - 1]] += order.total

        prev_year, prev_month = previous_month(ref_year, ref_month)
        current = _revenue(o for o in window if _in_month(o, ref_year, ref_month))
        previous = _revenue(o for o in window if _in_month(o, prev_year, prev_month))

        total_revenue = _revenue(selected)
        total_orders = len(selected)
        return SalesSummary(
            vendor_id=vendor_id,
            total_revenue=total_revenue,
            total_orders=total_orders,
            average_order_value=round(total_revenue / total_orders, 2) if total_orders else 0.0,
            revenue_change_percent=_percent_change(current, previous),
            month=month,
            year=year,
            monthly_revenue={k: round(v, 2) for k, v in monthly.items()},
            yearly_revenue={k: round(v, 2) for k, v in yearly.items()},
            top_selling_products=_top_products(vendor_id, selected),
        )

    async def get_order_status_breakdown(
        self, vendor_id: str, month: int | None = None, year: int | None = None
    ) -> OrderStatusBreakdown:
        """Order count per status (every status present) for a vendor."""
        _validate_period(month, year)
        return await self._order_status_cache.fetch(
            keys.order_status_key(vendor_id, month, year),
            _ORDER_STATUS,
            lambda: self._compute_order_status(vendor_id, month, year),
        )

    async def _compute_order_status(
        self, vendor_id: str, month: int | None, year: int | None
    ) -> OrderStatusBreakdown:
        start = end = None
        if month is not None and year is not None:
            start, end = month_bounds(year, month)
        raw = await self._order_repo.status_counts(vendor_id, start, end)
        counts = {status: raw.get(status, 0) for status in OrderStatus.values()}
        return OrderStatusBreakdown(
            vendor_id=vendor_id,
            counts=counts,
            total=sum(counts.values()),
            month=month,
            year=year,
        )

    async def get_inventory_stats(self, vendor_id: str) -> InventoryStats:
        return await self._inventory_cache.fetch(
            keys.inventory_key(vendor_id),
            _INVENTORY,
            lambda: self._product_repo.inventory_stats(vendor_id),
        )

    async def invalidate_sales_cache(self, vendor_id: str) -> int:
        return await self._sales_cache.invalidate_pattern(
            keys.vendor_metric_pattern(CACHE_PREFIX_SALES, vendor_id)
        )

    async def invalidate_order_status_cache(self, vendor_id: str) -> int:
        return await self._order_status_cache.invalidate_pattern(
            keys.vendor_metric_pattern(CACHE_PREFIX_ORDER_STATUS, vendor_id)
        )

    async def invalidate_inventory_cache(self, vendor_id: str) -> int:
        return await self._inventory_cache.invalidate_keys(keys.inventory_key(vendor_id))

    async def invalidate_all_dashboard_caches(self, vendor_id: str) -> int:
        """Drop every cached dashboard metric of one vendor; returns keys deleted."""
        deleted = (
            await self.invalidate_sales_cache(vendor_id)
            + await self.invalidate_order_status_cache(vendor_id)
            + await self.invalidate_inventory_cache(vendor_id)
        )
        logger.info("Dashboard caches invalidated for vendor %s (%d keys)", vendor_id, deleted)
        return deleted

    async def on_order_change(self, vendor_id: str) -> None:
        await self.invalidate_sales_cache(vendor_id)
        await self.invalidate_order_status_cache(vendor_id)

    async def on_product_change(self, vendor_id: str) -> None:
        await self.invalidate_inventory_cache(vendor_id)
