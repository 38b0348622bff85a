"""DashboardService unit tests with mocked repos, a fixed clock and a fakeredis cache."""

from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from vendorhub.application.dtos.dashboard import InventoryStats
from vendorhub.application.dtos.order import OrderItemResult, OrderResult
from vendorhub.application.services import DashboardService
from vendorhub.domain.enums import OrderStatus
from vendorhub.domain.exceptions import ValidationException
from vendorhub.infrastructure.cache import CacheService, EntityCache


def _order(
    order_id: str,
    created: datetime,
    lines: list[tuple[str, str, float, int]],
    status: OrderStatus = OrderStatus.CONFIRMED,
) -> OrderResult:
    """lines: (vendor_id, product_id, price, quantity)."""
    items = [
        OrderItemResult(
            product_id=pid,
            vendor_id=vid,
            product_name=f"Product {pid}",
            price=price,
            quantity=qty,
        )
        for vid, pid, price, qty in lines
    ]
    return OrderResult(
        id=order_id,
        order_number=f"ORD-{order_id}",
        user_id="u1",
        status=status,
        total=sum(price * qty for _, _, price, qty in lines),
        items=items,
        created_at=created,
    )


ORDERS = [
    _order("o3", datetime(2023, 7, 1, tzinfo=UTC), [("v1", "p1", 30.0, 1)]),
    _order("o2", datetime(2024, 2, 10, tzinfo=UTC), [("v1", "p2", 50.0, 1)]),
    _order(
        "o1",
        datetime(2024, 3, 2, tzinfo=UTC),
        [("v1", "p1", 50.0, 2), ("v2", "p9", 500.0, 1)],
    ),
]


@pytest.fixture
def dashboard_mocks(cache: CacheService):
    """DashboardService over mocked repos with the clock pinned to 2024-03-15."""
    order_repo = AsyncMock()
    order_repo.vendor_orders = AsyncMock(return_value=ORDERS)
    order_repo.status_counts = AsyncMock(return_value={"confirmed": 2, "cancelled": 1})
    product_repo = AsyncMock()
    product_repo.inventory_stats = AsyncMock(
        return_value=InventoryStats(
            vendor_id="v1",
            total_products=3,
            low_stock_products=1,
            out_of_stock_products=1,
            inventory_value_total=420.0,
        )
    )
    svc = DashboardService(
        order_repo,
        product_repo,
        sales_cache=EntityCache(cache, "sales", 300),
        order_status_cache=EntityCache(cache, "order_status", 180),
        inventory_cache=EntityCache(cache, "inventory", 600),
        clock=lambda: datetime(2024, 3, 15, 12, 0, tzinfo=UTC),
    )
    return svc, order_repo, product_repo


async def test_sales_summary_all_time(dashboard_mocks) -> None:
    svc, _, _ = dashboard_mocks
    summary = await svc.get_sales_summary("v1")

    assert summary.total_orders == 3
    assert summary.total_revenue == 680.0
    assert summary.average_order_value == round(680.0 / 3, 2)
    assert summary.monthly_revenue["Feb"] == 50.0
    assert summary.monthly_revenue["Mar"] == 600.0
    assert summary.monthly_revenue["Jul"] == 0.0
    assert list(summary.yearly_revenue) == [2020, 2021, 2022, 2023, 2024]
    assert summary.yearly_revenue[2023] == 30.0
    assert summary.revenue_change_percent == 1100.0


async def test_top_products_count_only_the_vendors_lines(dashboard_mocks) -> None:
    svc, _, _ = dashboard_mocks
    summary = await svc.get_sales_summary("v1")
    top = summary.top_selling_products
    assert [p.product_id for p in top] == ["p1", "p2"]
    assert top[0].quantity == 3
    assert top[0].revenue == 130.0


async def test_sales_summary_for_one_month(dashboard_mocks) -> None:
    svc, _, _ = dashboard_mocks
    summary = await svc.get_sales_summary("v1", month=2, year=2024)
    assert summary.total_orders == 1
    assert summary.total_revenue == 50.0
    assert (summary.month, summary.year) == (2, 2024)
    assert summary.revenue_change_percent == 100.0


async def test_sales_summary_is_cached_per_period(dashboard_mocks) -> None:
    svc, order_repo, _ = dashboard_mocks
    await svc.get_sales_summary("v1")
    calls = order_repo.vendor_orders.await_count
    again = await svc.get_sales_summary("v1")
    assert order_repo.vendor_orders.await_count == calls
    assert again.yearly_revenue[2023] == 30.0

    await svc.get_sales_summary("v1", month=2, year=2024)
    assert order_repo.vendor_orders.await_count > calls


@pytest.mark.parametrize("month,year", [(2, None), (None, 2024), (13, 2024)])
async def test_invalid_period_is_rejected(dashboard_mocks, month, year) -> None:
    svc, _, _ = dashboard_mocks
    with pytest.raises(ValidationException):
        await svc.get_sales_summary("v1", month=month, year=year)


async def test_order_status_breakdown_fills_every_status(dashboard_mocks) -> None:
    svc, order_repo, _ = dashboard_mocks
    breakdown = await svc.get_order_status_breakdown("v1", month=3, year=2024)
    assert set(breakdown.counts) == set(OrderStatus.values())
    assert breakdown.counts["confirmed"] == 2
    assert breakdown.counts["shipped"] == 0
    assert breakdown.total == 3
    _, start, end = order_repo.status_counts.await_args.args
    assert start == datetime(2024, 3, 1, tzinfo=UTC)
    assert end == datetime(2024, 4, 1, tzinfo=UTC)


async def test_inventory_stats_read_through(dashboard_mocks) -> None:
    svc, _, product_repo = dashboard_mocks
    first = await svc.get_inventory_stats("v1")
    second = await svc.get_inventory_stats("v1")
    assert first == second
    product_repo.inventory_stats.assert_awaited_once_with("v1")


async def test_on_order_change_drops_only_that_vendors_sales_and_status(
    dashboard_mocks, cache: CacheService
) -> None:
    svc, _, _ = dashboard_mocks
    await svc.get_sales_summary("v1")
    await svc.get_sales_summary("v1", month=2, year=2024)
    await svc.get_order_status_breakdown("v1")
    await svc.get_inventory_stats("v1")
    await cache.set("sales:v2:all:all", {"x": 1}, ttl=60)

    await svc.on_order_change("v1")

    assert await cache.keys("sales:v1:*") == []
    assert await cache.keys("order_status:v1:*") == []
    assert await cache.get("inventory:v1") is not None
    assert await cache.get("sales:v2:all:all") is not None


async def test_on_product_change_drops_inventory_only(
    dashboard_mocks, cache: CacheService
) -> None:
    svc, _, _ = dashboard_mocks
    await svc.get_sales_summary("v1")
    await svc.get_inventory_stats("v1")
    await svc.on_product_change("v1")
    assert await cache.get("inventory:v1") is None
    assert await cache.keys("sales:v1:*") != []


async def test_invalidate_all_dashboard_caches(dashboard_mocks, cache: CacheService) -> None:
    svc, _, _ = dashboard_mocks
    await svc.get_sales_summary("v1")
    await svc.get_order_status_breakdown("v1")
    await svc.get_inventory_stats("v1")
    assert await svc.invalidate_all_dashboard_caches("v1") >= 3
    assert await cache.keys("*") == []
