"""Cache outage: with Redis down or disabled every operation is served from the database."""

import pytest

from vendorhub.api.v1.dependencies import ServiceRegistry
from vendorhub.application.dtos.order import OrderItemInput
from vendorhub.application.dtos.pagination import PageParams
from vendorhub.core.config import get_settings


@pytest.fixture
def degraded(db_session, broken_cache) -> ServiceRegistry:
    """Services whose cache store fails on every command."""
    return ServiceRegistry(db_session, broken_cache, get_settings())


@pytest.fixture
def uncached(db_session) -> ServiceRegistry:
    """Services with caching disabled (no store configured)."""
    return ServiceRegistry(db_session, None, get_settings())


async def test_reads_and_writes_succeed_while_redis_is_down(degraded: ServiceRegistry) -> None:
    brand = await degraded.brands.create_brand("Acme")
    assert (await degraded.brands.get_brand(brand.id)).name == "Acme"

    await degraded.brands.update_brand(brand.id, name="Acme Home")
    assert (await degraded.brands.get_brand(brand.id)).name == "Acme Home"
    page = await degraded.brands.list_brands(PageParams.build())
    assert [b.name for b in page.items] == ["Acme Home"]


async def test_every_read_hits_the_database_while_redis_is_down(
    degraded: ServiceRegistry, queries
) -> None:
    brand = await degraded.brands.create_brand("Acme")
    queries.reset()
    await degraded.brands.get_brand(brand.id)
    once = queries.count
    await degraded.brands.get_brand(brand.id)
    assert queries.count == 2 * once


async def test_order_flow_without_cache(uncached: ServiceRegistry) -> None:
    vendor = await uncached.vendors.create_vendor(
        name="Asha", email="asha@example.com", store_name="Asha Store"
    )
    user = await uncached.users.create_user(name="Dana", email="dana@example.com")
    product = await uncached.products.create_product(
        vendor_id=vendor.id, name="Kettle", mrp=50, net_price=40, quantity=3
    )
    await uncached.orders.create_order(user.id, [OrderItemInput(product.id, 2)])

    sales = await uncached.dashboard.get_sales_summary(vendor.id)
    inventory = await uncached.dashboard.get_inventory_stats(vendor.id)
    assert sales.total_revenue == 80.0
    assert inventory.low_stock_products == 1
    assert await uncached.dashboard.invalidate_all_dashboard_caches(vendor.id) == 0


async def test_outage_write_leaves_entry_bounded_by_ttl(
    db_session, cache, broken_cache, redis_client
) -> None:
    """A write made while Redis is unreachable cannot invalidate; the old entry expires by TTL."""
    healthy = ServiceRegistry(db_session, cache, get_settings())
    brand = await healthy.brands.create_brand("Acme")
    await healthy.brands.get_brand(brand.id)

    degraded = ServiceRegistry(db_session, broken_cache, get_settings())
    await degraded.brands.update_brand(brand.id, name="Acme Home")

    ttl = await redis_client.ttl(f"brands:id:{brand.id}")
    assert 0 < ttl <= get_settings().cache_ttl_brands
    await redis_client.delete(f"brands:id:{brand.id}")
    assert (await healthy.brands.get_brand(brand.id)).name == "Acme Home"
