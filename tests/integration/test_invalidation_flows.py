"""Write paths: every cached read that embeds changed data is refreshed after the write commits."""

from datetime import timedelta

import pytest

from vendorhub.api.v1.dependencies import ServiceRegistry
from vendorhub.application.dtos.order import OrderItemInput
from vendorhub.application.dtos.pagination import PageParams
from vendorhub.application.services import DiscountService
from vendorhub.core.config import get_settings
from vendorhub.domain.enums import DiscountType, OrderStatus
from vendorhub.domain.exceptions import ResourceNotFoundException, ValidationException
from vendorhub.infrastructure.persistence.repositories import DiscountRepository
from vendorhub.shared.utils.datetime import utc_now


async def test_brand_rename_reaches_cached_products(
    services: ServiceRegistry, vendor
) -> None:
    brand = await services.brands.create_brand("Acme")
    created = await services.products.create_product(
        vendor_id=vendor.id, name="Kettle", mrp=50, net_price=40, brand_id=brand.id
    )
    assert (await services.products.get_product(created.id)).brand.name == "Acme"

    await services.brands.update_brand(brand.id, name="Acme Home")

    assert (await services.brands.get_brand(brand.id)).name == "Acme Home"
    assert (await services.products.get_product(created.id)).brand.name == "Acme Home"


async def test_parent_rename_reaches_children_and_dropdown(services: ServiceRegistry) -> None:
    parent = await services.parent_categories.create_parent_category("Home")
    primary = await services.primary_categories.create_primary_category("Kitchen", parent.id)
    await services.primary_categories.get_primary_category(primary.id)
    await services.dropdown.get_dropdown()

    await services.parent_categories.update_parent_category(parent.id, name="House")

    refreshed = await services.primary_categories.get_primary_category(primary.id)
    dropdown = await services.dropdown.get_dropdown()
    assert refreshed.parent_category.name == "House"
    assert dropdown.parent_categories[0].name == "House"


async def test_attribute_delete_reaches_secondary_categories(
    services: ServiceRegistry, session_factory, cache
) -> None:
    color = await services.attributes.create_attribute("Color")
    parent = await services.parent_categories.create_parent_category("Home")
    primary = await services.primary_categories.create_primary_category("Kitchen", parent.id)
    secondary = await services.secondary_categories.create_secondary_category(
        "Kettles", parent.id, primary.id, attribute_ids=[color.id]
    )
    cached = await services.secondary_categories.get_secondary_category(secondary.id)
    assert [a.name for a in cached.attributes] == ["Color"]

    await services.attributes.delete_attribute(color.id)

    async with session_factory() as session:
        reader = ServiceRegistry(session, cache, get_settings())
        refreshed = await reader.secondary_categories.get_secondary_category(secondary.id)
    assert refreshed.attributes == []


async def test_secondary_requires_primary_under_parent(services: ServiceRegistry) -> None:
    home = await services.parent_categories.create_parent_category("Home")
    garden = await services.parent_categories.create_parent_category("Garden")
    kitchen = await services.primary_categories.create_primary_category("Kitchen", home.id)
    with pytest.raises(ValidationException):
        await services.secondary_categories.create_secondary_category(
            "Kettles", garden.id, kitchen.id
        )


async def test_vendor_email_change_invalidates_old_and_new_keys(
    services: ServiceRegistry, vendor
) -> None:
    await services.vendors.get_vendor_by_email(vendor.email)
    await services.vendors.list_vendors()

    await services.vendors.update_vendor(vendor.id, email="Asha.New@Example.com")

    with pytest.raises(ResourceNotFoundException):
        await services.vendors.get_vendor_by_email(vendor.email)
    moved = await services.vendors.get_vendor_by_email("asha.new@example.com")
    assert moved.id == vendor.id
    assert [v.email for v in await services.vendors.list_vendors()] == ["asha.new@example.com"]


async def test_vendor_update_leaves_other_namespaces_warm(
    services: ServiceRegistry, vendor, cache
) -> None:
    await services.brands.list_all_brands()
    await services.vendors.update_vendor(vendor.id, store_name="Asha Outlet")
    assert await cache.get("brands:all") is not None
    assert (await services.vendors.get_vendor(vendor.id)).store_name == "Asha Outlet"


async def test_vendor_delete_drops_its_products(
    services: ServiceRegistry, vendor, product
) -> None:
    await services.products.get_product(product.id)
    await services.dashboard.get_inventory_stats(vendor.id)

    await services.vendors.delete_vendor(vendor.id)

    with pytest.raises(ResourceNotFoundException):
        await services.products.get_product(product.id)
    with pytest.raises(ResourceNotFoundException):
        await services.vendors.get_vendor(vendor.id)
    stats = await services.dashboard.get_inventory_stats(vendor.id)
    assert stats.total_products == 0


async def test_user_identity_change_cascades_to_discounts(
    services: ServiceRegistry, user, cache
) -> None:
    now = utc_now()
    discount = await services.discounts.create_discount(
        name="Spring",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=10,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=5),
        created_by=user.id,
    )
    assert (await services.discounts.get_discount(discount.id)).created_by.name == "Dana"

    await services.users.update_user(user.id, phone="+15550001")
    assert await cache.get(f"discounts:id:{discount.id}") is not None

    await services.users.update_user(user.id, name="Dana Q")
    assert await cache.get(f"discounts:id:{discount.id}") is None
    assert (await services.discounts.get_discount(discount.id)).created_by.name == "Dana Q"


async def test_user_with_orders_cannot_be_deleted(
    services: ServiceRegistry, user, product
) -> None:
    await services.orders.create_order(user.id, [OrderItemInput(product.id, 1)])
    with pytest.raises(ValidationException):
        await services.users.delete_user(user.id)
    assert (await services.users.get_user(user.id)).id == user.id


async def test_discount_write_is_scoped_to_its_vendor(
    services: ServiceRegistry, vendor, other_vendor, cache
) -> None:
    now = utc_now()
    common = dict(
        discount_type=DiscountType.FIXED,
        discount_value=5,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
    )
    mine = await services.discounts.create_discount(name="Mine", vendor_id=vendor.id, **common)
    await services.discounts.create_discount(name="Theirs", vendor_id=other_vendor.id, **common)
    params = PageParams.build()
    await services.discounts.list_vendor_discounts(vendor.id, params)
    await services.discounts.list_vendor_discounts(other_vendor.id, params)
    await services.discounts.list_discounts(params)
    await services.discounts.list_public_discounts()

    await services.discounts.update_discount(mine.id, name="Mine v2")

    assert await cache.keys(f"discounts:vendor:{vendor.id}:*") == []
    assert await cache.keys(f"discounts:vendor:{other_vendor.id}:*") != []
    assert await cache.keys("discounts:admin:*") == []
    assert await cache.get("discounts:public") is None
    page = await services.discounts.list_vendor_discounts(vendor.id, params)
    assert [d.name for d in page.items] == ["Mine v2"]


async def test_public_discounts_respect_window_on_cached_reads(
    services: ServiceRegistry,
) -> None:
    now = utc_now()
    await services.discounts.create_discount(
        name="Later",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=20,
        start_date=now + timedelta(days=2),
        end_date=now + timedelta(days=9),
    )
    await services.discounts.create_discount(
        name="Live",
        discount_type=DiscountType.PERCENTAGE,
        discount_value=10,
        start_date=now - timedelta(days=1),
        end_date=now + timedelta(days=1),
    )
    clock = [now]
    storefront = DiscountService(
        DiscountRepository(services.db),
        services.entity_cache("discounts", 300),
        public_ttl=180,
        clock=lambda: clock[0],
    )
    assert [d.name for d in await storefront.list_public_discounts()] == ["Live"]

    clock[0] = now + timedelta(days=3)
    assert [d.name for d in await storefront.list_public_discounts()] == ["Later"]


async def test_percentage_discount_over_100_is_rejected(services: ServiceRegistry) -> None:
    now = utc_now()
    with pytest.raises(ValidationException):
        await services.discounts.create_discount(
            name="Too much",
            discount_type=DiscountType.PERCENTAGE,
            discount_value=150,
            start_date=now,
            end_date=now + timedelta(days=1),
        )


async def test_apply_referral_refreshes_user_and_referral(
    services: ServiceRegistry, vendor, user
) -> None:
    referral = await services.referrals.create_referral(
        vendor_id=vendor.id,
        name="Friends",
        code="friends10",
        reward_points=50,
        expiry_date=utc_now() + timedelta(days=30),
        max_uses=1,
    )
    assert referral.code == "FRIENDS10"
    await services.users.get_user(user.id)
    await services.referrals.get_referral_by_code("friends10")
    await services.referrals.get_referral_stats(vendor.id)

    applied = await services.referrals.apply_referral("Friends10", user.id)

    assert applied.total_reward_points == 50
    assert (await services.users.get_user(user.id)).reward_points == 50
    stats = await services.referrals.get_referral_stats(vendor.id)
    assert stats.total_usage == 1
    assert stats.conversion_rate == 100.0
    with pytest.raises(ResourceNotFoundException):
        await services.referrals.get_referral_by_code("FRIENDS10")
    with pytest.raises(ValidationException):
        await services.referrals.apply_referral("FRIENDS10", user.id)


async def test_referral_code_change_drops_old_code(
    services: ServiceRegistry, vendor
) -> None:
    referral = await services.referrals.create_referral(
        vendor_id=vendor.id,
        name="Launch",
        code="LAUNCH",
        reward_points=10,
        expiry_date=utc_now() + timedelta(days=30),
    )
    await services.referrals.get_referral_by_code("LAUNCH")
    await services.referrals.update_referral(referral.id, code="launch2")
    with pytest.raises(ResourceNotFoundException):
        await services.referrals.get_referral_by_code("LAUNCH")
    assert (await services.referrals.get_referral_by_code("LAUNCH2")).id == referral.id


async def test_order_fans_out_to_dashboard_and_stock(
    services: ServiceRegistry, vendor, user, product
) -> None:
    before = await services.dashboard.get_sales_summary(vendor.id)
    status_before = await services.dashboard.get_order_status_breakdown(vendor.id)
    inventory_before = await services.dashboard.get_inventory_stats(vendor.id)
    await services.products.get_product(product.id)
    assert before.total_orders == 0

    order = await services.orders.create_order(user.id, [OrderItemInput(product.id, 3)])

    sales = await services.dashboard.get_sales_summary(vendor.id)
    status = await services.dashboard.get_order_status_breakdown(vendor.id)
    inventory = await services.dashboard.get_inventory_stats(vendor.id)
    assert sales.total_orders == 1
    assert sales.total_revenue == 120.0
    assert status.counts[OrderStatus.CONFIRMED.value] == status_before.total + 1
    assert inventory.inventory_value_total == inventory_before.inventory_value_total - 120.0
    assert (await services.products.get_product(product.id)).quantity == 17
    assert (await services.orders.get_order_by_number(order.order_number)).id == order.id


async def test_cancel_restocks_and_refreshes_status(
    services: ServiceRegistry, vendor, user, product
) -> None:
    order = await services.orders.create_order(user.id, [OrderItemInput(product.id, 5)])
    await services.orders.list_orders(vendor_id=vendor.id)
    await services.dashboard.get_order_status_breakdown(vendor.id)

    cancelled = await services.orders.cancel_order(order.id)

    assert cancelled.status is OrderStatus.CANCELLED
    assert (await services.products.get_product(product.id)).quantity == 20
    status = await services.dashboard.get_order_status_breakdown(vendor.id)
    assert status.counts["cancelled"] == 1
    assert status.counts["confirmed"] == 0
    listed = await services.orders.list_orders(vendor_id=vendor.id)
    assert listed[0].status is OrderStatus.CANCELLED


async def test_order_over_stock_is_rejected(
    services: ServiceRegistry, user, product
) -> None:
    with pytest.raises(ValidationException):
        await services.orders.create_order(user.id, [OrderItemInput(product.id, 21)])


async def test_stock_update_refreshes_inventory(
    services: ServiceRegistry, vendor, product
) -> None:
    assert (await services.dashboard.get_inventory_stats(vendor.id)).low_stock_products == 0
    await services.products.update_stock(product.id, 2)
    stats = await services.dashboard.get_inventory_stats(vendor.id)
    assert stats.low_stock_products == 1
    assert stats.low_stock_product_details[0].quantity == 2
