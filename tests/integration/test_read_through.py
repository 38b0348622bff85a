"""Read-through behaviour against SQLite + fakeredis: hits skip the database, writes refresh reads."""

import pytest

from vendorhub.api.v1.dependencies import ServiceRegistry
from vendorhub.application.dtos.pagination import PageParams
from vendorhub.core.config import get_settings
from vendorhub.domain.exceptions import (
    AlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)


async def test_second_get_is_served_from_cache(services: ServiceRegistry, queries) -> None:
    brand = await services.brands.create_brand("Acme")
    queries.reset()

    first = await services.brands.get_brand(brand.id)
    after_first = queries.count
    second = await services.brands.get_brand(brand.id)

    assert first == second
    assert after_first > 0
    assert queries.count == after_first


async def test_paginated_list_is_cached_per_parameters(
    services: ServiceRegistry, queries
) -> None:
    for name in ("Acme", "Bolt", "Crest"):
        await services.brands.create_brand(name)
    params = PageParams.build(limit=2, sort_by="name", sort_order="asc")

    page = await services.brands.list_brands(params)
    queries.reset()
    again = await services.brands.list_brands(params)

    assert queries.count == 0
    assert again == page
    assert [b.name for b in page.items] == ["Acme", "Bolt"]
    assert page.pagination.total_items == 3
    assert page.pagination.has_next


async def test_unknown_sort_field_shares_the_default_entry(
    services: ServiceRegistry, queries
) -> None:
    await services.brands.create_brand("Acme")
    await services.brands.list_brands(PageParams.build())
    queries.reset()
    await services.brands.list_brands(PageParams.build(sort_by="password_hash"))
    assert queries.count == 0


async def test_create_is_visible_on_the_next_list(services: ServiceRegistry) -> None:
    await services.attributes.create_attribute("Color")
    assert [a.name for a in await services.attributes.list_all_attributes()] == ["Color"]

    await services.attributes.create_attribute("Size")
    names = {a.name for a in await services.attributes.list_all_attributes()}
    assert names == {"Color", "Size"}


async def test_not_found_is_raised_and_not_cached(
    services: ServiceRegistry, redis_client
) -> None:
    with pytest.raises(ResourceNotFoundException):
        await services.brands.get_brand("missing")
    assert await redis_client.exists("brands:id:missing") == 0


async def test_entries_carry_their_namespace_ttl(
    services: ServiceRegistry, vendor, redis_client
) -> None:
    settings = get_settings()
    brand = await services.brands.create_brand("Acme")
    await services.brands.get_brand(brand.id)
    await services.vendors.get_vendor(vendor.id)
    await services.discounts.list_public_discounts()

    brand_ttl = await redis_client.ttl(f"brands:id:{brand.id}")
    vendor_ttl = await redis_client.ttl(f"vendor:id:{vendor.id}")
    public_ttl = await redis_client.ttl("discounts:public")
    assert 0 < brand_ttl <= settings.cache_ttl_brands
    assert settings.cache_ttl_brands < vendor_ttl <= settings.cache_ttl_vendors
    assert 0 < public_ttl <= settings.cache_ttl_discounts_public


async def test_cached_payload_never_contains_password_hash(
    services: ServiceRegistry, redis_client
) -> None:
    created = await services.users.create_user(
        name="Eve", email="eve@example.com", password_hash="secret-hash"
    )
    await services.users.get_user(created.id)
    raw = await redis_client.get(f"users:id:{created.id}")
    assert raw is not None
    assert "secret-hash" not in raw
    assert "password_hash" not in raw


async def test_duplicate_names_conflict(services: ServiceRegistry) -> None:
    await services.brands.create_brand("Acme")
    with pytest.raises(AlreadyExistsException):
        await services.brands.create_brand("  Acme ")


async def test_blank_name_is_rejected(services: ServiceRegistry) -> None:
    with pytest.raises(ValidationException):
        await services.attributes.create_attribute("   ")


async def test_product_list_scoped_by_vendor(
    services: ServiceRegistry, vendor, other_vendor, queries
) -> None:
    await services.products.create_product(
        vendor_id=vendor.id, name="Kettle", mrp=50, net_price=40, quantity=5
    )
    await services.products.create_product(
        vendor_id=other_vendor.id, name="Lamp", mrp=30, net_price=30, quantity=5
    )
    mine = await services.products.list_products_paginated(PageParams.build(), vendor.id)
    everyone = await services.products.list_products_paginated(PageParams.build())
    assert [p.name for p in mine.items] == ["Kettle"]
    assert everyone.pagination.total_items == 2

    await services.products.list_products(vendor.id)
    queries.reset()
    cached = await services.products.list_products(vendor.id)
    assert queries.count == 0
    assert [p.vendor_id for p in cached] == [vendor.id]


async def test_search_matches_name(services: ServiceRegistry, vendor) -> None:
    await services.products.create_product(
        vendor_id=vendor.id, name="Red Kettle", mrp=50, net_price=40
    )
    await services.products.create_product(
        vendor_id=vendor.id, name="Blue Lamp", mrp=30, net_price=30
    )
    page = await services.products.list_products_paginated(PageParams.build(search="kettle"))
    assert [p.name for p in page.items] == ["Red Kettle"]


async def test_product_pricing_rules(services: ServiceRegistry, vendor) -> None:
    with pytest.raises(ValidationException):
        await services.products.create_product(
            vendor_id=vendor.id, name="Kettle", mrp=30, net_price=40
        )
    with pytest.raises(ResourceNotFoundException):
        await services.products.create_product(
            vendor_id="nobody", name="Kettle", mrp=50, net_price=40
        )


async def test_dropdown_aggregates_taxonomy(services: ServiceRegistry, queries) -> None:
    color = await services.attributes.create_attribute("Color")
    parent = await services.parent_categories.create_parent_category("Home")
    primary = await services.primary_categories.create_primary_category("Kitchen", parent.id)
    await services.secondary_categories.create_secondary_category(
        "Kettles", parent.id, primary.id, attribute_ids=[color.id]
    )

    dropdown = await services.dropdown.get_dropdown()
    queries.reset()
    cached = await services.dropdown.get_dropdown()

    assert queries.count == 0
    assert cached == dropdown
    assert [c.name for c in dropdown.parent_categories] == ["Home"]
    assert dropdown.secondary_categories[0].attributes[0].name == "Color"
    assert dropdown.secondary_categories[0].primary_category.name == "Kitchen"
