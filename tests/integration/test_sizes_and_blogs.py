"""Sizes (namespace-wide invalidation) and blogs (vendor-scoped invalidation)."""

from datetime import date

import pytest

from vendorhub.api.v1.dependencies import ServiceRegistry
from vendorhub.application.dtos.pagination import PageParams
from vendorhub.domain.exceptions import (
    AlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)


async def test_size_read_is_cached_with_its_ttl(
    services: ServiceRegistry, queries, redis_client
) -> None:
    size = await services.sizes.create_size("Medium", "M")
    queries.reset()

    await services.sizes.get_size(size.id)
    after_first = queries.count
    again = await services.sizes.get_size(size.id)

    assert again.value == "M"
    assert queries.count == after_first
    assert 0 < await redis_client.ttl(f"sizes:id:{size.id}") <= 300


async def test_size_write_drops_every_size_entry(
    services: ServiceRegistry, cache
) -> None:
    small = await services.sizes.create_size("Small", "S")
    await services.sizes.get_size(small.id)
    await services.sizes.list_all_sizes()
    await services.sizes.list_sizes(PageParams.build())
    await services.brands.list_all_brands()

    await services.sizes.update_size(small.id, value="SM")

    assert await cache.keys("sizes:*") == []
    assert await cache.get("brands:all") is not None
    assert (await services.sizes.get_size(small.id)).value == "SM"


async def test_all_sizes_are_ordered_by_label(services: ServiceRegistry) -> None:
    for label, value in (("XL", "xl"), ("L", "l"), ("M", "m")):
        await services.sizes.create_size(label, value)
    assert [s.label for s in await services.sizes.list_all_sizes()] == ["L", "M", "XL"]


async def test_size_search_and_sort(services: ServiceRegistry) -> None:
    await services.sizes.create_size("Small", "S")
    await services.sizes.create_size("Large", "L")
    page = await services.sizes.list_sizes(
        PageParams.build(search="lar", sort_by="label", sort_order="asc")
    )
    assert [s.label for s in page.items] == ["Large"]


async def test_size_label_is_unique_and_required(services: ServiceRegistry) -> None:
    await services.sizes.create_size("Medium", "M")
    with pytest.raises(AlreadyExistsException):
        await services.sizes.create_size("medium", "M2")
    with pytest.raises(ValidationException):
        await services.sizes.create_size("  ", "X")
    with pytest.raises(ValidationException):
        await services.sizes.create_size("Huge", "")


async def test_deleted_size_is_gone(services: ServiceRegistry) -> None:
    size = await services.sizes.create_size("Medium", "M")
    await services.sizes.get_size(size.id)
    await services.sizes.delete_size(size.id)
    with pytest.raises(ResourceNotFoundException):
        await services.sizes.get_size(size.id)


async def _post(services: ServiceRegistry, heading: str, vendor_id: str | None = None):
    return await services.blogs.create_blog(
        heading=heading,
        description="Notes from the shop",
        category="Guides",
        author="Asha",
        published_on=date(2024, 3, 1),
        vendor_id=vendor_id,
    )


async def test_blog_write_is_scoped_to_its_vendor(
    services: ServiceRegistry, vendor, other_vendor, cache
) -> None:
    mine = await _post(services, "Mine", vendor.id)
    await _post(services, "Theirs", other_vendor.id)
    params = PageParams.build()
    await services.blogs.list_blogs(params, vendor_id=vendor.id)
    await services.blogs.list_blogs(params, vendor_id=other_vendor.id)
    await services.blogs.list_blogs(params)
    await services.blogs.list_all_blogs(vendor.id)
    await services.blogs.list_all_blogs(other_vendor.id)
    await services.blogs.list_all_blogs()
    await services.blogs.get_blog(mine.id)

    await services.blogs.update_blog(mine.id, vendor.id, heading="Mine v2")

    assert await cache.get(f"blog:id:{mine.id}") is None
    assert await cache.get(f"blog:list:{vendor.id}") is None
    assert await cache.get("blog:list:all") is None
    assert await cache.keys(f"blog:paginated:{vendor.id}:*") == []
    assert await cache.keys("blog:paginated:all:*") == []
    assert await cache.get(f"blog:list:{other_vendor.id}") is not None
    assert await cache.keys(f"blog:paginated:{other_vendor.id}:*") != []
    page = await services.blogs.list_blogs(params, vendor_id=vendor.id)
    assert [b.heading for b in page.items] == ["Mine v2"]


async def test_blog_update_requires_the_owning_vendor(
    services: ServiceRegistry, vendor, other_vendor
) -> None:
    post = await _post(services, "Mine", vendor.id)
    with pytest.raises(ResourceNotFoundException):
        await services.blogs.update_blog(post.id, other_vendor.id, heading="Hijacked")
    with pytest.raises(ResourceNotFoundException):
        await services.blogs.update_blog(post.id, None, heading="Hijacked")
    assert (await services.blogs.get_blog(post.id)).heading == "Mine"


async def test_marketplace_post_is_edited_without_vendor(services: ServiceRegistry) -> None:
    post = await _post(services, "News")
    updated = await services.blogs.update_blog(post.id, None, category="Announcements")
    assert updated.category == "Announcements"
    assert updated.vendor_id is None


async def test_blog_for_unknown_vendor_is_rejected(services: ServiceRegistry) -> None:
    with pytest.raises(ResourceNotFoundException):
        await _post(services, "Orphan", "missingvendor")


async def test_blog_rejects_unknown_fields(services: ServiceRegistry, vendor) -> None:
    post = await _post(services, "Mine", vendor.id)
    with pytest.raises(ValidationException):
        await services.blogs.update_blog(post.id, vendor.id, owner="elsewhere")


async def test_blog_search_and_vendor_filter(
    services: ServiceRegistry, vendor, other_vendor
) -> None:
    await _post(services, "Kettle care", vendor.id)
    await _post(services, "Toaster tips", vendor.id)
    await _post(services, "Kettle reviews", other_vendor.id)

    page = await services.blogs.list_blogs(PageParams.build(search="kettle"), vendor_id=vendor.id)
    assert [b.heading for b in page.items] == ["Kettle care"]
    everyone = await services.blogs.list_blogs(PageParams.build(search="kettle"))
    assert everyone.pagination.total_items == 2


async def test_published_on_defaults_to_today(services: ServiceRegistry) -> None:
    post = await services.blogs.create_blog(
        heading="Hello", description="First post", category="News", author="Team"
    )
    assert isinstance(post.published_on, date)


async def test_vendor_delete_drops_its_blogs(
    services: ServiceRegistry, vendor, cache
) -> None:
    post = await _post(services, "Mine", vendor.id)
    await services.blogs.get_blog(post.id)
    await services.blogs.list_all_blogs(vendor.id)

    await services.vendors.delete_vendor(vendor.id)

    assert await cache.keys("blog:*") == []
    with pytest.raises(ResourceNotFoundException):
        await services.blogs.get_blog(post.id)
    assert await services.blogs.list_all_blogs() == []
