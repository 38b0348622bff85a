"""Cache key builders: format, determinism and non-collision."""

import pytest

from vendorhub.application.dtos.pagination import PageParams
from vendorhub.core.constants import CACHE_PREFIX_BRANDS, CACHE_PREFIX_PRODUCTS
from vendorhub.domain.enums import SortOrder
from vendorhub.infrastructure.cache import keys


def test_entity_key_format() -> None:
    assert keys.entity_key(CACHE_PREFIX_BRANDS, "b1") == "brands:id:b1"


def test_all_key_and_namespace_pattern() -> None:
    assert keys.all_key(CACHE_PREFIX_BRANDS) == "brands:all"
    assert keys.namespace_pattern(CACHE_PREFIX_BRANDS) == "brands:*"


def test_paginated_key_is_deterministic() -> None:
    """Equal parameters always produce the same key."""
    a = PageParams.build(2, 20, " shoes ", "name", "asc")
    b = PageParams.build(2, 20, "shoes", "name", SortOrder.ASC)
    assert keys.paginated_key(CACHE_PREFIX_BRANDS, a) == keys.paginated_key(
        CACHE_PREFIX_BRANDS, b
    )
    assert keys.paginated_key(CACHE_PREFIX_BRANDS, a) == "brands:paginated:2:20:shoes:name:asc"


def test_paginated_key_differs_for_any_parameter() -> None:
    base = PageParams.build()
    variants = [
        base,
        PageParams.build(page=2),
        PageParams.build(limit=25),
        PageParams.build(search="red"),
        PageParams.build(sort_by="name"),
        PageParams.build(sort_order="asc"),
    ]
    rendered = {keys.paginated_key(CACHE_PREFIX_BRANDS, p) for p in variants}
    assert len(rendered) == len(variants)


def test_paginated_key_scope_absent_is_distinct_from_present() -> None:
    params = PageParams.build()
    unscoped = keys.paginated_key(CACHE_PREFIX_PRODUCTS, params, (None, "vendor_id"))
    scoped = keys.paginated_key(CACHE_PREFIX_PRODUCTS, params, ("v1", "vendor_id"))
    assert unscoped == "products:paginated:all:1:10::created_at:desc"
    assert scoped == "products:paginated:v1:1:10::created_at:desc"


def test_search_text_cannot_forge_other_components() -> None:
    """A search containing the separator does not collide with a different page."""
    tricky = PageParams.build(search="a:1")
    plain = PageParams.build(search="a")
    key = keys.paginated_key(CACHE_PREFIX_BRANDS, tricky)
    assert key != keys.paginated_key(CACHE_PREFIX_BRANDS, plain)
    assert "a%3A1" in key
    assert "*" not in keys.paginated_key(CACHE_PREFIX_BRANDS, PageParams.build(search="*"))


@pytest.mark.parametrize("bad", ["", "a:b", "x*", "y?", "[z]"])
def test_entity_key_rejects_unsafe_ids(bad: str) -> None:
    with pytest.raises(ValueError):
        keys.entity_key(CACHE_PREFIX_BRANDS, bad)


def test_scope_placeholder_is_reserved() -> None:
    """A literal scope id equal to the placeholder would alias the unscoped key."""
    with pytest.raises(ValueError):
        keys.paginated_key(CACHE_PREFIX_PRODUCTS, PageParams.build(), ("all", "vendor_id"))


def test_email_key_normalizes_case_and_whitespace() -> None:
    assert keys.vendor_email_key(" Asha@Example.com ") == keys.vendor_email_key(
        "asha@example.com"
    )
    assert keys.vendor_email_key("a@b.c") != keys.user_email_key("a@b.c")


def test_referral_code_key_is_upper_cased() -> None:
    assert keys.referral_code_key("spring10") == "referrals:code:SPRING10"


def test_dashboard_keys_use_all_for_missing_period() -> None:
    assert keys.sales_key("v1", None, None) == "sales:v1:all:all"
    assert keys.sales_key("v1", 3, 2024) == "sales:v1:3:2024"
    assert keys.order_status_key("v1", 3, 2024) == "order_status:v1:3:2024"
    assert keys.inventory_key("v1") == "inventory:v1"
    assert keys.vendor_metric_pattern("sales", "v1") == "sales:v1:*"


def test_discount_keys_separate_admin_vendor_and_public() -> None:
    params = PageParams.build()
    admin = keys.discount_admin_page_key(params)
    vendor = keys.discount_vendor_page_key("v1", params)
    assert admin.startswith("discounts:admin:")
    assert vendor.startswith("discounts:vendor:v1:")
    assert keys.discount_public_key() == "discounts:public"


def test_order_list_key_distinguishes_filters() -> None:
    assert keys.order_list_key("v1", None, None) != keys.order_list_key(None, "v1", None)
    assert keys.order_list_key(None, None, None) == "orders:list:all:all:all"


def test_blog_keys_scope_by_vendor() -> None:
    params = PageParams.build()
    assert keys.blog_list_key(None) == "blog:list:all"
    assert keys.blog_list_key("v1") == "blog:list:v1"
    assert keys.blog_page_key("v1", params) == "blog:paginated:v1:1:10::created_at:desc"
    assert keys.blog_page_key(None, params).startswith("blog:paginated:all:")
    assert keys.blog_page_pattern("v1") == "blog:paginated:v1:*"
    assert keys.blog_page_pattern(None) == "blog:paginated:all:*"


def test_bank_ifsc_key_rejects_unsafe_codes() -> None:
    assert keys.bank_ifsc_key("HDFC0001234") == "banks:ifsc:HDFC0001234"
    with pytest.raises(ValueError):
        keys.bank_ifsc_key("HDFC*")
