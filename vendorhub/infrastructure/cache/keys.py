"""Cache key builders. Single place for key format.

Keys are <namespace>:<operation>[:<parameters>...] joined by CACHE_KEY_SEP.
Builders are pure functions of their arguments, so equal parameters always
give equal keys.

Two kinds of components keep distinct parameters from colliding:

- identifiers (entity and scope ids) are validated: they must be non-empty
  and free of the separator and of glob metacharacters, so an id can never
  forge another key or widen an invalidation pattern;
- free text (search terms, emails, referral codes) is percent-encoded, which
  is injective and leaves no separator or glob character in the key.
"""

from urllib.parse import quote

from vendorhub.application.dtos.pagination import PageParams
from vendorhub.core.constants import (
    CACHE_GLOB_CHARS,
    CACHE_KEY_SEP,
    CACHE_OP_ADMIN,
    CACHE_OP_ALL,
    CACHE_OP_CODE,
    CACHE_OP_EMAIL,
    CACHE_OP_ID,
    CACHE_OP_IFSC,
    CACHE_OP_LIST,
    CACHE_OP_NUMBER,
    CACHE_OP_PAGINATED,
    CACHE_OP_PUBLIC,
    CACHE_OP_STATS,
    CACHE_OP_VENDOR,
    CACHE_PREFIX_BANKS,
    CACHE_PREFIX_BLOG,
    CACHE_PREFIX_DISCOUNTS,
    CACHE_PREFIX_DROPDOWN,
    CACHE_PREFIX_INVENTORY,
    CACHE_PREFIX_ORDER_STATUS,
    CACHE_PREFIX_ORDERS,
    CACHE_PREFIX_PRODUCTS,
    CACHE_PREFIX_REFERRALS,
    CACHE_PREFIX_SALES,
    CACHE_PREFIX_USERS,
    CACHE_PREFIX_VENDOR,
    CACHE_SCOPE_ANY,
)


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value cannot be used verbatim in a cache key.

    Args:
        value: Identifier used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty, contains CACHE_KEY_SEP or a glob metacharacter.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must not be empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )
    if CACHE_GLOB_CHARS.intersection(value):
        raise ValueError(
            f"Cache key component {name!r} must not contain glob characters"
        )


def _scope(value: str | None, name: str) -> str:
    """Render an optional scope id; None becomes CACHE_SCOPE_ANY."""
    if value is None:
        return CACHE_SCOPE_ANY
    _validate_key_component(value, name)
    if value == CACHE_SCOPE_ANY:
        raise ValueError(f"Cache key component {name!r} must not be {CACHE_SCOPE_ANY!r}")
    return value


def encode_text(value: str) -> str:
    """Percent-encode free text so it is safe and unambiguous inside a key."""
    return quote(value, safe="")


def _join(*parts: object) -> str:
    return CACHE_KEY_SEP.join(str(p) for p in parts)


def namespace_pattern(namespace: str) -> str:
    """Wildcard matching every key in a namespace (coarse invalidation)."""
    return _join(namespace, "*")


def entity_key(namespace: str, entity_id: str) -> str:
    """Cache key for a single entity by id, e.g. attributes:id:<id>."""
    _validate_key_component(entity_id, "entity_id")
    return _join(namespace, CACHE_OP_ID, entity_id)


def all_key(namespace: str) -> str:
    """Cache key for the unbounded (legacy) list of a namespace."""
    return _join(namespace, CACHE_OP_ALL)


def paginated_key(
    namespace: str,
    params: PageParams,
    *scopes: tuple[str | None, str],
) -> str:
    """Cache key for a paginated listing.

    Args:
        namespace: Entity namespace.
        params: Normalized page parameters (sort_by already whitelisted).
        scopes: (value, name) pairs of optional scoping ids, rendered in order.

    Returns:
        <namespace>:paginated[:<scope>...]:<page>:<limit>:<search>:<sort_by>:<sort_order>
    """
    scope_parts = [_scope(value, name) for value, name in scopes]
    _validate_key_component(params.sort_by, "sort_by")
    return _join(
        namespace,
        CACHE_OP_PAGINATED,
        *scope_parts,
        params.page,
        params.limit,
        encode_text(params.search),
        params.sort_by,
        params.sort_order.value,
    )


def email_key(namespace: str, email: str) -> str:
    """Cache key for an entity looked up by email (vendor:email:<email>)."""
    return _join(namespace, CACHE_OP_EMAIL, encode_text(email.strip().lower()))


def vendor_email_key(email: str) -> str:
    """Cache key for vendor by email."""
    return email_key(CACHE_PREFIX_VENDOR, email)


def user_email_key(email: str) -> str:
    """Cache key for user by email."""
    return email_key(CACHE_PREFIX_USERS, email)


def products_vendor_key(vendor_id: str) -> str:
    """Cache key for the legacy product list of one vendor."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_PRODUCTS, CACHE_OP_VENDOR, vendor_id)


def discount_public_key() -> str:
    """Cache key for the public (storefront) discount listing."""
    return _join(CACHE_PREFIX_DISCOUNTS, CACHE_OP_PUBLIC)


def discount_admin_page_key(params: PageParams) -> str:
    """Cache key for the admin (all vendors) discount page."""
    return paginated_key(_join(CACHE_PREFIX_DISCOUNTS, CACHE_OP_ADMIN), params)


def discount_admin_pattern() -> str:
    """Wildcard for every cached admin discount page."""
    return _join(CACHE_PREFIX_DISCOUNTS, CACHE_OP_ADMIN, "*")


def discount_vendor_page_key(vendor_id: str, params: PageParams) -> str:
    """Cache key for one vendor's discount page."""
    _validate_key_component(vendor_id, "vendor_id")
    return paginated_key(
        _join(CACHE_PREFIX_DISCOUNTS, CACHE_OP_VENDOR, vendor_id), params
    )


def discount_vendor_pattern(vendor_id: str) -> str:
    """Wildcard for every cached discount page of one vendor."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_DISCOUNTS, CACHE_OP_VENDOR, vendor_id, "*")


def referral_code_key(code: str) -> str:
    """Cache key for referral by (upper-cased) code."""
    return _join(CACHE_PREFIX_REFERRALS, CACHE_OP_CODE, encode_text(code.strip().upper()))


def referral_vendor_list_key(vendor_id: str) -> str:
    """Cache key for the referral list of one vendor."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_REFERRALS, CACHE_OP_VENDOR, vendor_id, CACHE_OP_LIST)


def referral_vendor_stats_key(vendor_id: str) -> str:
    """Cache key for the referral statistics of one vendor."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_REFERRALS, CACHE_OP_VENDOR, vendor_id, CACHE_OP_STATS)


def referral_vendor_pattern(vendor_id: str) -> str:
    """Wildcard for every cached referral listing of one vendor."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_REFERRALS, CACHE_OP_VENDOR, vendor_id, "*")


def order_number_key(order_number: str) -> str:
    """Cache key for order by its human-facing number."""
    return _join(CACHE_PREFIX_ORDERS, CACHE_OP_NUMBER, encode_text(order_number))


def order_list_key(
    vendor_id: str | None, user_id: str | None, status: str | None
) -> str:
    """Cache key for an order listing filtered by vendor, user and status."""
    return _join(
        CACHE_PREFIX_ORDERS,
        CACHE_OP_LIST,
        _scope(vendor_id, "vendor_id"),
        _scope(user_id, "user_id"),
        _scope(status, "status"),
    )


def _period(month: int | None, year: int | None) -> tuple[str, str]:
    return (
        CACHE_SCOPE_ANY if month is None else str(month),
        CACHE_SCOPE_ANY if year is None else str(year),
    )


def sales_key(vendor_id: str, month: int | None, year: int | None) -> str:
    """Cache key for a vendor's sales summary (sales:<vendor>:<month>:<year>)."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_SALES, vendor_id, *_period(month, year))


def order_status_key(vendor_id: str, month: int | None, year: int | None) -> str:
    """Cache key for a vendor's order status breakdown."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_ORDER_STATUS, vendor_id, *_period(month, year))


def inventory_key(vendor_id: str) -> str:
    """Cache key for a vendor's inventory statistics."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(CACHE_PREFIX_INVENTORY, vendor_id)


def vendor_metric_pattern(prefix: str, vendor_id: str) -> str:
    """Wildcard for every cached period of one dashboard metric for one vendor."""
    _validate_key_component(vendor_id, "vendor_id")
    return _join(prefix, vendor_id, "*")


def dropdown_key() -> str:
    """Cache key for the category/attribute dropdown aggregate."""
    return all_key(CACHE_PREFIX_DROPDOWN)


def blog_list_key(vendor_id: str | None) -> str:
    """Cache key for the unbounded blog list of one vendor, or of every vendor."""
    return _join(CACHE_PREFIX_BLOG, CACHE_OP_LIST, _scope(vendor_id, "vendor_id"))


def blog_page_key(vendor_id: str | None, params: PageParams) -> str:
    """Cache key for a blog page (blog:paginated:<vendor|all>:...)."""
    return paginated_key(CACHE_PREFIX_BLOG, params, (vendor_id, "vendor_id"))


def blog_page_pattern(vendor_id: str | None) -> str:
    """Wildcard for every cached blog page of one vendor, or of the all-vendors view."""
    return _join(CACHE_PREFIX_BLOG, CACHE_OP_PAGINATED, _scope(vendor_id, "vendor_id"), "*")


def bank_ifsc_key(ifsc: str) -> str:
    """Cache key for branch details of a (normalized) IFSC code."""
    _validate_key_component(ifsc, "ifsc")
    return _join(CACHE_PREFIX_BANKS, CACHE_OP_IFSC, ifsc)
