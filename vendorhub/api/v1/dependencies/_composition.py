"""Composition root: builds repositories, entity caches and services.

ServiceRegistry wires one database session and the shared cache adapter into
every service with the TTL of its namespace, plus the shared IFSC client
for bank lookups. All EntityCache objects share a single CacheInvalidator,
so cascades follow the namespace dependency graph.
FastAPI dependencies and tests both build services through it.
"""

from __future__ import annotations

from functools import cached_property

from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.services import (
    AttributeService,
    BankService,
    BlogService,
    BrandService,
    DashboardService,
    DiscountService,
    DropdownService,
    OrderService,
    ParentCategoryService,
    PrimaryCategoryService,
    ProductService,
    ReferralService,
    SecondaryCategoryService,
    SizeService,
    UserService,
    VendorService,
)
from vendorhub.core.config import Settings
from vendorhub.core.constants import (
    CACHE_PREFIX_ATTRIBUTES,
    CACHE_PREFIX_BANKS,
    CACHE_PREFIX_BLOG,
    CACHE_PREFIX_BRANDS,
    CACHE_PREFIX_DISCOUNTS,
    CACHE_PREFIX_DROPDOWN,
    CACHE_PREFIX_INVENTORY,
    CACHE_PREFIX_ORDER_STATUS,
    CACHE_PREFIX_ORDERS,
    CACHE_PREFIX_PARENT_CATEGORIES,
    CACHE_PREFIX_PRIMARY_CATEGORIES,
    CACHE_PREFIX_PRODUCTS,
    CACHE_PREFIX_REFERRALS,
    CACHE_PREFIX_SALES,
    CACHE_PREFIX_SECONDARY_CATEGORIES,
    CACHE_PREFIX_SIZES,
    CACHE_PREFIX_USERS,
    CACHE_PREFIX_VENDOR,
)
from vendorhub.infrastructure.cache import CacheInvalidator, CacheProtocol, EntityCache
from vendorhub.infrastructure.external import IfscClient
from vendorhub.infrastructure.persistence.repositories import (
    AttributeRepository,
    BlogRepository,
    BrandRepository,
    DiscountRepository,
    OrderRepository,
    ParentCategoryRepository,
    PrimaryCategoryRepository,
    ProductRepository,
    ReferralRepository,
    SecondaryCategoryRepository,
    SizeRepository,
    UserRepository,
    VendorRepository,
)


class ServiceRegistry:
    """Per-request service graph over one session and the shared cache."""

    def __init__(
        self,
        db: AsyncSession,
        cache: CacheProtocol | None,
        settings: Settings,
        ifsc_client: IfscClient | None = None,
    ) -> None:
        self.db = db
        self.cache = cache
        self.settings = settings
        self.ifsc_client = ifsc_client
        self.invalidator = CacheInvalidator(cache)

    def entity_cache(self, namespace: str, ttl: int) -> EntityCache:
        return EntityCache(self.cache, namespace, ttl, self.invalidator)

    @cached_property
    def attributes(self) -> AttributeService:
        return AttributeService(
            AttributeRepository(self.db),
            self.entity_cache(CACHE_PREFIX_ATTRIBUTES, self.settings.cache_ttl_attributes),
        )

    @cached_property
    def brands(self) -> BrandService:
        return BrandService(
            BrandRepository(self.db),
            self.entity_cache(CACHE_PREFIX_BRANDS, self.settings.cache_ttl_brands),
        )

    @cached_property
    def sizes(self) -> SizeService:
        return SizeService(
            SizeRepository(self.db),
            self.entity_cache(CACHE_PREFIX_SIZES, self.settings.cache_ttl_sizes),
        )

    @cached_property
    def parent_categories(self) -> ParentCategoryService:
        return ParentCategoryService(
            ParentCategoryRepository(self.db),
            self.entity_cache(
                CACHE_PREFIX_PARENT_CATEGORIES, self.settings.cache_ttl_categories
            ),
        )

    @cached_property
    def primary_categories(self) -> PrimaryCategoryService:
        return PrimaryCategoryService(
            PrimaryCategoryRepository(self.db),
            self.entity_cache(
                CACHE_PREFIX_PRIMARY_CATEGORIES, self.settings.cache_ttl_categories
            ),
        )

    @cached_property
    def secondary_categories(self) -> SecondaryCategoryService:
        return SecondaryCategoryService(
            SecondaryCategoryRepository(self.db),
            self.entity_cache(
                CACHE_PREFIX_SECONDARY_CATEGORIES, self.settings.cache_ttl_categories
            ),
        )

    @cached_property
    def dashboard(self) -> DashboardService:
        return DashboardService(
            OrderRepository(self.db),
            ProductRepository(self.db),
            sales_cache=self.entity_cache(
                CACHE_PREFIX_SALES, self.settings.cache_ttl_dashboard_sales
            ),
            order_status_cache=self.entity_cache(
                CACHE_PREFIX_ORDER_STATUS, self.settings.cache_ttl_dashboard_order_status
            ),
            inventory_cache=self.entity_cache(
                CACHE_PREFIX_INVENTORY, self.settings.cache_ttl_dashboard_inventory
            ),
        )

    @cached_property
    def products(self) -> ProductService:
        return ProductService(
            ProductRepository(self.db),
            self.entity_cache(CACHE_PREFIX_PRODUCTS, self.settings.cache_ttl_products),
            dashboard=self.dashboard,
        )

    @cached_property
    def vendors(self) -> VendorService:
        return VendorService(
            VendorRepository(self.db),
            self.entity_cache(CACHE_PREFIX_VENDOR, self.settings.cache_ttl_vendors),
            dashboard=self.dashboard,
        )

    @cached_property
    def users(self) -> UserService:
        return UserService(
            UserRepository(self.db),
            self.entity_cache(CACHE_PREFIX_USERS, self.settings.cache_ttl_users),
        )

    @cached_property
    def discounts(self) -> DiscountService:
        return DiscountService(
            DiscountRepository(self.db),
            self.entity_cache(CACHE_PREFIX_DISCOUNTS, self.settings.cache_ttl_discounts),
            public_ttl=self.settings.cache_ttl_discounts_public,
        )

    @cached_property
    def referrals(self) -> ReferralService:
        return ReferralService(
            ReferralRepository(self.db),
            UserRepository(self.db),
            self.entity_cache(CACHE_PREFIX_REFERRALS, self.settings.cache_ttl_referrals),
        )

    @cached_property
    def orders(self) -> OrderService:
        return OrderService(
            OrderRepository(self.db),
            self.entity_cache(CACHE_PREFIX_ORDERS, self.settings.cache_ttl_orders),
            dashboard=self.dashboard,
        )

    @cached_property
    def dropdown(self) -> DropdownService:
        return DropdownService(
            self.entity_cache(CACHE_PREFIX_DROPDOWN, self.settings.cache_ttl_dropdown),
            attributes=self.attributes,
            parent_categories=self.parent_categories,
            primary_categories=self.primary_categories,
            secondary_categories=self.secondary_categories,
        )

    @cached_property
    def blogs(self) -> BlogService:
        return BlogService(
            BlogRepository(self.db),
            self.entity_cache(CACHE_PREFIX_BLOG, self.settings.cache_ttl_blog),
        )

    @cached_property
    def banks(self) -> BankService:
        return BankService(
            self.ifsc_client,
            self.entity_cache(CACHE_PREFIX_BANKS, self.settings.cache_ttl_banks),
        )
