"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the DB session, the shared cache adapter and
the application services. Routes depend only on these dependencies, not on
infrastructure directly. Tests override get_db, get_cache and get_ifsc_client.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.api.v1.dependencies._composition import ServiceRegistry
from vendorhub.api.v1.dependencies.common import (
    EntityId,
    PageParamsDep,
    ParentScope,
    PrimaryScope,
    UserScope,
    VendorScope,
    get_page_params,
)
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
from vendorhub.core.config import get_settings
from vendorhub.infrastructure.cache import CacheProtocol
from vendorhub.infrastructure.external import IfscClient
from vendorhub.infrastructure.persistence.database import get_db


def get_cache(request: Request) -> CacheProtocol | None:
    """Cache adapter set in app lifespan (app.state.cache); None when Redis is disabled."""
    return getattr(request.app.state, "cache", None)


def get_ifsc_client(request: Request) -> IfscClient | None:
    """IFSC client set in app lifespan (app.state.ifsc_client)."""
    return getattr(request.app.state, "ifsc_client", None)


async def get_services(
    db: Annotated[AsyncSession, Depends(get_db)],
    cache: Annotated[CacheProtocol | None, Depends(get_cache)],
    ifsc_client: Annotated[IfscClient | None, Depends(get_ifsc_client)],
) -> ServiceRegistry:
    """Service graph for this request (one session, shared cache and HTTP clients)."""
    return ServiceRegistry(db, cache, get_settings(), ifsc_client=ifsc_client)


Services = Annotated[ServiceRegistry, Depends(get_services)]


def get_attribute_service(services: Services) -> AttributeService:
    return services.attributes


def get_brand_service(services: Services) -> BrandService:
    return services.brands


def get_size_service(services: Services) -> SizeService:
    return services.sizes


def get_parent_category_service(services: Services) -> ParentCategoryService:
    return services.parent_categories


def get_primary_category_service(services: Services) -> PrimaryCategoryService:
    return services.primary_categories


def get_secondary_category_service(services: Services) -> SecondaryCategoryService:
    return services.secondary_categories


def get_product_service(services: Services) -> ProductService:
    return services.products


def get_vendor_service(services: Services) -> VendorService:
    return services.vendors


def get_user_service(services: Services) -> UserService:
    return services.users


def get_discount_service(services: Services) -> DiscountService:
    return services.discounts


def get_referral_service(services: Services) -> ReferralService:
    return services.referrals


def get_order_service(services: Services) -> OrderService:
    return services.orders


def get_blog_service(services: Services) -> BlogService:
    return services.blogs


def get_bank_service(services: Services) -> BankService:
    return services.banks


def get_dashboard_service(services: Services) -> DashboardService:
    return services.dashboard


def get_dropdown_service(services: Services) -> DropdownService:
    return services.dropdown


__all__ = [
    "EntityId",
    "PageParamsDep",
    "ParentScope",
    "PrimaryScope",
    "ServiceRegistry",
    "UserScope",
    "VendorScope",
    "get_attribute_service",
    "get_bank_service",
    "get_blog_service",
    "get_brand_service",
    "get_cache",
    "get_dashboard_service",
    "get_db",
    "get_discount_service",
    "get_dropdown_service",
    "get_ifsc_client",
    "get_order_service",
    "get_page_params",
    "get_parent_category_service",
    "get_primary_category_service",
    "get_product_service",
    "get_referral_service",
    "get_secondary_category_service",
    "get_services",
    "get_size_service",
    "get_user_service",
    "get_vendor_service",
]
