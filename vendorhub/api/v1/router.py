"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags. All routes
use dependencies from vendorhub.api.v1.dependencies (no manual repo/service construction).
"""

from fastapi import APIRouter

from vendorhub.api.v1.endpoints import (
    attributes,
    banks,
    blogs,
    brands,
    categories,
    dashboard,
    discounts,
    dropdown,
    health,
    orders,
    products,
    referrals,
    sizes,
    users,
    vendors,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(attributes.router, prefix="/attributes", tags=["attributes"])
api_router.include_router(brands.router, prefix="/brands", tags=["brands"])
api_router.include_router(sizes.router, prefix="/sizes", tags=["sizes"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(vendors.router, prefix="/vendors", tags=["vendors"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(discounts.router, prefix="/discounts", tags=["discounts"])
api_router.include_router(referrals.router, prefix="/referrals", tags=["referrals"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
api_router.include_router(dropdown.router, prefix="/dropdown", tags=["dropdown"])
api_router.include_router(blogs.router, prefix="/blogs", tags=["blogs"])
api_router.include_router(banks.router, prefix="/banks", tags=["banks"])
