"""Persistence repositories. Re-exports for dependency injection."""

from vendorhub.infrastructure.persistence.repositories.account_repo import (
    UserRepository,
    VendorRepository,
)
from vendorhub.infrastructure.persistence.repositories.attribute_repo import (
    AttributeRepository,
)
from vendorhub.infrastructure.persistence.repositories.base import BaseRepository
from vendorhub.infrastructure.persistence.repositories.blog_repo import BlogRepository
from vendorhub.infrastructure.persistence.repositories.brand_repo import BrandRepository
from vendorhub.infrastructure.persistence.repositories.category_repo import (
    ParentCategoryRepository,
    PrimaryCategoryRepository,
    SecondaryCategoryRepository,
)
from vendorhub.infrastructure.persistence.repositories.discount_repo import (
    DiscountRepository,
)
from vendorhub.infrastructure.persistence.repositories.order_repo import OrderRepository
from vendorhub.infrastructure.persistence.repositories.product_repo import (
    ProductRepository,
)
from vendorhub.infrastructure.persistence.repositories.referral_repo import (
    ReferralRepository,
)
from vendorhub.infrastructure.persistence.repositories.size_repo import SizeRepository

__all__ = [
    "AttributeRepository",
    "BaseRepository",
    "BlogRepository",
    "BrandRepository",
    "DiscountRepository",
    "OrderRepository",
    "ParentCategoryRepository",
    "PrimaryCategoryRepository",
    "ProductRepository",
    "ReferralRepository",
    "SecondaryCategoryRepository",
    "SizeRepository",
    "UserRepository",
    "VendorRepository",
]
