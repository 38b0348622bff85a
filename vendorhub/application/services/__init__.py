"""Application services: cached entity reads, writes with cache invalidation."""

from vendorhub.application.services.attribute_service import AttributeService
from vendorhub.application.services.bank_service import BankService
from vendorhub.application.services.blog_service import BlogService
from vendorhub.application.services.brand_service import BrandService
from vendorhub.application.services.category_service import (
    ParentCategoryService,
    PrimaryCategoryService,
    SecondaryCategoryService,
)
from vendorhub.application.services.dashboard_service import DashboardService
from vendorhub.application.services.discount_service import DiscountService
from vendorhub.application.services.dropdown_service import DropdownService
from vendorhub.application.services.order_service import OrderService
from vendorhub.application.services.product_service import ProductService
from vendorhub.application.services.referral_service import ReferralService
from vendorhub.application.services.size_service import SizeService
from vendorhub.application.services.user_service import UserService
from vendorhub.application.services.vendor_service import VendorService

__all__ = [
    "AttributeService",
    "BankService",
    "BlogService",
    "BrandService",
    "DashboardService",
    "DiscountService",
    "DropdownService",
    "OrderService",
    "ParentCategoryService",
    "PrimaryCategoryService",
    "ProductService",
    "ReferralService",
    "SecondaryCategoryService",
    "SizeService",
    "UserService",
    "VendorService",
]
