"""Persistence models: ORM entities and mixins.

Importing this package registers every table on Base.metadata.
"""

from vendorhub.infrastructure.persistence.models.attribute import Attribute
from vendorhub.infrastructure.persistence.models.blog import Blog
from vendorhub.infrastructure.persistence.models.brand import Brand
from vendorhub.infrastructure.persistence.models.category import (
    ParentCategory,
    PrimaryCategory,
    SecondaryCategory,
    secondary_category_attribute,
)
from vendorhub.infrastructure.persistence.models.discount import Discount
from vendorhub.infrastructure.persistence.models.mixins import (
    CuidMixin,
    EntityModel,
    TimestampMixin,
)
from vendorhub.infrastructure.persistence.models.order import Order, OrderItem
from vendorhub.infrastructure.persistence.models.product import Product
from vendorhub.infrastructure.persistence.models.referral import Referral
from vendorhub.infrastructure.persistence.models.size import Size
from vendorhub.infrastructure.persistence.models.user import User
from vendorhub.infrastructure.persistence.models.vendor import Vendor

__all__ = [
    "Attribute",
    "Blog",
    "Brand",
    "CuidMixin",
    "Discount",
    "EntityModel",
    "Order",
    "OrderItem",
    "ParentCategory",
    "PrimaryCategory",
    "Product",
    "Referral",
    "SecondaryCategory",
    "Size",
    "TimestampMixin",
    "User",
    "Vendor",
    "secondary_category_attribute",
]
