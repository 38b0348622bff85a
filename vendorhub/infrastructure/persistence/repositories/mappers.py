"""ORM -> DTO mapping shared by repositories (reference flattening, secret stripping)."""

from vendorhub.application.dtos.account import UserRef, UserResult, VendorResult
from vendorhub.application.dtos.blog import BlogResult
from vendorhub.application.dtos.catalog import (
    AttributeResult,
    BrandResult,
    NamedRef,
    ParentCategoryResult,
    PrimaryCategoryResult,
    SecondaryCategoryResult,
    SizeResult,
)
from vendorhub.application.dtos.discount import DiscountResult
from vendorhub.application.dtos.order import OrderItemResult, OrderResult
from vendorhub.application.dtos.product import ProductResult
from vendorhub.application.dtos.referral import ReferralResult
from vendorhub.domain.enums import DiscountTargetType, DiscountType, OrderStatus
from vendorhub.infrastructure.persistence.models import (
    Attribute,
    Blog,
    Brand,
    Discount,
    Order,
    ParentCategory,
    PrimaryCategory,
    Product,
    Referral,
    SecondaryCategory,
    Size,
    User,
    Vendor,
)
from vendorhub.shared.utils.datetime import ensure_utc


def named_ref(
    obj: Attribute | Brand | ParentCategory | PrimaryCategory | SecondaryCategory | None,
) -> NamedRef | None:
    """Flatten a related row to {id, name, is_active}."""
    if obj is None:
        return None
    return NamedRef(id=obj.id, name=obj.name, is_active=obj.is_active)


def user_ref(obj: User | None) -> UserRef | None:
    """Flatten a user to {id, name, email}."""
    if obj is None:
        return None
    return UserRef(id=obj.id, name=obj.name, email=obj.email)


def attribute_to_result(a: Attribute) -> AttributeResult:
    return AttributeResult(
        id=a.id,
        name=a.name,
        is_active=a.is_active,
        created_at=ensure_utc(a.created_at),
        updated_at=ensure_utc(a.updated_at),
    )


def brand_to_result(b: Brand) -> BrandResult:
    return BrandResult(
        id=b.id,
        name=b.name,
        is_active=b.is_active,
        meta_title=b.meta_title,
        meta_keywords=b.meta_keywords,
        meta_description=b.meta_description,
        created_at=ensure_utc(b.created_at),
        updated_at=ensure_utc(b.updated_at),
    )


def size_to_result(s: Size) -> SizeResult:
    return SizeResult(
        id=s.id,
        label=s.label,
        value=s.value,
        is_active=s.is_active,
        created_at=ensure_utc(s.created_at),
        updated_at=ensure_utc(s.updated_at),
    )


def parent_category_to_result(c: ParentCategory) -> ParentCategoryResult:
    return ParentCategoryResult(
        id=c.id,
        name=c.name,
        is_active=c.is_active,
        description=c.description,
        created_at=ensure_utc(c.created_at),
        updated_at=ensure_utc(c.updated_at),
    )


def primary_category_to_result(c: PrimaryCategory) -> PrimaryCategoryResult:
    return PrimaryCategoryResult(
        id=c.id,
        name=c.name,
        is_active=c.is_active,
        parent_category=named_ref(c.parent_category),
        description=c.description,
        created_at=ensure_utc(c.created_at),
        updated_at=ensure_utc(c.updated_at),
    )


def secondary_category_to_result(c: SecondaryCategory) -> SecondaryCategoryResult:
    return SecondaryCategoryResult(
        id=c.id,
        name=c.name,
        is_active=c.is_active,
        parent_category=named_ref(c.parent_category),
        primary_category=named_ref(c.primary_category),
        attributes=[named_ref(a) for a in c.attributes],
        description=c.description,
        created_at=ensure_utc(c.created_at),
        updated_at=ensure_utc(c.updated_at),
    )


def product_to_result(p: Product) -> ProductResult:
    return ProductResult(
        id=p.id,
        vendor_id=p.vendor_id,
        name=p.name,
        mrp=p.mrp,
        net_price=p.net_price,
        quantity=p.quantity,
        is_active=p.is_active,
        description=p.description,
        brand=named_ref(p.brand),
        parent_category=named_ref(p.parent_category),
        primary_category=named_ref(p.primary_category),
        secondary_category=named_ref(p.secondary_category),
        created_at=ensure_utc(p.created_at),
        updated_at=ensure_utc(p.updated_at),
    )


def vendor_to_result(v: Vendor) -> VendorResult:
    return VendorResult(
        id=v.id,
        name=v.name,
        email=v.email,
        store_name=v.store_name,
        is_verified=v.is_verified,
        phone=v.phone,
        created_at=ensure_utc(v.created_at),
        updated_at=ensure_utc(v.updated_at),
    )


def user_to_result(u: User) -> UserResult:
    return UserResult(
        id=u.id,
        name=u.name,
        email=u.email,
        reward_points=u.reward_points,
        phone=u.phone,
        referral_code_used=u.referral_code_used,
        created_at=ensure_utc(u.created_at),
        updated_at=ensure_utc(u.updated_at),
    )


def discount_to_result(d: Discount) -> DiscountResult:
    return DiscountResult(
        id=d.id,
        name=d.name,
        discount_type=DiscountType(d.discount_type),
        discount_value=d.discount_value,
        target_type=DiscountTargetType(d.target_type),
        start_date=ensure_utc(d.start_date),
        end_date=ensure_utc(d.end_date),
        is_active=d.is_active,
        description=d.description,
        vendor_id=d.vendor_id,
        parent_category=named_ref(d.parent_category),
        created_by=user_ref(d.creator),
        created_at=ensure_utc(d.created_at),
        updated_at=ensure_utc(d.updated_at),
    )


def referral_to_result(r: Referral) -> ReferralResult:
    return ReferralResult(
        id=r.id,
        name=r.name,
        code=r.code,
        reward_points=r.reward_points,
        vendor_id=r.vendor_id,
        expiry_date=ensure_utc(r.expiry_date),
        used_count=r.used_count,
        is_active=r.is_active,
        max_uses=r.max_uses,
        description=r.description,
        created_by=user_ref(r.creator),
        created_at=ensure_utc(r.created_at),
        updated_at=ensure_utc(r.updated_at),
    )


def order_to_result(o: Order) -> OrderResult:
    return OrderResult(
        id=o.id,
        order_number=o.order_number,
        user_id=o.user_id,
        status=OrderStatus(o.status),
        total=o.total,
        items=[
            OrderItemResult(
                product_id=i.product_id,
                vendor_id=i.vendor_id,
                product_name=i.product_name,
                price=i.price,
                quantity=i.quantity,
            )
            for i in o.items
        ],
        created_at=ensure_utc(o.created_at),
        updated_at=ensure_utc(o.updated_at),
    )


def blog_to_result(b: Blog) -> BlogResult:
    return BlogResult(
        id=b.id,
        heading=b.heading,
        description=b.description,
        category=b.category,
        author=b.author,
        published_on=b.published_on,
        vendor_id=b.vendor_id,
        image_url=b.image_url,
        meta_title=b.meta_title,
        meta_keywords=b.meta_keywords,
        meta_description=b.meta_description,
        created_at=ensure_utc(b.created_at),
        updated_at=ensure_utc(b.updated_at),
    )
