"""Product repository. Returns application DTOs and inventory aggregates."""

from sqlalchemy import case, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.dashboard import InventoryStats, LowStockProduct
from vendorhub.application.dtos.pagination import Page, PageParams
from vendorhub.application.dtos.product import ProductResult
from vendorhub.core.constants import LOW_STOCK_THRESHOLD
from vendorhub.domain.exceptions import ResourceNotFoundException
from vendorhub.infrastructure.persistence.models import (
    Brand,
    ParentCategory,
    PrimaryCategory,
    Product,
    SecondaryCategory,
    Vendor,
)
from vendorhub.infrastructure.persistence.repositories.base import (
    BaseRepository,
    contains_pattern,
)
from vendorhub.infrastructure.persistence.repositories.mappers import product_to_result

PRODUCT_SORT_FIELDS = frozenset(
    {"name", "net_price", "mrp", "quantity", "created_at", "updated_at"}
)


class ProductRepository(BaseRepository[Product, ProductResult]):
    """Product persistence."""

    resource_type = "product"
    sort_fields = PRODUCT_SORT_FIELDS

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Product)

    def _to_result(self, obj: Product) -> ProductResult:
        return product_to_result(obj)

    async def ensure_references(
        self,
        *,
        vendor_id: str | None = None,
        brand_id: str | None = None,
        parent_category_id: str | None = None,
        primary_category_id: str | None = None,
        secondary_category_id: str | None = None,
    ) -> None:
        """Raise ResourceNotFoundException for the first referenced row that is missing."""
        checks = (
            ("vendor", Vendor, vendor_id),
            ("brand", Brand, brand_id),
            ("parent category", ParentCategory, parent_category_id),
            ("primary category", PrimaryCategory, primary_category_id),
            ("secondary category", SecondaryCategory, secondary_category_id),
        )
        for label, model, ref_id in checks:
            if not await self._reference_exists(model, ref_id):
                raise ResourceNotFoundException(label, ref_id or "")

    async def list_all(self, vendor_id: str | None = None) -> list[ProductResult]:
        stmt = select(Product).order_by(Product.created_at.desc(), Product.id)
        if vendor_id is not None:
            stmt = stmt.where(Product.vendor_id == vendor_id)
        return await self.list_results(stmt)

    async def list_page(
        self, params: PageParams, vendor_id: str | None = None
    ) -> Page[ProductResult]:
        stmt = select(Product)
        if vendor_id is not None:
            stmt = stmt.where(Product.vendor_id == vendor_id)
        if params.search:
            pattern = contains_pattern(params.search)
            stmt = stmt.where(
                or_(
                    Product.name.ilike(pattern, escape="\\"),
                    Product.description.ilike(pattern, escape="\\"),
                )
            )
        return await self.paginate(
            stmt,
            params,
            {
                "name": Product.name,
                "net_price": Product.net_price,
                "mrp": Product.mrp,
                "quantity": Product.quantity,
                "created_at": Product.created_at,
                "updated_at": Product.updated_at,
            },
        )

    async def inventory_stats(self, vendor_id: str) -> InventoryStats:
        """Aggregate stock metrics for one vendor in a single pass plus a detail query."""
        totals = (
            await self.db.execute(
                select(
                    func.count(Product.id),
                    func.coalesce(
                        func.sum(case((Product.quantity < LOW_STOCK_THRESHOLD, 1), else_=0)), 0
                    ),
                    func.coalesce(func.sum(case((Product.quantity == 0, 1), else_=0)), 0),
                    func.coalesce(func.sum(Product.quantity * Product.net_price), 0.0),
                ).where(Product.vendor_id == vendor_id)
            )
        ).one()
        low_stock = await self.db.execute(
            select(Product.id, Product.name, Product.quantity)
            .where(Product.vendor_id == vendor_id, Product.quantity < LOW_STOCK_THRESHOLD)
            .order_by(Product.quantity, Product.name)
        )
        return InventoryStats(
            vendor_id=vendor_id,
            total_products=int(totals[0]),
            low_stock_products=int(totals[1]),
            out_of_stock_products=int(totals[2]),
            inventory_value_total=float(totals[3]),
            low_stock_product_details=[
                LowStockProduct(product_id=row.id, name=row.name, quantity=row.quantity)
                for row in low_stock
            ],
        )
