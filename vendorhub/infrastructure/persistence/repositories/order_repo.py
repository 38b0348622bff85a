"""Order repository: order writes with stock reservation, listings and dashboard queries."""

from datetime import datetime

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vendorhub.application.dtos.order import OrderItemInput, OrderResult
from vendorhub.domain.enums import OrderStatus
from vendorhub.domain.exceptions import ResourceNotFoundException, ValidationException
from vendorhub.infrastructure.persistence.models import Order, OrderItem, Product, User
from vendorhub.infrastructure.persistence.repositories.base import BaseRepository
from vendorhub.infrastructure.persistence.repositories.mappers import order_to_result
from vendorhub.shared.utils.generators import generate_order_number


def _has_vendor_item(vendor_id: str):
    return Order.items.any(OrderItem.vendor_id == vendor_id)


class OrderRepository(BaseRepository[Order, OrderResult]):
    """Order persistence. Creating and cancelling orders moves product stock."""

    resource_type = "order"
    unique_field = "order_number"

    def __init__(self, db: AsyncSession) -> None:
        super().__init__(db, Order)

    def _to_result(self, obj: Order) -> OrderResult:
        return order_to_result(obj)

    async def get_by_number(self, order_number: str) -> OrderResult | None:
        result = await self.db.execute(select(Order).where(Order.order_number == order_number))
        order = result.scalar_one_or_none()
        return self._to_result(order) if order else None

    async def list_filtered(
        self,
        vendor_id: str | None = None,
        user_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[OrderResult]:
        stmt = select(Order).order_by(Order.created_at.desc(), Order.id)
        if vendor_id is not None:
            stmt = stmt.where(_has_vendor_item(vendor_id))
        if user_id is not None:
            stmt = stmt.where(Order.user_id == user_id)
        if status is not None:
            stmt = stmt.where(Order.status == status.value)
        return await self.list_results(stmt)

    async def create_order(
        self, user_id: str, items: list[OrderItemInput]
    ) -> OrderResult:
        """Create an order, snapshot product data and decrement stock.

        Raises:
            ResourceNotFoundException: Unknown user or product.
            ValidationException: Empty order, bad quantity or insufficient stock.
        """
        if not items:
            raise ValidationException("Order must contain at least one item", "items")
        if not await self._reference_exists(User, user_id):
            raise ResourceNotFoundException("user", user_id)
        requested: dict[str, int] = {}
        for item in items:
            if item.quantity < 1:
                raise ValidationException("Quantity must be at least 1", "items")
            requested[item.product_id] = requested.get(item.product_id, 0) + item.quantity

        result = await self.db.execute(select(Product).where(Product.id.in_(list(requested))))
        products = {p.id: p for p in result.scalars().all()}
        for product_id, quantity in requested.items():
            product = products.get(product_id)
            if product is None or not product.is_active:
                raise ResourceNotFoundException("product", product_id)
            if product.quantity < quantity:
                raise ValidationException(
                    f"Insufficient stock for {product.name}: {product.quantity} left",
                    "items",
                )

        order = Order(order_number=generate_order_number(), user_id=user_id)
        total = 0.0
        for product_id, quantity in requested.items():
            product = products[product_id]
            product.quantity -= quantity
            total += product.net_price * quantity
            order.items.append(
                OrderItem(
                    product_id=product.id,
                    vendor_id=product.vendor_id,
                    product_name=product.name,
                    price=product.net_price,
                    quantity=quantity,
                )
            )
        order.total = round(total, 2)
        return self._to_result(await self.create(order, {"order_number": order.order_number}))

    async def set_status(self, order_id: str, status: OrderStatus) -> OrderResult | None:
        return await self.update_fields(order_id, {"status": status.value})

    async def restock(self, order_id: str) -> None:
        """Return every line's quantity to its product (products deleted since are skipped)."""
        order = await self.get_entity(order_id)
        if order is None:
            return
        result = await self.db.execute(
            select(Product).where(Product.id.in_(list({i.product_id for i in order.items})))
        )
        products = {p.id: p for p in result.scalars().all()}
        for item in order.items:
            product = products.get(item.product_id)
            if product is not None:
                product.quantity += item.quantity
        await self.db.flush()

    async def vendor_orders(
        self,
        vendor_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[OrderResult]:
        """Orders with at least one line from vendor_id created in [start, end)."""
        stmt = select(Order).where(_has_vendor_item(vendor_id)).order_by(Order.created_at)
        if start is not None:
            stmt = stmt.where(Order.created_at >= start)
        if end is not None:
            stmt = stmt.where(Order.created_at < end)
        return await self.list_results(stmt)

    async def status_counts(
        self,
        vendor_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> dict[str, int]:
        """Number of vendor orders per status in [start, end)."""
        stmt = (
            select(Order.status, func.count(Order.id))
            .where(_has_vendor_item(vendor_id))
            .group_by(Order.status)
        )
        if start is not None:
            stmt = stmt.where(Order.created_at >= start)
        if end is not None:
            stmt = stmt.where(Order.created_at < end)
        result = await self.db.execute(stmt)
        return {status: int(count) for status, count in result.all()}
