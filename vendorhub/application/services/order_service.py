"""Order application service: coarse order caching with dashboard and stock fan-out."""

from __future__ import annotations

import logging
from typing import Any

from pydantic import TypeAdapter

from vendorhub.application.dtos.order import OrderItemInput, OrderResult
from vendorhub.application.services.dashboard_service import DashboardService
from vendorhub.core.constants import CACHE_PREFIX_ORDERS, CACHE_PREFIX_PRODUCTS
from vendorhub.domain.enums import OrderStatus
from vendorhub.domain.exceptions import ResourceNotFoundException
from vendorhub.infrastructure.cache import EntityCache
from vendorhub.infrastructure.cache import keys

logger = logging.getLogger(__name__)

_ORDER = TypeAdapter(OrderResult)
_ORDER_LIST = TypeAdapter(list[OrderResult])


class OrderService:
    """Customer orders.

    Every write drops the orders namespace and the sales and order-status
    metrics of each vendor with a line in the order. Writes that move stock
    (create, cancel) also drop products and those vendors' inventory.
    """

    def __init__(
        self,
        order_repo: Any,
        cache: EntityCache,
        dashboard: DashboardService | None = None,
    ) -> None:
        self._order_repo = order_repo
        self._cache = cache
        self._dashboard = dashboard

    async def _invalidate(self, order: OrderResult, *, stock_moved: bool) -> None:
        await self._cache.invalidate()
        if stock_moved:
            await self._cache.invalidate_namespace(CACHE_PREFIX_PRODUCTS, cascade=False)
        if self._dashboard is None:
            return
        for vendor_id in order.vendor_ids:
            await self._dashboard.on_order_change(vendor_id)
            if stock_moved:
                await self._dashboard.on_product_change(vendor_id)

    async def create_order(self, user_id: str, items: list[OrderItemInput]) -> OrderResult:
        """Place an order: snapshot product data and decrement stock.

        Raises:
            ResourceNotFoundException: Unknown user or product.
            ValidationException: Empty order, bad quantity or insufficient stock.
        """
        created = await self._order_repo.create_order(user_id, items)
        await self._order_repo.commit()
        logger.info(
            "Order %s created for user %s (%d lines)",
            created.order_number,
            user_id,
            len(created.items),
        )
        await self._invalidate(created, stock_moved=True)
        return created

    async def get_order(self, order_id: str) -> OrderResult:
        result = await self._cache.fetch(
            keys.entity_key(CACHE_PREFIX_ORDERS, order_id),
            _ORDER,
            lambda: self._order_repo.get(order_id),
        )
        if result is None:
            raise ResourceNotFoundException("order", order_id)
        return result

    async def get_order_by_number(self, order_number: str) -> OrderResult:
        result = await self._cache.fetch(
            keys.order_number_key(order_number),
            _ORDER,
            lambda: self._order_repo.get_by_number(order_number),
        )
        if result is None:
            raise ResourceNotFoundException("order", order_number)
        return result

    async def list_orders(
        self,
        vendor_id: str | None = None,
        user_id: str | None = None,
        status: OrderStatus | None = None,
    ) -> list[OrderResult]:
        """Orders filtered by vendor (any line), user and status; newest first."""
        return await self._cache.fetch(
            keys.order_list_key(vendor_id, user_id, status.value if status else None),
            _ORDER_LIST,
            lambda: self._order_repo.list_filtered(vendor_id, user_id, status),
        )

    async def update_order_status(self, order_id: str, status: OrderStatus) -> OrderResult:
        """Set the order status. Moving into cancelled returns the stock."""
        status = OrderStatus(status)
        current = await self._order_repo.get(order_id)
        if current is None:
            raise ResourceNotFoundException("order", order_id)
        if current.status is status:
            return current
        restock = status is OrderStatus.CANCELLED
        if restock:
            await self._order_repo.restock(order_id)
        updated = await self._order_repo.set_status(order_id, status)
        await self._order_repo.commit()
        await self._invalidate(updated, stock_moved=restock)
        return updated

    async def cancel_order(self, order_id: str) -> OrderResult:
        return await self.update_order_status(order_id, OrderStatus.CANCELLED)

    async def delete_order(self, order_id: str) -> OrderResult:
        deleted = await self._order_repo.delete_by_id(order_id)
        if deleted is None:
            raise ResourceNotFoundException("order", order_id)
        await self._order_repo.commit()
        await self._invalidate(deleted, stock_moved=False)
        return deleted
