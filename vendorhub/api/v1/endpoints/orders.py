"""Orders API: place, list, get (by id or number), status changes, cancel, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from vendorhub.api.v1.dependencies import (
    EntityId,
    UserScope,
    VendorScope,
    get_order_service,
)
from vendorhub.application.dtos.order import OrderItemInput, OrderResult
from vendorhub.application.services import OrderService
from vendorhub.domain.enums import OrderStatus
from vendorhub.schemas.common import Envelope, ok
from vendorhub.schemas.order import OrderCreate, OrderStatusUpdate

router = APIRouter()

Service = Annotated[OrderService, Depends(get_order_service)]


@router.post("", response_model=Envelope[OrderResult], status_code=201)
async def create_order(body: OrderCreate, service: Service):
    """Place an order; stock is reserved immediately."""
    items = [OrderItemInput(product_id=i.product_id, quantity=i.quantity) for i in body.items]
    return ok(await service.create_order(body.user_id, items))


@router.get("", response_model=Envelope[list[OrderResult]])
async def list_orders(
    service: Service,
    vendor_id: VendorScope = None,
    user_id: UserScope = None,
    status: OrderStatus | None = None,
):
    return ok(await service.list_orders(vendor_id, user_id, status))


@router.get("/number/{order_number}", response_model=Envelope[OrderResult])
async def get_order_by_number(
    order_number: Annotated[str, Path(min_length=1, max_length=32)], service: Service
):
    return ok(await service.get_order_by_number(order_number))


@router.get("/{order_id}", response_model=Envelope[OrderResult])
async def get_order(order_id: EntityId, service: Service):
    return ok(await service.get_order(order_id))


@router.patch("/{order_id}/status", response_model=Envelope[OrderResult])
async def update_order_status(
    order_id: EntityId, body: OrderStatusUpdate, service: Service
):
    return ok(await service.update_order_status(order_id, body.status))


@router.post("/{order_id}/cancel", response_model=Envelope[OrderResult])
async def cancel_order(order_id: EntityId, service: Service):
    """Cancel an order and return its stock."""
    return ok(await service.cancel_order(order_id))


@router.delete("/{order_id}", response_model=Envelope[OrderResult])
async def delete_order(order_id: EntityId, service: Service):
    return ok(await service.delete_order(order_id))
