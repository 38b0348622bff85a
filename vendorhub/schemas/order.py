"""Order API schemas."""

from pydantic import BaseModel, Field

from vendorhub.domain.enums import OrderStatus


class OrderItemCreate(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1)


class OrderCreate(BaseModel):
    """Request body for placing an order."""

    user_id: str = Field(..., min_length=1)
    items: list[OrderItemCreate] = Field(..., min_length=1, max_length=100)


class OrderStatusUpdate(BaseModel):
    """Request body for PATCH /orders/{id}/status."""

    status: OrderStatus
