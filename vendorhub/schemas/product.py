"""Product API schemas."""

from pydantic import BaseModel, Field


class ProductCreate(BaseModel):
    """Request body for creating a product."""

    vendor_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1, max_length=255)
    mrp: float = Field(..., ge=0)
    net_price: float = Field(..., ge=0)
    quantity: int = Field(default=0, ge=0)
    description: str | None = None
    brand_id: str | None = None
    parent_category_id: str | None = None
    primary_category_id: str | None = None
    secondary_category_id: str | None = None
    is_active: bool = True


class ProductUpdate(BaseModel):
    """Request body for updating a product (partial)."""

    vendor_id: str | None = Field(default=None, min_length=1)
    name: str | None = Field(default=None, min_length=1, max_length=255)
    mrp: float | None = Field(default=None, ge=0)
    net_price: float | None = Field(default=None, ge=0)
    quantity: int | None = Field(default=None, ge=0)
    description: str | None = None
    brand_id: str | None = None
    parent_category_id: str | None = None
    primary_category_id: str | None = None
    secondary_category_id: str | None = None
    is_active: bool | None = None


class StockUpdate(BaseModel):
    """Request body for PATCH /products/{id}/stock."""

    quantity: int = Field(..., ge=0)
