"""DTOs for products."""

from dataclasses import dataclass
from datetime import datetime

from vendorhub.application.dtos.catalog import NamedRef


@dataclass(frozen=True)
class ProductResult:
    """Product read-model with brand and category names flattened in."""

    id: str
    vendor_id: str
    name: str
    mrp: float
    net_price: float
    quantity: int
    is_active: bool
    description: str | None = None
    brand: NamedRef | None = None
    parent_category: NamedRef | None = None
    primary_category: NamedRef | None = None
    secondary_category: NamedRef | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
