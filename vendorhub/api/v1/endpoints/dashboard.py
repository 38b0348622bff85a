"""Vendor dashboard API: sales, order status and inventory metrics, bulk refresh."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from vendorhub.api.v1.dependencies import EntityId, get_dashboard_service
from vendorhub.application.dtos.dashboard import (
    InventoryStats,
    OrderStatusBreakdown,
    SalesSummary,
)
from vendorhub.application.services import DashboardService
from vendorhub.schemas.common import Envelope, ok

router = APIRouter()

Service = Annotated[DashboardService, Depends(get_dashboard_service)]
Month = Annotated[int | None, Query(ge=1, le=12)]
Year = Annotated[int | None, Query(ge=1970, le=9999)]


@router.get("/{vendor_id}/sales", response_model=Envelope[SalesSummary])
async def get_sales_summary(
    vendor_id: EntityId, service: Service, month: Month = None, year: Year = None
):
    """Revenue metrics for one month (month and year) or for all time (neither)."""
    return ok(await service.get_sales_summary(vendor_id, month, year))


@router.get("/{vendor_id}/order-status", response_model=Envelope[OrderStatusBreakdown])
async def get_order_status_breakdown(
    vendor_id: EntityId, service: Service, month: Month = None, year: Year = None
):
    return ok(await service.get_order_status_breakdown(vendor_id, month, year))


@router.get("/{vendor_id}/inventory", response_model=Envelope[InventoryStats])
async def get_inventory_stats(vendor_id: EntityId, service: Service):
    return ok(await service.get_inventory_stats(vendor_id))


@router.post("/{vendor_id}/invalidate", response_model=Envelope[dict[str, int]])
async def invalidate_dashboard(vendor_id: EntityId, service: Service):
    """Drop every cached dashboard metric of the vendor."""
    deleted = await service.invalidate_all_dashboard_caches(vendor_id)
    return ok({"deleted": deleted})
