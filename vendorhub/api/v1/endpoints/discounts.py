"""Discounts API: admin and vendor listings, public storefront listing, CRUD."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import EntityId, PageParamsDep, get_discount_service
from vendorhub.application.dtos.discount import DiscountResult
from vendorhub.application.services import DiscountService
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated
from vendorhub.schemas.discount import DiscountCreate, DiscountUpdate

router = APIRouter()

Service = Annotated[DiscountService, Depends(get_discount_service)]


@router.post("", response_model=Envelope[DiscountResult], status_code=201)
async def create_discount(body: DiscountCreate, service: Service):
    return ok(await service.create_discount(**body.model_dump()))


@router.get("", response_model=PageEnvelope[DiscountResult])
async def list_discounts(params: PageParamsDep, service: Service):
    """Admin view: discounts of every vendor."""
    return paginated(await service.list_discounts(params))


@router.get("/public", response_model=Envelope[list[DiscountResult]])
async def list_public_discounts(service: Service):
    """Discounts that are active and inside their date window right now."""
    return ok(await service.list_public_discounts())


@router.get("/vendor/{vendor_id}", response_model=PageEnvelope[DiscountResult])
async def list_vendor_discounts(
    vendor_id: EntityId, params: PageParamsDep, service: Service
):
    return paginated(await service.list_vendor_discounts(vendor_id, params))


@router.get("/{discount_id}", response_model=Envelope[DiscountResult])
async def get_discount(discount_id: EntityId, service: Service):
    return ok(await service.get_discount(discount_id))


@router.patch("/{discount_id}", response_model=Envelope[DiscountResult])
async def update_discount(discount_id: EntityId, body: DiscountUpdate, service: Service):
    return ok(
        await service.update_discount(discount_id, **body.model_dump(exclude_unset=True))
    )


@router.delete("/{discount_id}", response_model=Envelope[DiscountResult])
async def delete_discount(discount_id: EntityId, service: Service):
    return ok(await service.delete_discount(discount_id))
