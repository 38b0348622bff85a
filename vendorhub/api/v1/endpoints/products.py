"""Products API: list (paginated and legacy), get, create, update, stock, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import (
    EntityId,
    PageParamsDep,
    VendorScope,
    get_product_service,
)
from vendorhub.application.dtos.product import ProductResult
from vendorhub.application.services import ProductService
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated
from vendorhub.schemas.product import ProductCreate, ProductUpdate, StockUpdate

router = APIRouter()

Service = Annotated[ProductService, Depends(get_product_service)]


@router.post("", response_model=Envelope[ProductResult], status_code=201)
async def create_product(body: ProductCreate, service: Service):
    return ok(await service.create_product(**body.model_dump()))


@router.get("", response_model=PageEnvelope[ProductResult])
async def list_products_paginated(
    params: PageParamsDep, service: Service, vendor_id: VendorScope = None
):
    """Paginated products, optionally for one vendor; search on name and description."""
    return paginated(await service.list_products_paginated(params, vendor_id))


@router.get("/all", response_model=Envelope[list[ProductResult]])
async def list_products(service: Service, vendor_id: VendorScope = None):
    return ok(await service.list_products(vendor_id))


@router.get("/{product_id}", response_model=Envelope[ProductResult])
async def get_product(product_id: EntityId, service: Service):
    return ok(await service.get_product(product_id))


@router.patch("/{product_id}", response_model=Envelope[ProductResult])
async def update_product(product_id: EntityId, body: ProductUpdate, service: Service):
    return ok(
        await service.update_product(product_id, **body.model_dump(exclude_unset=True))
    )


@router.patch("/{product_id}/stock", response_model=Envelope[ProductResult])
async def update_stock(product_id: EntityId, body: StockUpdate, service: Service):
    return ok(await service.update_stock(product_id, body.quantity))


@router.delete("/{product_id}", response_model=Envelope[ProductResult])
async def delete_product(product_id: EntityId, service: Service):
    return ok(await service.delete_product(product_id))
