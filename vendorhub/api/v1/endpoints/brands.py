"""Brands API: list (paginated and all), get, create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import EntityId, PageParamsDep, get_brand_service
from vendorhub.application.dtos.catalog import BrandResult
from vendorhub.application.services import BrandService
from vendorhub.schemas.catalog import BrandCreate, BrandUpdate
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated

router = APIRouter()

Service = Annotated[BrandService, Depends(get_brand_service)]


@router.post("", response_model=Envelope[BrandResult], status_code=201)
async def create_brand(body: BrandCreate, service: Service):
    return ok(await service.create_brand(**body.model_dump()))


@router.get("", response_model=PageEnvelope[BrandResult])
async def list_brands(params: PageParamsDep, service: Service):
    """Paginated brands; search on name and SEO fields."""
    return paginated(await service.list_brands(params))


@router.get("/all", response_model=Envelope[list[BrandResult]])
async def list_all_brands(service: Service):
    return ok(await service.list_all_brands())


@router.get("/{brand_id}", response_model=Envelope[BrandResult])
async def get_brand(brand_id: EntityId, service: Service):
    return ok(await service.get_brand(brand_id))


@router.patch("/{brand_id}", response_model=Envelope[BrandResult])
async def update_brand(brand_id: EntityId, body: BrandUpdate, service: Service):
    return ok(await service.update_brand(brand_id, **body.model_dump(exclude_unset=True)))


@router.delete("/{brand_id}", response_model=Envelope[BrandResult])
async def delete_brand(brand_id: EntityId, service: Service):
    return ok(await service.delete_brand(brand_id))
