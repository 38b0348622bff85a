"""Sizes API: list (paginated and all), get, create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import EntityId, PageParamsDep, get_size_service
from vendorhub.application.dtos.catalog import SizeResult
from vendorhub.application.services import SizeService
from vendorhub.schemas.catalog import SizeCreate, SizeUpdate
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated

router = APIRouter()

Service = Annotated[SizeService, Depends(get_size_service)]


@router.post("", response_model=Envelope[SizeResult], status_code=201)
async def create_size(body: SizeCreate, service: Service):
    return ok(await service.create_size(**body.model_dump()))


@router.get("", response_model=PageEnvelope[SizeResult])
async def list_sizes(params: PageParamsDep, service: Service):
    """Paginated sizes; search on label and value."""
    return paginated(await service.list_sizes(params))


@router.get("/all", response_model=Envelope[list[SizeResult]])
async def list_all_sizes(service: Service):
    return ok(await service.list_all_sizes())


@router.get("/{size_id}", response_model=Envelope[SizeResult])
async def get_size(size_id: EntityId, service: Service):
    return ok(await service.get_size(size_id))


@router.patch("/{size_id}", response_model=Envelope[SizeResult])
async def update_size(size_id: EntityId, body: SizeUpdate, service: Service):
    return ok(await service.update_size(size_id, **body.model_dump(exclude_unset=True)))


@router.delete("/{size_id}", response_model=Envelope[SizeResult])
async def delete_size(size_id: EntityId, service: Service):
    return ok(await service.delete_size(size_id))
