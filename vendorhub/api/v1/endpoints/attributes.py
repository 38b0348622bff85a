"""Attributes API: list (paginated and all), get, create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import EntityId, PageParamsDep, get_attribute_service
from vendorhub.application.dtos.catalog import AttributeResult
from vendorhub.application.services import AttributeService
from vendorhub.schemas.catalog import AttributeCreate, AttributeUpdate
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated

router = APIRouter()

Service = Annotated[AttributeService, Depends(get_attribute_service)]


@router.post("", response_model=Envelope[AttributeResult], status_code=201)
async def create_attribute(body: AttributeCreate, service: Service):
    return ok(await service.create_attribute(body.name, body.is_active))


@router.get("", response_model=PageEnvelope[AttributeResult])
async def list_attributes(params: PageParamsDep, service: Service):
    """Paginated attributes; search on name."""
    return paginated(await service.list_attributes(params))


@router.get("/all", response_model=Envelope[list[AttributeResult]])
async def list_all_attributes(service: Service):
    return ok(await service.list_all_attributes())


@router.get("/{attribute_id}", response_model=Envelope[AttributeResult])
async def get_attribute(attribute_id: EntityId, service: Service):
    return ok(await service.get_attribute(attribute_id))


@router.patch("/{attribute_id}", response_model=Envelope[AttributeResult])
async def update_attribute(attribute_id: EntityId, body: AttributeUpdate, service: Service):
    return ok(await service.update_attribute(attribute_id, body.name, body.is_active))


@router.delete("/{attribute_id}", response_model=Envelope[AttributeResult])
async def delete_attribute(attribute_id: EntityId, service: Service):
    return ok(await service.delete_attribute(attribute_id))
