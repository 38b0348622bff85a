"""Vendors API: list, get (by id or email), create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from vendorhub.api.v1.dependencies import EntityId, get_vendor_service
from vendorhub.application.dtos.account import VendorResult
from vendorhub.application.services import VendorService
from vendorhub.schemas.account import VendorCreate, VendorUpdate
from vendorhub.schemas.common import Envelope, ok

router = APIRouter()

Service = Annotated[VendorService, Depends(get_vendor_service)]


@router.post("", response_model=Envelope[VendorResult], status_code=201)
async def create_vendor(body: VendorCreate, service: Service):
    return ok(await service.create_vendor(**body.model_dump()))


@router.get("", response_model=Envelope[list[VendorResult]])
async def list_vendors(service: Service):
    return ok(await service.list_vendors())


@router.get("/by-email/{email}", response_model=Envelope[VendorResult])
async def get_vendor_by_email(
    email: Annotated[str, Path(min_length=3, max_length=255)], service: Service
):
    return ok(await service.get_vendor_by_email(email))


@router.get("/{vendor_id}", response_model=Envelope[VendorResult])
async def get_vendor(vendor_id: EntityId, service: Service):
    return ok(await service.get_vendor(vendor_id))


@router.patch("/{vendor_id}", response_model=Envelope[VendorResult])
async def update_vendor(vendor_id: EntityId, body: VendorUpdate, service: Service):
    return ok(await service.update_vendor(vendor_id, **body.model_dump(exclude_unset=True)))


@router.delete("/{vendor_id}", response_model=Envelope[VendorResult])
async def delete_vendor(vendor_id: EntityId, service: Service):
    """Delete a vendor with its products, discounts and referrals."""
    return ok(await service.delete_vendor(vendor_id))
