"""Referrals API: vendor programs, stats, lookup by code and redemption."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from vendorhub.api.v1.dependencies import EntityId, get_referral_service
from vendorhub.application.dtos.referral import (
    ReferralApplication,
    ReferralResult,
    ReferralStats,
)
from vendorhub.application.services import ReferralService
from vendorhub.schemas.common import Envelope, ok
from vendorhub.schemas.referral import ReferralApply, ReferralCreate, ReferralUpdate

router = APIRouter()

Service = Annotated[ReferralService, Depends(get_referral_service)]


@router.post("", response_model=Envelope[ReferralResult], status_code=201)
async def create_referral(body: ReferralCreate, service: Service):
    return ok(await service.create_referral(**body.model_dump()))


@router.post("/apply", response_model=Envelope[ReferralApplication])
async def apply_referral(body: ReferralApply, service: Service):
    """Redeem a code for a user: one more use and reward points credited."""
    return ok(await service.apply_referral(body.code, body.user_id))


@router.get("/code/{code}", response_model=Envelope[ReferralResult])
async def get_referral_by_code(
    code: Annotated[str, Path(min_length=1, max_length=64)], service: Service
):
    """Referral by code; 404 when unknown, inactive, expired or used up."""
    return ok(await service.get_referral_by_code(code))


@router.get("/vendor/{vendor_id}", response_model=Envelope[list[ReferralResult]])
async def list_vendor_referrals(vendor_id: EntityId, service: Service):
    return ok(await service.list_vendor_referrals(vendor_id))


@router.get("/vendor/{vendor_id}/stats", response_model=Envelope[ReferralStats])
async def get_referral_stats(vendor_id: EntityId, service: Service):
    return ok(await service.get_referral_stats(vendor_id))


@router.get("/{referral_id}", response_model=Envelope[ReferralResult])
async def get_referral(referral_id: EntityId, service: Service):
    return ok(await service.get_referral(referral_id))


@router.patch("/{referral_id}", response_model=Envelope[ReferralResult])
async def update_referral(referral_id: EntityId, body: ReferralUpdate, service: Service):
    return ok(
        await service.update_referral(referral_id, **body.model_dump(exclude_unset=True))
    )


@router.delete("/{referral_id}", response_model=Envelope[ReferralResult])
async def delete_referral(referral_id: EntityId, service: Service):
    return ok(await service.delete_referral(referral_id))
