"""Banks API: bank directory search and IFSC lookups."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from vendorhub.api.v1.dependencies import get_bank_service
from vendorhub.application.dtos.bank import BankResult, IfscDetails
from vendorhub.application.services import BankService
from vendorhub.schemas.common import Envelope, ok

router = APIRouter()

Service = Annotated[BankService, Depends(get_bank_service)]
IfscCode = Annotated[str, Path(min_length=11, max_length=11)]


@router.get("", response_model=Envelope[list[BankResult]])
async def list_banks(
    service: Service,
    search: Annotated[str | None, Query(max_length=100)] = None,
):
    """All banks by name; a search of two or more characters filters on name, code and IFSC prefix."""
    return ok(await service.search_banks(search))


@router.get("/code/{code}", response_model=Envelope[BankResult])
async def get_bank_by_code(
    code: Annotated[str, Path(min_length=1, max_length=32)], service: Service
):
    return ok(await service.get_bank_by_code(code))


@router.get("/ifsc/{ifsc}", response_model=Envelope[BankResult])
async def get_bank_from_ifsc(ifsc: IfscCode, service: Service):
    return ok(await service.get_bank_from_ifsc(ifsc))


@router.get("/ifsc/{ifsc}/details", response_model=Envelope[IfscDetails])
async def validate_ifsc(ifsc: IfscCode, service: Service):
    """Branch details; 400 when the directory does not know the code."""
    return ok(await service.validate_ifsc(ifsc))
