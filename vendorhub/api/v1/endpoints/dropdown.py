"""Dropdown API: category trees and attributes for product forms."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import get_dropdown_service
from vendorhub.application.dtos.catalog import DropdownResult
from vendorhub.application.services import DropdownService
from vendorhub.schemas.common import Envelope, ok

router = APIRouter()


@router.get("", response_model=Envelope[DropdownResult])
async def get_dropdown(
    service: Annotated[DropdownService, Depends(get_dropdown_service)],
):
    return ok(await service.get_dropdown())
