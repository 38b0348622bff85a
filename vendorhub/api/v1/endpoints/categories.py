"""Categories API: parent, primary and secondary levels under /categories."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import (
    EntityId,
    PageParamsDep,
    ParentScope,
    PrimaryScope,
    get_parent_category_service,
    get_primary_category_service,
    get_secondary_category_service,
)
from vendorhub.application.dtos.catalog import (
    ParentCategoryResult,
    PrimaryCategoryResult,
    SecondaryCategoryResult,
)
from vendorhub.application.services import (
    ParentCategoryService,
    PrimaryCategoryService,
    SecondaryCategoryService,
)
from vendorhub.schemas.catalog import (
    ParentCategoryCreate,
    ParentCategoryUpdate,
    PrimaryCategoryCreate,
    PrimaryCategoryUpdate,
    SecondaryCategoryCreate,
    SecondaryCategoryUpdate,
)
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated

router = APIRouter()

ParentService = Annotated[ParentCategoryService, Depends(get_parent_category_service)]
PrimaryService = Annotated[PrimaryCategoryService, Depends(get_primary_category_service)]
SecondaryService = Annotated[
    SecondaryCategoryService, Depends(get_secondary_category_service)
]


# ---- Parent ----
@router.post("/parent", response_model=Envelope[ParentCategoryResult], status_code=201)
async def create_parent_category(body: ParentCategoryCreate, service: ParentService):
    return ok(await service.create_parent_category(**body.model_dump()))


@router.get("/parent", response_model=PageEnvelope[ParentCategoryResult])
async def list_parent_categories(params: PageParamsDep, service: ParentService):
    return paginated(await service.list_parent_categories(params))


@router.get("/parent/all", response_model=Envelope[list[ParentCategoryResult]])
async def list_all_parent_categories(service: ParentService):
    return ok(await service.list_all_parent_categories())


@router.get("/parent/{category_id}", response_model=Envelope[ParentCategoryResult])
async def get_parent_category(category_id: EntityId, service: ParentService):
    return ok(await service.get_parent_category(category_id))


@router.patch("/parent/{category_id}", response_model=Envelope[ParentCategoryResult])
async def update_parent_category(
    category_id: EntityId, body: ParentCategoryUpdate, service: ParentService
):
    return ok(
        await service.update_parent_category(
            category_id, **body.model_dump(exclude_unset=True)
        )
    )


@router.delete("/parent/{category_id}", response_model=Envelope[ParentCategoryResult])
async def delete_parent_category(category_id: EntityId, service: ParentService):
    """Delete a parent category and everything below it."""
    return ok(await service.delete_parent_category(category_id))


# ---- Primary ----
@router.post("/primary", response_model=Envelope[PrimaryCategoryResult], status_code=201)
async def create_primary_category(body: PrimaryCategoryCreate, service: PrimaryService):
    return ok(await service.create_primary_category(**body.model_dump()))


@router.get("/primary", response_model=PageEnvelope[PrimaryCategoryResult])
async def list_primary_categories(
    params: PageParamsDep,
    service: PrimaryService,
    parent_category_id: ParentScope = None,
):
    return paginated(await service.list_primary_categories(params, parent_category_id))


@router.get("/primary/all", response_model=Envelope[list[PrimaryCategoryResult]])
async def list_all_primary_categories(service: PrimaryService):
    return ok(await service.list_all_primary_categories())


@router.get("/primary/{category_id}", response_model=Envelope[PrimaryCategoryResult])
async def get_primary_category(category_id: EntityId, service: PrimaryService):
    return ok(await service.get_primary_category(category_id))


@router.patch("/primary/{category_id}", response_model=Envelope[PrimaryCategoryResult])
async def update_primary_category(
    category_id: EntityId, body: PrimaryCategoryUpdate, service: PrimaryService
):
    return ok(
        await service.update_primary_category(
            category_id, **body.model_dump(exclude_unset=True)
        )
    )


@router.delete("/primary/{category_id}", response_model=Envelope[PrimaryCategoryResult])
async def delete_primary_category(category_id: EntityId, service: PrimaryService):
    return ok(await service.delete_primary_category(category_id))


# ---- Secondary ----
@router.post(
    "/secondary", response_model=Envelope[SecondaryCategoryResult], status_code=201
)
async def create_secondary_category(
    body: SecondaryCategoryCreate, service: SecondaryService
):
    return ok(await service.create_secondary_category(**body.model_dump()))


@router.get("/secondary", response_model=PageEnvelope[SecondaryCategoryResult])
async def list_secondary_categories(
    params: PageParamsDep,
    service: SecondaryService,
    parent_category_id: ParentScope = None,
    primary_category_id: PrimaryScope = None,
):
    """Paginated secondary categories; search also covers parent, primary and attribute names."""
    return paginated(
        await service.list_secondary_categories(
            params, parent_category_id, primary_category_id
        )
    )


@router.get("/secondary/all", response_model=Envelope[list[SecondaryCategoryResult]])
async def list_all_secondary_categories(service: SecondaryService):
    return ok(await service.list_all_secondary_categories())


@router.get(
    "/secondary/{category_id}", response_model=Envelope[SecondaryCategoryResult]
)
async def get_secondary_category(category_id: EntityId, service: SecondaryService):
    return ok(await service.get_secondary_category(category_id))


@router.patch(
    "/secondary/{category_id}", response_model=Envelope[SecondaryCategoryResult]
)
async def update_secondary_category(
    category_id: EntityId, body: SecondaryCategoryUpdate, service: SecondaryService
):
    return ok(
        await service.update_secondary_category(
            category_id, **body.model_dump(exclude_unset=True)
        )
    )


@router.delete(
    "/secondary/{category_id}", response_model=Envelope[SecondaryCategoryResult]
)
async def delete_secondary_category(category_id: EntityId, service: SecondaryService):
    return ok(await service.delete_secondary_category(category_id))
