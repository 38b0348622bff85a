"""Blogs API: listings (all vendors or one), get, publish, owner-scoped edit, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends

from vendorhub.api.v1.dependencies import (
    EntityId,
    PageParamsDep,
    VendorScope,
    get_blog_service,
)
from vendorhub.application.dtos.blog import BlogResult
from vendorhub.application.services import BlogService
from vendorhub.schemas.blog import BlogCreate, BlogUpdate
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated

router = APIRouter()

Service = Annotated[BlogService, Depends(get_blog_service)]


@router.post("", response_model=Envelope[BlogResult], status_code=201)
async def create_blog(body: BlogCreate, service: Service):
    return ok(await service.create_blog(**body.model_dump()))


@router.get("", response_model=PageEnvelope[BlogResult])
async def list_blogs(params: PageParamsDep, service: Service, vendor_id: VendorScope = None):
    """Paginated posts, optionally of one vendor; search on heading, description, category and author."""
    return paginated(await service.list_blogs(params, vendor_id=vendor_id))


@router.get("/all", response_model=Envelope[list[BlogResult]])
async def list_all_blogs(service: Service, vendor_id: VendorScope = None):
    return ok(await service.list_all_blogs(vendor_id))


@router.get("/{blog_id}", response_model=Envelope[BlogResult])
async def get_blog(blog_id: EntityId, service: Service):
    return ok(await service.get_blog(blog_id))


@router.patch("/{blog_id}", response_model=Envelope[BlogResult])
async def update_blog(
    blog_id: EntityId, body: BlogUpdate, service: Service, vendor_id: VendorScope = None
):
    """Edit a post of vendor_id (omit vendor_id for marketplace posts)."""
    return ok(
        await service.update_blog(blog_id, vendor_id, **body.model_dump(exclude_unset=True))
    )


@router.delete("/{blog_id}", response_model=Envelope[BlogResult])
async def delete_blog(blog_id: EntityId, service: Service):
    return ok(await service.delete_blog(blog_id))
