"""Users API: list (paginated and all), get (by id or email), create, update, delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from vendorhub.api.v1.dependencies import EntityId, PageParamsDep, get_user_service
from vendorhub.application.dtos.account import UserResult
from vendorhub.application.services import UserService
from vendorhub.schemas.account import UserCreate, UserUpdate
from vendorhub.schemas.common import Envelope, PageEnvelope, ok, paginated

router = APIRouter()

Service = Annotated[UserService, Depends(get_user_service)]


@router.post("", response_model=Envelope[UserResult], status_code=201)
async def create_user(body: UserCreate, service: Service):
    return ok(await service.create_user(**body.model_dump()))


@router.get("", response_model=PageEnvelope[UserResult])
async def list_users(params: PageParamsDep, service: Service):
    """Paginated users; search on name, email and phone."""
    return paginated(await service.list_users(params))


@router.get("/all", response_model=Envelope[list[UserResult]])
async def list_all_users(service: Service):
    return ok(await service.list_all_users())


@router.get("/by-email/{email}", response_model=Envelope[UserResult])
async def get_user_by_email(
    email: Annotated[str, Path(min_length=3, max_length=255)], service: Service
):
    return ok(await service.get_user_by_email(email))


@router.get("/{user_id}", response_model=Envelope[UserResult])
async def get_user(user_id: EntityId, service: Service):
    return ok(await service.get_user(user_id))


@router.patch("/{user_id}", response_model=Envelope[UserResult])
async def update_user(user_id: EntityId, body: UserUpdate, service: Service):
    return ok(await service.update_user(user_id, **body.model_dump(exclude_unset=True)))


@router.delete("/{user_id}", response_model=Envelope[UserResult])
async def delete_user(user_id: EntityId, service: Service):
    return ok(await service.delete_user(user_id))
