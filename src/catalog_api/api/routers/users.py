"""
catalog_api.api.routers.users

Account endpoints.

Responsibilities:
- POST /v1/user (public signup).
- GET/PUT /v1/user/{user_id} (Basic auth, own account only).
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from catalog_api.api.deps import user_service
from catalog_api.schemas import UserOut
from catalog_api.services.users import UserService

router = APIRouter(prefix="/v1/user", tags=["users"])


@router.post("", status_code=HTTP_201_CREATED, response_model=UserOut)
async def create_user(
    request: Request,
    service: UserService = Depends(user_service),
) -> UserOut:
    return await service.create(await request.body())


@router.get("/{user_id}", response_model=UserOut)
async def get_user(
    user_id: str,
    authorization: str | None = Header(default=None),
    service: UserService = Depends(user_service),
) -> UserOut:
    return await service.get(user_id, authorization)


@router.put("/{user_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def replace_user(
    request: Request,
    user_id: str,
    authorization: str | None = Header(default=None),
    service: UserService = Depends(user_service),
) -> Response:
    await service.replace(user_id, authorization, await request.body())
    return Response(status_code=HTTP_204_NO_CONTENT)
