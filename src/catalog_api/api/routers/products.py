"""
catalog_api.api.routers.products

Product endpoints. Every route requires Basic auth; id-addressed routes are
restricted to the product's owner.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Header, Request, Response
from starlette.status import HTTP_201_CREATED, HTTP_204_NO_CONTENT

from catalog_api.api.deps import product_service
from catalog_api.schemas import ProductOut
from catalog_api.services.products import ProductService

router = APIRouter(prefix="/v1/product", tags=["products"])


@router.post("", status_code=HTTP_201_CREATED, response_model=ProductOut)
async def create_product(
    request: Request,
    authorization: str | None = Header(default=None),
    service: ProductService = Depends(product_service),
) -> ProductOut:
    return await service.create(authorization, await request.body())


@router.get("/{product_id}", response_model=ProductOut)
async def get_product(
    product_id: str,
    authorization: str | None = Header(default=None),
    service: ProductService = Depends(product_service),
) -> ProductOut:
    return await service.get(product_id, authorization)


@router.put("/{product_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def replace_product(
    request: Request,
    product_id: str,
    authorization: str | None = Header(default=None),
    service: ProductService = Depends(product_service),
) -> Response:
    await service.replace(product_id, authorization, await request.body())
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.patch("/{product_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def merge_product(
    request: Request,
    product_id: str,
    authorization: str | None = Header(default=None),
    service: ProductService = Depends(product_service),
) -> Response:
    await service.merge(product_id, authorization, await request.body())
    return Response(status_code=HTTP_204_NO_CONTENT)


@router.delete("/{product_id}", status_code=HTTP_204_NO_CONTENT, response_class=Response)
async def delete_product(
    product_id: str,
    authorization: str | None = Header(default=None),
    service: ProductService = Depends(product_service),
) -> Response:
    await service.delete(product_id, authorization)
    return Response(status_code=HTTP_204_NO_CONTENT)


# --- Module Notes -----------------------------------------------------------
# Bodies are passed through as bytes; JSON decoding happens in the service at
# the validation step so a bad body never masks a 401/403/404.
