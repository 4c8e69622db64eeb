"""
catalog_api.api.errors

Exception-to-response mapping.

Responsibilities:
- Frame service-layer errors (`catalog_api.services.errors`) as HTTP responses.
- Turn store failures on resource routes into 400s instead of 500s.
- Return empty bodies for routing errors (unknown path, wrong method).
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.status import HTTP_400_BAD_REQUEST

from catalog_api.observability.logging import get_logger
from catalog_api.services.errors import BadInput, ServiceError, Unauthenticated

log = get_logger(__name__)

BASIC_CHALLENGE = {"WWW-Authenticate": "Basic"}


def service_error_response(exc: ServiceError) -> Response:
    if isinstance(exc, BadInput):
        if exc.violations:
            return JSONResponse(status_code=exc.status_code, content={"errors": exc.violations})
        if exc.message:
            return JSONResponse(status_code=exc.status_code, content={"error": exc.message})
    if isinstance(exc, Unauthenticated):
        return Response(status_code=exc.status_code, headers=BASIC_CHALLENGE)
    return Response(status_code=exc.status_code)


async def _handle_service_error(_: Request, exc: ServiceError) -> Response:
    return service_error_response(exc)


async def _handle_store_error(_: Request, exc: SQLAlchemyError) -> Response:
    # No partial writes are possible: each handler commits at most once.
    log.error("store_error", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"error": "Request could not be completed"},
    )


async def _handle_http_error(_: Request, exc: StarletteHTTPException) -> Response:
    return Response(status_code=exc.status_code, headers=exc.headers)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, _handle_service_error)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _handle_store_error)  # type: ignore[arg-type]
    app.add_exception_handler(StarletteHTTPException, _handle_http_error)  # type: ignore[arg-type]


# --- Module Notes -----------------------------------------------------------
# 401s carry no hint about which part of the credential failed.
