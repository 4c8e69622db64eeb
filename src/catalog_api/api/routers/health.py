"""
catalog_api.api.routers.health

Health and readiness endpoints.

Responsibilities:
- Liveness probe (`/healthz`): records a health check row; 503 when the DB write fails.
- Readiness probe (`/readyz`): DB connectivity validation.
- Disable caching on every `/healthz` response, including errors.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.status import HTTP_200_OK, HTTP_405_METHOD_NOT_ALLOWED

from catalog_api.api.deps import db_session
from catalog_api.db.repositories.health_checks import HealthCheckRepo
from catalog_api.observability.logging import get_logger
from catalog_api.services.errors import BadInput, Unavailable

router = APIRouter()
log = get_logger(__name__)

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "X-Content-Type-Options": "nosniff",
}


def _probe_response(status_code: int) -> Response:
    return Response(status_code=status_code, headers=NO_CACHE_HEADERS)


@router.api_route("/healthz", methods=["GET", "HEAD"])
async def healthz(request: Request, session: AsyncSession = Depends(db_session)) -> Response:
    # Probes take no payload.
    if await request.body():
        return _probe_response(BadInput.status_code)

    try:
        await HealthCheckRepo(session).record()
        await session.commit()
    except (SQLAlchemyError, OSError) as e:
        log.error("health_check_failed", error=str(e))
        return _probe_response(Unavailable.status_code)
    return _probe_response(HTTP_200_OK)


@router.api_route("/healthz", methods=["POST", "PUT", "PATCH", "DELETE", "OPTIONS"])
async def healthz_method_not_allowed() -> Response:
    return _probe_response(HTTP_405_METHOD_NOT_ALLOWED)


@router.get("/readyz")
async def readyz(session: AsyncSession = Depends(db_session)) -> Response:
    try:
        await session.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        log.error("readiness_check_failed", error=str(e))
        return _probe_response(Unavailable.status_code)
    return JSONResponse(content={"status": "ready"}, headers=NO_CACHE_HEADERS)


# --- Module Notes -----------------------------------------------------------
# Kubernetes typically uses /healthz for liveness and /readyz for readiness gating.
